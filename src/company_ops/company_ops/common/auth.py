from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import PersonKind, UserRole


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Authentication required"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Authentication required"}), 401

        if session.get("role") != UserRole.ADMIN.value:
            return jsonify({"error": "Admin access required"}), 403

        return view(*args, **kwargs)

    return wrapper


def current_person():
    """(PersonKind, id) of the logged-in employee or intern, else None."""
    if session.get("employee_id"):
        return PersonKind.EMPLOYEE, int(session["employee_id"])
    if session.get("intern_id"):
        return PersonKind.INTERN, int(session["intern_id"])
    return None


def is_admin() -> bool:
    return session.get("role") == UserRole.ADMIN.value
