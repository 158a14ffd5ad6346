from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.auth import admin_required, login_required
from ..common.http import error_response, read_json
from ..core.exceptions import DomainError, NotFoundError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    def list_employees():
        try:
            active_only = request.args.get("active") in ("1", "true")
            employees = container.employee_service.list_employees(active_only=active_only)
            return jsonify([e.to_dict() for e in employees])
        except Exception:
            logger.exception("Error fetching employees")
            return jsonify({"error": "Failed to fetch employees"}), 500

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @admin_required
    def create_employee():
        body = read_json()
        try:
            employee = container.employee_service.create_employee(
                name=body.get("name", ""),
                email=body.get("email", ""),
                role=body.get("role", ""),
                project=body.get("project"),
            )
            return jsonify(employee.to_dict()), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error creating employee")
            return jsonify({"error": "Failed to create employee"}), 500

    @app.route("/api/employees/me", methods=["GET"], endpoint="my_employee_profile")
    @login_required
    def my_employee_profile():
        try:
            employee_id = session.get("employee_id")
            if employee_id:
                return jsonify(container.employee_service.get_employee(int(employee_id)).to_dict())

            # Accounts created before the employee link existed are matched by email.
            s_user = container.auth_service.get_session_user(int(session["user_id"]))
            employee = container.employee_service.find_by_email(s_user.email)
            if not employee:
                raise NotFoundError("Employee not found")
            return jsonify(employee.to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching employee profile")
            return jsonify({"error": "Failed to fetch employee"}), 500

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(employee_id: int):
        try:
            return jsonify(container.employee_service.get_employee(employee_id).to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching employee")
            return jsonify({"error": "Failed to fetch employee"}), 500

    @app.route("/api/employees/<int:employee_id>/assign-project", methods=["POST"], endpoint="assign_employee_projects")
    @admin_required
    def assign_employee_projects(employee_id: int):
        body = read_json()
        try:
            employee = container.employee_service.assign_projects(
                employee_id,
                project=body.get("project"),
                projects=body.get("projects"),
            )
            return jsonify(employee.to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error assigning project")
            return jsonify({"error": "Failed to assign project"}), 500
