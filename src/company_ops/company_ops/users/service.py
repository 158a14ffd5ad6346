from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import UserRole
from ..core.exceptions import AuthenticationError, NotFoundError
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    email: str
    role: UserRole
    employee_id: Optional[int]
    intern_id: Optional[int]

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "employeeId": self.employee_id,
            "internId": self.intern_id,
        }


class AuthService:
    """Use case: authenticate user (login) and manage passwords."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = (email or "").strip().lower()
        user = self._users.get_by_email(email) if email else None
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=user.role,
            employee_id=user.employee_id,
            intern_id=user.intern_id,
        )

    def get_session_user(self, user_id: int) -> SessionUser:
        user = self._users.get_by_id(int(user_id))
        if not user or not user.is_active:
            raise NotFoundError("User not found")
        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=user.role,
            employee_id=user.employee_id,
            intern_id=user.intern_id,
        )

    def change_password(self, user_id: int, *, current_password: str, new_password: str) -> None:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        if not check_password_hash(user.password_hash, current_password or ""):
            raise AuthenticationError("Current password is incorrect")
        require_min_length(require_non_empty(new_password, "New password"), "New password", 6)
        self._users.update_password(user.user_id, generate_password_hash(new_password))
