from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import UserRole


@dataclass(frozen=True)
class User:
    """Domain entity: login account.

    Note: Plain data object, no DB access code here.
    """

    user_id: int
    email: str
    name: str
    password_hash: str
    role: UserRole
    employee_id: Optional[int] = None
    intern_id: Optional[int] = None
    is_active: bool = True
