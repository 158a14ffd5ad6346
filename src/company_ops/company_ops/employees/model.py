from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.constants import MEMBER_ROLE_LABEL
from ..core.enums import EmployeeRole
from ..projects.membership import ProjectMembership


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: Plain data object, no DB access code here.
    """

    employee_id: int
    name: str
    email: str
    login_email: Optional[str]
    role: EmployeeRole
    membership: ProjectMembership = field(default_factory=ProjectMembership)
    is_active: bool = True
    enrollment_date: Optional[date] = None

    @property
    def primary_project(self) -> str:
        return self.membership.primary

    @property
    def is_team_lead(self) -> bool:
        return self.role == EmployeeRole.TEAM_LEAD and self.membership.is_assigned

    def effective_role_in(self, project_name: str) -> str:
        """Role shown on a project's team list.

        The stored role only applies to the primary project; on any other
        project the employee is a plain member.
        """
        if self.membership.is_primary(project_name):
            return self.role.value
        return MEMBER_ROLE_LABEL

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "email": self.email,
            "loginEmail": self.login_email,
            "role": self.role.value,
            "project": self.primary_project,
            "projects": self.membership.as_list(),
            "isActive": self.is_active,
            "enrollmentDate": self.enrollment_date.isoformat() if self.enrollment_date else None,
        }
