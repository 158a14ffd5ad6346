from __future__ import annotations

from typing import ContextManager, Optional, Protocol, Sequence

from ..core.enums import EmployeeRole
from ..projects.membership import ProjectMembership
from .model import Employee


class EmployeeUnitOfWork(Protocol):
    """Reads and writes that must commit together (team-lead succession)."""

    def lock_project(self, project_name: str) -> None:
        raise NotImplementedError

    def get_for_update(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def find_team_lead(self, project_name: str, *, exclude_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def set_role(self, employee_id: int, role: EmployeeRole) -> None:
        raise NotImplementedError

    def save_assignment(self, employee_id: int, *, membership: ProjectMembership, role: EmployeeRole) -> None:
        raise NotImplementedError


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def list_all(self, *, active_only: bool = False) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def find_by_email(self, email: str) -> Optional[Employee]:
        """Match on the contact email or the login email."""
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        login_email: Optional[str],
        role: EmployeeRole,
        membership: ProjectMembership,
    ) -> int:
        raise NotImplementedError

    def unit_of_work(self) -> ContextManager[EmployeeUnitOfWork]:
        raise NotImplementedError
