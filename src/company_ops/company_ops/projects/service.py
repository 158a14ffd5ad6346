from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence, Union

from ..common.validators import optional_text, require_non_empty
from ..core.enums import EmployeeRole, InternshipStatus, ProjectStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..interns.duration import get_internship_status
from ..interns.repository import InternRepository
from .membership import ProjectMembership
from .model import Project
from .repository import ProjectRepository

_TEAM_INTERN_STATUSES = (InternshipStatus.UPCOMING, InternshipStatus.ACTIVE)


def ensure_projects_exist(projects: ProjectRepository, membership: ProjectMembership) -> None:
    missing = projects.missing_names(membership.as_list())
    if missing:
        raise NotFoundError(f'Project "{missing[0]}" not found')


class ProjectService:
    def __init__(self, projects: ProjectRepository, employees: EmployeeRepository, interns: InternRepository):
        self._projects = projects
        self._employees = employees
        self._interns = interns

    def list_projects(self) -> Sequence[Project]:
        return self._projects.list_all()

    def get_project(self, name: str) -> Project:
        project = self._projects.get_by_name((name or "").strip())
        if not project:
            raise NotFoundError(f'Project "{name}" not found')
        return project

    def create_project(
        self,
        *,
        name: str,
        description: Optional[str] = None,
        status: Union[ProjectStatus, str] = ProjectStatus.ACTIVE,
    ) -> Project:
        name = require_non_empty(name, "Project name")
        try:
            status = ProjectStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown project status: {status}")
        # Duplicate names surface as ConflictError from the repository.
        self._projects.create(name=name, description=optional_text(description), status=status)
        return self.get_project(name)

    def team_members(self, name: str, *, now: Optional[datetime] = None) -> list[dict]:
        """Active employees and current interns whose projects include ``name``.

        Intern status is derived from the internship dates, not the stored value.
        """
        project = self.get_project(name)

        members: list[dict] = []
        for emp in self._employees.list_all(active_only=True):
            if not emp.membership.includes(project.name):
                continue
            members.append(
                {
                    "id": emp.employee_id,
                    "name": emp.name,
                    "email": emp.email,
                    "type": "Employee",
                    "role": emp.effective_role_in(project.name),
                    "isPrimary": emp.membership.is_primary(project.name),
                }
            )

        for intern in self._interns.list_all():
            status = get_internship_status(intern.start_date, intern.end_date, intern.status, now=now)
            if status not in _TEAM_INTERN_STATUSES or not intern.membership.includes(project.name):
                continue
            members.append(
                {
                    "id": intern.intern_id,
                    "name": intern.name,
                    "email": intern.email,
                    "type": "Intern",
                    "role": intern.effective_role_in(project.name),
                    "university": intern.university,
                    "status": status.value,
                }
            )
        return members

    def team_lead(self, name: str, *, now: Optional[datetime] = None) -> Optional[dict]:
        for member in self.team_members(name, now=now):
            if member["type"] == "Employee" and member["isPrimary"] and member["role"] == EmployeeRole.TEAM_LEAD.value:
                return member
        return None
