from __future__ import annotations

import logging
import re
from typing import Optional, Sequence, Union

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LOGIN_EMAIL_DOMAIN
from ..core.enums import BASELINE_ROLE, EmployeeRole
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..projects.membership import ProjectMembership
from ..projects.repository import ProjectRepository
from ..projects.service import ensure_projects_exist
from .model import Employee
from .repository import EmployeeRepository
from .succession import plan_lead_succession

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use cases: employee directory and project assignment."""

    def __init__(
        self,
        employees: EmployeeRepository,
        projects: ProjectRepository,
        *,
        login_email_domain: str = DEFAULT_LOGIN_EMAIL_DOMAIN,
    ):
        self._employees = employees
        self._projects = projects
        self._login_email_domain = login_email_domain

    def list_employees(self, *, active_only: bool = False) -> Sequence[Employee]:
        return self._employees.list_all(active_only=active_only)

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def find_by_email(self, email: str) -> Optional[Employee]:
        email = (email or "").strip().lower()
        if not email:
            return None
        return self._employees.find_by_email(email)

    def login_email_for(self, name: str) -> str:
        local_part = re.sub(r"\s+", "", name.lower())
        return f"{local_part}@{self._login_email_domain}"

    def create_employee(
        self,
        *,
        name: str,
        email: str,
        role: Union[EmployeeRole, str],
        project: Optional[str] = None,
    ) -> Employee:
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            email = f"{email}@gmail.com"
        try:
            role = EmployeeRole(role)
        except ValueError:
            raise ValidationError(f"Unknown role: {role}")

        login_email = self.login_email_for(name)
        if self._employees.find_by_email(email) or self._employees.find_by_email(login_email):
            raise ConflictError("Employee with this email already exists")

        membership = ProjectMembership.of(project) if project else ProjectMembership()
        makes_lead = role == EmployeeRole.TEAM_LEAD
        if makes_lead and not membership.is_assigned:
            raise ValidationError("A team lead needs a project")
        ensure_projects_exist(self._projects, membership)

        # Leads are only made through assignment, which demotes the incumbent.
        employee_id = self._employees.create(
            name=name,
            email=email,
            login_email=login_email,
            role=BASELINE_ROLE if makes_lead else role,
            membership=ProjectMembership() if makes_lead else membership,
        )
        if makes_lead:
            return self.assign_projects(employee_id, projects=membership.as_list())
        return self.get_employee(employee_id)

    def assign_projects(
        self,
        employee_id: int,
        *,
        project: Optional[str] = None,
        projects: Optional[Sequence[str]] = None,
    ) -> Employee:
        """Set the employee's projects; the first becomes primary and makes them its team lead.

        Runs as one unit of work keyed by the primary project so two concurrent
        assignments cannot both keep a lead for the same project.
        """
        membership = ProjectMembership.from_request(project=project, projects=projects)
        ensure_projects_exist(self._projects, membership)

        employee_id = int(employee_id)
        with self._employees.unit_of_work() as uow:
            if membership.is_assigned:
                uow.lock_project(membership.primary)

            employee = uow.get_for_update(employee_id)
            if not employee:
                raise NotFoundError("Employee not found")

            incumbent = None
            if membership.is_assigned:
                incumbent = uow.find_team_lead(membership.primary, exclude_id=employee_id)

            plan = plan_lead_succession(employee, membership, incumbent)
            if plan.demote_id is not None:
                uow.set_role(plan.demote_id, plan.demoted_role)
                logger.info(
                    "Team lead of %s changed: employee %s -> %s",
                    plan.project, plan.demote_id, employee_id,
                )

            uow.save_assignment(employee_id, membership=membership, role=plan.new_role)

        return self.get_employee(employee_id)
