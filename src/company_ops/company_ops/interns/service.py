from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence, Union

from ..common.datetime_utils import now_local, parse_optional_date
from ..common.validators import optional_text, require_date_order, require_non_empty
from ..core.enums import InternshipStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..projects.service import ensure_projects_exist
from ..projects.membership import ProjectMembership
from ..projects.repository import ProjectRepository
from .duration import calculate_duration_in_days, calculate_internship_duration, get_internship_status
from .model import Intern
from .repository import InternRepository

logger = logging.getLogger(__name__)


class InternService:
    """Use cases: intern onboarding, lifecycle status and project assignment."""

    def __init__(self, interns: InternRepository, projects: ProjectRepository, employees: EmployeeRepository):
        self._interns = interns
        self._projects = projects
        self._employees = employees

    def _refresh_status(self, intern: Intern, now: datetime) -> Intern:
        # Status is derived on read; Terminated stays as stored.
        status = get_internship_status(intern.start_date, intern.end_date, intern.status, now=now)
        if status == intern.status:
            return intern
        self._interns.update_status(intern.intern_id, status)
        return replace(intern, status=status)

    def list_interns(
        self,
        *,
        status: Optional[Union[InternshipStatus, str]] = None,
        mentor_id: Optional[int] = None,
        project: Optional[str] = None,
        search: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[Intern]:
        now = now or now_local()
        wanted = None
        if status:
            try:
                wanted = InternshipStatus(status)
            except ValueError:
                raise ValidationError(f"Unknown internship status: {status}")

        project = None if project in (None, "", "all") else project
        interns = self._interns.list_all(mentor_id=mentor_id, project=project, search=optional_text(search))
        refreshed = [self._refresh_status(i, now) for i in interns]
        if wanted is None:
            return refreshed
        return [i for i in refreshed if i.status == wanted]

    def get_intern(self, intern_id: int, *, now: Optional[datetime] = None) -> Intern:
        intern = self._interns.get_by_id(int(intern_id))
        if not intern:
            raise NotFoundError("Intern not found")
        return self._refresh_status(intern, now or now_local())

    def describe(self, intern: Intern, *, now: Optional[datetime] = None) -> dict:
        """Intern payload with elapsed-time fields for list/detail views."""
        end = intern.end_date
        if intern.is_terminated and intern.termination_date:
            end = intern.termination_date
        data = intern.to_dict()
        data["duration"] = calculate_internship_duration(intern.start_date, end, now=now)
        data["durationDays"] = calculate_duration_in_days(intern.start_date, end, now=now)
        return data

    def create_intern(
        self,
        *,
        name: str,
        email: str,
        start_date: str,
        end_date: Optional[str] = None,
        university: Optional[str] = None,
        degree: Optional[str] = None,
        mentor_id: Optional[int] = None,
        project: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Intern:
        name = require_non_empty(name, "Name")
        email = require_non_empty(email, "Email").lower()
        start = parse_optional_date(start_date, "Start date")
        if start is None:
            raise ValidationError("Name, email, and start date are required")
        end = parse_optional_date(end_date, "End date")
        require_date_order(start, end, strict=True)

        if self._interns.get_by_email(email):
            raise ConflictError("An intern with this email already exists")

        membership = ProjectMembership.of(project) if project else ProjectMembership()
        ensure_projects_exist(self._projects, membership)

        intern_id = self._interns.create(
            name=name,
            email=email,
            university=optional_text(university),
            degree=optional_text(degree),
            start_date=start,
            end_date=end,
            status=get_internship_status(start, end, now=now or now_local()),
            mentor_id=int(mentor_id) if mentor_id else None,
            membership=membership,
        )
        return self.get_intern(intern_id, now=now)

    def terminate(self, intern_id: int, *, reason: Optional[str] = None, now: Optional[datetime] = None) -> Intern:
        intern = self._interns.get_by_id(int(intern_id))
        if not intern:
            raise NotFoundError("Intern not found")
        if intern.is_terminated:
            raise ValidationError("Internship is already terminated")

        self._interns.terminate(intern.intern_id, termination_date=now or now_local(), reason=optional_text(reason))
        logger.info("Internship %s terminated", intern.intern_id)
        return self.get_intern(intern.intern_id, now=now)

    def assign_projects(
        self,
        intern_id: int,
        *,
        project: Optional[str] = None,
        projects: Optional[Sequence[str]] = None,
    ) -> Intern:
        membership = ProjectMembership.from_request(project=project, projects=projects)
        ensure_projects_exist(self._projects, membership)

        intern = self._interns.get_by_id(int(intern_id))
        if not intern:
            raise NotFoundError("Intern not found")
        self._interns.save_membership(intern.intern_id, membership)
        return replace(intern, membership=membership)

    def assign_mentor(self, intern_id: int, mentor_id: Optional[int]):
        """Assign or change the intern's mentor. Returns ``(intern, mentor)``."""
        if not mentor_id:
            raise ValidationError("Mentor ID is required")
        try:
            mentor_id = int(mentor_id)
        except (TypeError, ValueError):
            raise ValidationError("Mentor ID must be an integer")
        mentor = self._employees.get_by_id(mentor_id)
        if not mentor:
            raise NotFoundError("Mentor not found")

        intern = self._interns.get_by_id(int(intern_id))
        if not intern:
            raise NotFoundError("Intern not found")
        self._interns.set_mentor(intern.intern_id, mentor.employee_id)
        logger.info("Intern %s mentor set to employee %s", intern.intern_id, mentor.employee_id)
        return replace(intern, mentor_id=mentor.employee_id), mentor
