from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence, Union

from ..common.datetime_utils import now_local, parse_optional_date
from ..common.validators import optional_text, require_date_order, require_non_empty
from ..core.enums import LogCategory, PersonKind
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..interns.repository import InternRepository
from ..projects.model import Project
from ..projects.repository import ProjectRepository
from .model import DailyLog
from .repository import DailyLogRepository

logger = logging.getLogger(__name__)

MAX_HOURS_PER_DAY = 24


def _coerce_kind(value: Union[PersonKind, str, None]) -> Optional[PersonKind]:
    """Person type filter; accepts ``employee``/``intern`` in any case, ``all`` means no filter."""
    if isinstance(value, PersonKind):
        return value
    if not value or str(value).lower() == "all":
        return None
    try:
        return PersonKind(str(value).capitalize())
    except ValueError:
        raise ValidationError(f"Unknown person type: {value}")


def _parse_hours(value) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Hours worked must be a number")
    if not 0 <= hours <= MAX_HOURS_PER_DAY:
        raise ValidationError(f"Hours worked must be between 0 and {MAX_HOURS_PER_DAY}")
    return hours


class DailyLogService:
    """Use cases: per-project daily work logs of employees and interns."""

    def __init__(
        self,
        logs: DailyLogRepository,
        projects: ProjectRepository,
        employees: EmployeeRepository,
        interns: InternRepository,
    ):
        self._logs = logs
        self._projects = projects
        self._employees = employees
        self._interns = interns

    def _project(self, name: str) -> Project:
        project = self._projects.get_by_name((name or "").strip())
        if not project:
            raise NotFoundError("Project not found")
        return project

    def _require_person(self, kind: PersonKind, person_id: int) -> None:
        if kind == PersonKind.EMPLOYEE:
            found = self._employees.get_by_id(person_id)
        else:
            found = self._interns.get_by_id(person_id)
        if not found:
            raise NotFoundError(f"{kind.value} not found")

    def get_log(self, log_id: int) -> DailyLog:
        log = self._logs.get(int(log_id))
        if not log:
            raise NotFoundError("Daily log not found")
        return log

    def add_log(
        self,
        project: str,
        *,
        person_kind: Union[PersonKind, str],
        person_id: int,
        summary: str,
        hours_worked=None,
        category: Optional[str] = None,
        log_date: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> DailyLog:
        target = self._project(project)
        kind = _coerce_kind(person_kind)
        if kind is None:
            raise ValidationError("Person type is required")
        try:
            person_id = int(person_id)
        except (TypeError, ValueError):
            raise ValidationError("Person ID must be an integer")
        summary = require_non_empty(summary, "Summary")
        hours = _parse_hours(hours_worked)
        day = parse_optional_date(log_date, "Date") or (now or now_local()).date()

        # Unknown categories are filed under General.
        try:
            log_category = LogCategory(category) if category else LogCategory.GENERAL
        except ValueError:
            logger.debug("Unknown log category %r, using General", category)
            log_category = LogCategory.GENERAL

        self._require_person(kind, person_id)
        log_id = self._logs.create(
            project_id=target.project_id,
            person_kind=kind,
            person_id=person_id,
            log_date=day,
            summary=summary,
            category=log_category,
            hours_worked=hours,
        )
        return self.get_log(log_id)

    def project_logs(
        self,
        project: str,
        *,
        person_kind: Optional[Union[PersonKind, str]] = None,
        person_id: Optional[int] = None,
        day: Optional[str] = None,
    ) -> Sequence[DailyLog]:
        target = self._project(project)
        on = parse_optional_date(day, "Date")
        return self._logs.list_logs(
            project_id=target.project_id,
            person_kind=_coerce_kind(person_kind),
            person_id=person_id,
            start_date=on,
            end_date=on,
        )

    def list_logs(
        self,
        *,
        project: Optional[str] = None,
        day: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        person_type: Optional[str] = None,
    ) -> Sequence[DailyLog]:
        """All logs across projects. A single ``day`` wins over a ``date_from``/``date_to`` range."""
        on = parse_optional_date(day, "Date")
        if on:
            start = end = on
        else:
            start = parse_optional_date(date_from, "From")
            end = parse_optional_date(date_to, "To")
            if start and end:
                require_date_order(start, end)

        project_id = None
        if project and project != "all":
            project_id = self._project(project).project_id
        return self._logs.list_logs(
            project_id=project_id,
            person_kind=_coerce_kind(person_type),
            start_date=start,
            end_date=end,
        )

    def update_log(
        self,
        log_id: int,
        *,
        summary: Optional[str] = None,
        hours_worked=None,
        category: Optional[str] = None,
    ) -> DailyLog:
        log = self.get_log(log_id)
        new_category = None
        if category:
            try:
                new_category = LogCategory(category)
            except ValueError:
                raise ValidationError(f"Unknown log category: {category}")
        self._logs.update(
            log.log_id,
            summary=optional_text(summary),
            category=new_category,
            hours_worked=_parse_hours(hours_worked),
        )
        return self.get_log(log.log_id)

    def delete_log(self, log_id: int) -> None:
        log = self.get_log(log_id)
        self._logs.delete(log.log_id)
