from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LogCategory, PersonKind


@dataclass(frozen=True)
class DailyLog:
    """One person's summary of a day of work on a project."""

    log_id: int
    project_id: int
    person_kind: PersonKind
    person_id: int
    log_date: date
    summary: str
    category: LogCategory = LogCategory.GENERAL
    hours_worked: Optional[float] = None
    created_at: Optional[datetime] = None
    project_name: Optional[str] = None
    person_name: Optional[str] = None

    @property
    def person_key(self) -> tuple[PersonKind, int]:
        return self.person_kind, self.person_id

    def to_dict(self) -> dict:
        return {
            "id": self.log_id,
            "projectId": self.project_id,
            "project": self.project_name,
            "personType": self.person_kind.value,
            "personId": self.person_id,
            "personName": self.person_name,
            "date": self.log_date.isoformat(),
            "summary": self.summary,
            "hoursWorked": self.hours_worked,
            "category": self.category.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
