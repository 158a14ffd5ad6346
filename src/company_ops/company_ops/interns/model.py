from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.constants import MEMBER_ROLE_LABEL
from ..core.enums import InternshipStatus
from ..projects.membership import ProjectMembership


@dataclass(frozen=True)
class Intern:
    """Domain entity: Intern (a time-bounded engagement)."""

    intern_id: int
    name: str
    email: str
    start_date: date
    end_date: Optional[date]
    status: InternshipStatus
    university: Optional[str] = None
    degree: Optional[str] = None
    mentor_id: Optional[int] = None
    membership: ProjectMembership = field(default_factory=ProjectMembership)
    termination_date: Optional[datetime] = None
    termination_reason: Optional[str] = None

    @property
    def primary_project(self) -> str:
        return self.membership.primary

    @property
    def is_terminated(self) -> bool:
        return self.status == InternshipStatus.TERMINATED

    def effective_role_in(self, project_name: str) -> str:
        return MEMBER_ROLE_LABEL

    def to_dict(self) -> dict:
        return {
            "id": self.intern_id,
            "name": self.name,
            "email": self.email,
            "university": self.university,
            "degree": self.degree,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "status": self.status.value,
            "mentorId": self.mentor_id,
            "project": self.primary_project,
            "projects": self.membership.as_list(),
            "terminationDate": self.termination_date.isoformat() if self.termination_date else None,
            "terminationReason": self.termination_reason,
        }
