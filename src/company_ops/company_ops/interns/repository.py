from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import InternshipStatus
from ..projects.membership import ProjectMembership
from .model import Intern


class InternRepository(Protocol):
    def list_all(
        self,
        *,
        mentor_id: Optional[int] = None,
        project: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Sequence[Intern]:
        raise NotImplementedError

    def get_by_id(self, intern_id: int) -> Optional[Intern]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Intern]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        university: Optional[str],
        degree: Optional[str],
        start_date: date,
        end_date: Optional[date],
        status: InternshipStatus,
        mentor_id: Optional[int],
        membership: ProjectMembership,
    ) -> int:
        raise NotImplementedError

    def update_status(self, intern_id: int, status: InternshipStatus) -> bool:
        raise NotImplementedError

    def terminate(self, intern_id: int, *, termination_date: datetime, reason: Optional[str]) -> bool:
        raise NotImplementedError

    def save_membership(self, intern_id: int, membership: ProjectMembership) -> bool:
        raise NotImplementedError

    def set_mentor(self, intern_id: int, mentor_id: int) -> bool:
        raise NotImplementedError
