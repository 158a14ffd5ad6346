from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, PersonKind
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_person_and_date(
        self, person_kind: PersonKind, person_id: int, work_date: date
    ) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_records(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        person_kind: Optional[PersonKind] = None,
        person_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        person_kind: PersonKind,
        person_id: int,
        work_date: date,
        status: AttendanceStatus,
        check_in: Optional[str],
        check_out: Optional[str] = None,
    ) -> int:
        """Insert a record; a second record for the same person/day raises ConflictError."""
        raise NotImplementedError

    def set_check_out(self, attendance_id: int, check_out: str) -> bool:
        """Set check-out only if it is still empty."""
        raise NotImplementedError

    def update(
        self,
        attendance_id: int,
        *,
        status: Optional[AttendanceStatus] = None,
        check_in: Optional[str] = None,
        check_out: Optional[str] = None,
    ) -> bool:
        """Admin override; None fields are left unchanged."""
        raise NotImplementedError
