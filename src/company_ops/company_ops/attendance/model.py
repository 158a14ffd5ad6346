from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus, PersonKind


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one person's attendance for one calendar day.

    Check-in/out are stored exactly as punched; see ``time_utils`` for parsing.
    """

    attendance_id: int
    person_kind: PersonKind
    person_id: int
    work_date: date
    status: AttendanceStatus
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    person_name: Optional[str] = None

    @property
    def person_key(self) -> tuple[PersonKind, int]:
        return self.person_kind, self.person_id
