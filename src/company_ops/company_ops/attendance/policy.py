from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..core.constants import DEFAULT_LATE_CUTOFF
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class LateCutoffPolicy:
    """Decides the punch-in status against a fixed wall-clock cutoff.

    The cutoff minute itself still counts as on time (09:30 is Present, 09:31 is Late).
    """

    cutoff: time = DEFAULT_LATE_CUTOFF

    def for_punch_in(self, now: datetime) -> AttendanceStatus:
        punched = now.time().replace(second=0, microsecond=0)
        if punched > self.cutoff:
            return AttendanceStatus.LATE
        return AttendanceStatus.PRESENT
