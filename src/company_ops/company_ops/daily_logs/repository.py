from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.constants import DAILY_LOG_LIST_LIMIT
from ..core.enums import LogCategory, PersonKind
from .model import DailyLog


class DailyLogRepository(Protocol):
    def create(
        self,
        *,
        project_id: int,
        person_kind: PersonKind,
        person_id: int,
        log_date: date,
        summary: str,
        category: LogCategory,
        hours_worked: Optional[float],
    ) -> int:
        raise NotImplementedError

    def get(self, log_id: int) -> Optional[DailyLog]:
        raise NotImplementedError

    def list_logs(
        self,
        *,
        project_id: Optional[int] = None,
        person_kind: Optional[PersonKind] = None,
        person_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = DAILY_LOG_LIST_LIMIT,
    ) -> Sequence[DailyLog]:
        """Newest day first; the date bounds are inclusive."""
        raise NotImplementedError

    def update(
        self,
        log_id: int,
        *,
        summary: Optional[str] = None,
        category: Optional[LogCategory] = None,
        hours_worked: Optional[float] = None,
    ) -> bool:
        """None leaves a field unchanged."""
        raise NotImplementedError

    def delete(self, log_id: int) -> bool:
        raise NotImplementedError
