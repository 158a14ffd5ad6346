from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import RequestStatus
from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def create(self, *, employee_id: int, start_date: date, end_date: date, reason: str) -> int:
        raise NotImplementedError

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide(self, request_id: int, *, status: RequestStatus, admin_comment: Optional[str] = None) -> bool:
        raise NotImplementedError

    def delete_pending(self, request_id: int) -> bool:
        """Delete only while still Pending."""
        raise NotImplementedError
