from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: int
    start_date: date
    end_date: date
    reason: str
    status: RequestStatus
    created_at: Optional[datetime] = None
    admin_comment: Optional[str] = None
    employee_name: Optional[str] = None

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "days": self.days,
            "reason": self.reason,
            "status": self.status.value,
            "adminComment": self.admin_comment,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
