from __future__ import annotations

from typing import Optional, Sequence, Union

from ..common.datetime_utils import parse_optional_date
from ..common.validators import optional_text, require_date_order, require_non_empty
from ..core.enums import RequestStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LeaveRequest
from .repository import LeaveRequestRepository


class LeaveRequestService:
    def __init__(self, requests: LeaveRequestRepository, employees: EmployeeRepository):
        self._requests = requests
        self._employees = employees

    def _get(self, request_id: int) -> LeaveRequest:
        req = self._requests.get(int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        return req

    def create(self, *, employee_id: int, start_date: str, end_date: str, reason: str) -> LeaveRequest:
        reason = require_non_empty(reason, "Reason")
        start = parse_optional_date(start_date, "Start date")
        end = parse_optional_date(end_date, "End date")
        if start is None or end is None:
            raise ValidationError("Start date and end date are required")
        require_date_order(start, end)

        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")

        request_id = self._requests.create(employee_id=int(employee_id), start_date=start, end_date=end, reason=reason)
        return self._get(request_id)

    def list_requests(
        self,
        *,
        status: Optional[Union[RequestStatus, str]] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        wanted = None
        if status:
            try:
                wanted = RequestStatus(status)
            except ValueError:
                raise ValidationError("Invalid status")
        return self._requests.list_requests(status=wanted, employee_id=employee_id)

    def decide(
        self,
        request_id: int,
        *,
        status: Union[RequestStatus, str],
        admin_comment: Optional[str] = None,
    ) -> LeaveRequest:
        try:
            status = RequestStatus(status)
        except ValueError:
            raise ValidationError("Invalid status")

        req = self._get(request_id)
        self._requests.decide(req.request_id, status=status, admin_comment=optional_text(admin_comment))
        return self._get(req.request_id)

    def delete(self, request_id: int) -> None:
        req = self._get(request_id)
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Can only delete pending leave requests")
        if not self._requests.delete_pending(req.request_id):
            raise ValidationError("Can only delete pending leave requests")
