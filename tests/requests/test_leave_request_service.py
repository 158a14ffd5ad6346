from __future__ import annotations

from dataclasses import replace

import pytest

from src.company_ops.company_ops.core.enums import RequestStatus
from src.company_ops.company_ops.core.exceptions import NotFoundError, ValidationError
from src.company_ops.company_ops.requests.model import LeaveRequest
from src.company_ops.company_ops.requests.service import LeaveRequestService


class FakeEmployees:
    def get_by_id(self, employee_id):
        return object() if employee_id in (1, 2) else None


class FakeLeaveRequests:
    def __init__(self):
        self._next_id = 1
        self.by_id: dict[int, LeaveRequest] = {}

    def create(self, *, employee_id, start_date, end_date, reason):
        rid = self._next_id
        self._next_id += 1
        self.by_id[rid] = LeaveRequest(rid, employee_id, start_date, end_date, reason, RequestStatus.PENDING)
        return rid

    def get(self, request_id):
        return self.by_id.get(request_id)

    def list_requests(self, *, status=None, employee_id=None, limit=200):
        return [
            r
            for r in self.by_id.values()
            if (status is None or r.status == status) and (employee_id is None or r.employee_id == employee_id)
        ][:limit]

    def decide(self, request_id, *, status, admin_comment=None):
        r = self.by_id[request_id]
        self.by_id[request_id] = replace(r, status=status, admin_comment=admin_comment or r.admin_comment)
        return True

    def delete_pending(self, request_id):
        if self.by_id[request_id].status != RequestStatus.PENDING:
            return False
        del self.by_id[request_id]
        return True


@pytest.fixture
def repo():
    return FakeLeaveRequests()


@pytest.fixture
def svc(repo):
    return LeaveRequestService(repo, FakeEmployees())


def test_create_and_days(svc):
    req = svc.create(employee_id=1, start_date="2026-03-20", end_date="2026-03-22", reason="  Family trip ")
    assert req.status == RequestStatus.PENDING
    assert req.reason == "Family trip"
    assert req.days == 3
    assert req.to_dict()["startDate"] == "2026-03-20"


def test_single_day_leave(svc):
    req = svc.create(employee_id=1, start_date="2026-03-20", end_date="2026-03-20", reason="Doctor")
    assert req.days == 1


def test_create_validation(svc):
    with pytest.raises(ValidationError):
        svc.create(employee_id=1, start_date="2026-03-22", end_date="2026-03-20", reason="Oops")
    with pytest.raises(ValidationError):
        svc.create(employee_id=1, start_date="", end_date="2026-03-20", reason="Oops")
    with pytest.raises(ValidationError):
        svc.create(employee_id=1, start_date="2026-03-20", end_date="2026-03-21", reason=" ")
    with pytest.raises(ValidationError):
        svc.create(employee_id=1, start_date="20/03/2026", end_date="2026-03-21", reason="Oops")
    with pytest.raises(NotFoundError):
        svc.create(employee_id=9, start_date="2026-03-20", end_date="2026-03-21", reason="Oops")


def test_decide_and_filter(svc):
    a = svc.create(employee_id=1, start_date="2026-03-20", end_date="2026-03-20", reason="A")
    svc.create(employee_id=2, start_date="2026-03-21", end_date="2026-03-21", reason="B")

    approved = svc.decide(a.request_id, status="Approved", admin_comment="Enjoy")
    assert approved.status == RequestStatus.APPROVED
    assert approved.admin_comment == "Enjoy"

    assert [r.reason for r in svc.list_requests(status="Pending")] == ["B"]
    assert [r.reason for r in svc.list_requests(employee_id=1)] == ["A"]

    with pytest.raises(ValidationError):
        svc.decide(a.request_id, status="Maybe")
    with pytest.raises(ValidationError):
        svc.list_requests(status="Maybe")
    with pytest.raises(NotFoundError):
        svc.decide(404, status="Rejected")


def test_only_pending_requests_can_be_deleted(svc, repo):
    a = svc.create(employee_id=1, start_date="2026-03-20", end_date="2026-03-20", reason="A")
    b = svc.create(employee_id=1, start_date="2026-03-23", end_date="2026-03-23", reason="B")
    svc.decide(b.request_id, status="Rejected")

    svc.delete(a.request_id)
    assert a.request_id not in repo.by_id

    with pytest.raises(ValidationError):
        svc.delete(b.request_id)
    with pytest.raises(NotFoundError):
        svc.delete(a.request_id)
