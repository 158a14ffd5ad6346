from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from src.company_ops.company_ops.attendance.model import AttendanceRecord
from src.company_ops.company_ops.attendance.policy import LateCutoffPolicy
from src.company_ops.company_ops.attendance.service import AttendanceService
from src.company_ops.company_ops.core.enums import AttendanceStatus, PersonKind
from src.company_ops.company_ops.core.exceptions import ConflictError, NotFoundError, ValidationError


class InMemoryPeople:
    def __init__(self, ids):
        self.ids = set(ids)

    def get_by_id(self, person_id):
        return object() if person_id in self.ids else None


class InMemoryAttendance:
    def __init__(self):
        self._by_id: dict[int, AttendanceRecord] = {}
        self._id = 0
        self.hide_existing = False

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._by_id.get(attendance_id)

    def get_for_person_and_date(self, person_kind, person_id, work_date):
        if self.hide_existing:
            return None
        for r in self._by_id.values():
            if r.person_key == (person_kind, person_id) and r.work_date == work_date:
                return r
        return None

    def list_records(self, *, start_date=None, end_date=None, person_kind=None, person_id=None):
        out = []
        for r in self._by_id.values():
            if start_date and r.work_date < start_date:
                continue
            if end_date and r.work_date > end_date:
                continue
            if person_kind and r.person_kind != person_kind:
                continue
            if person_id is not None and r.person_id != person_id:
                continue
            out.append(r)
        return out

    def create(self, *, person_kind, person_id, work_date, status, check_in=None, check_out=None):
        # Mirrors the (person, day) unique key.
        for r in self._by_id.values():
            if r.person_key == (person_kind, person_id) and r.work_date == work_date:
                raise ConflictError("Attendance already exists for this date")
        self._id += 1
        self._by_id[self._id] = AttendanceRecord(
            self._id, person_kind, person_id, work_date, status, check_in, check_out, f"P{person_id}"
        )
        return self._id

    def set_check_out(self, attendance_id, check_out):
        r = self._by_id[attendance_id]
        if r.check_out:
            return False
        self._by_id[attendance_id] = replace(r, check_out=check_out)
        return True

    def update(self, attendance_id, *, status=None, check_in=None, check_out=None):
        r = self._by_id[attendance_id]
        self._by_id[attendance_id] = replace(
            r,
            status=status or r.status,
            check_in=check_in or r.check_in,
            check_out=check_out or r.check_out,
        )
        return True


@pytest.fixture
def repo():
    return InMemoryAttendance()


@pytest.fixture
def service(repo):
    return AttendanceService(repo, InMemoryPeople({1, 2}), InMemoryPeople({7}))


@pytest.mark.parametrize(
    "clock, expected",
    [
        (time(8, 59), AttendanceStatus.PRESENT),
        (time(9, 30), AttendanceStatus.PRESENT),
        (time(9, 30, 59), AttendanceStatus.PRESENT),
        (time(9, 31), AttendanceStatus.LATE),
        (time(14, 0), AttendanceStatus.LATE),
    ],
)
def test_punch_in_status_against_cutoff(service, clock, expected):
    record = service.punch_in(PersonKind.EMPLOYEE, 1, now=datetime.combine(date(2026, 3, 16), clock))
    assert record.status == expected
    assert record.check_in == clock.strftime("%H:%M:%S")


def test_cutoff_is_configurable(repo):
    service = AttendanceService(repo, InMemoryPeople({1}), InMemoryPeople(()), policy=LateCutoffPolicy(time(9, 0)))
    record = service.punch_in("Employee", 1, now=datetime(2026, 3, 16, 9, 1))
    assert record.status == AttendanceStatus.LATE


def test_second_punch_in_same_day_conflicts(service, fixed_now):
    service.punch_in(PersonKind.EMPLOYEE, 1, now=fixed_now)
    with pytest.raises(ConflictError):
        service.punch_in(PersonKind.EMPLOYEE, 1, now=fixed_now.replace(hour=11))


def test_racing_punch_in_is_rejected_by_unique_key(service, repo, fixed_now):
    service.punch_in(PersonKind.EMPLOYEE, 1, now=fixed_now)
    repo.hide_existing = True  # the existence check misses the concurrent insert
    with pytest.raises(ConflictError):
        service.punch_in(PersonKind.EMPLOYEE, 1, now=fixed_now)


def test_interns_punch_separately_from_employees(service, fixed_now):
    service.punch_in(PersonKind.EMPLOYEE, 1, now=fixed_now)
    record = service.punch_in(PersonKind.INTERN, 7, now=fixed_now)
    assert record.person_kind == PersonKind.INTERN


def test_punch_in_unknown_person(service, fixed_now):
    with pytest.raises(NotFoundError):
        service.punch_in(PersonKind.INTERN, 1, now=fixed_now)


def test_punch_out_flow(service, fixed_now):
    service.punch_in(PersonKind.EMPLOYEE, 1, now=fixed_now)
    record = service.punch_out(PersonKind.EMPLOYEE, 1, now=fixed_now.replace(hour=17, minute=45))

    view = service.to_view(record)
    assert view["checkIn"] == "09:15"
    assert view["checkOut"] == "17:45"
    assert view["totalHours"] == "8:30"
    assert view["decimalHours"] == 8.5

    with pytest.raises(ConflictError):
        service.punch_out(PersonKind.EMPLOYEE, 1, now=fixed_now.replace(hour=18))


def test_punch_out_without_punch_in(service, fixed_now):
    with pytest.raises(ValidationError):
        service.punch_out(PersonKind.EMPLOYEE, 2, now=fixed_now)


def test_admin_record_and_update(service):
    record = service.record(
        person_kind="Employee", person_id=2, work_date="2026-03-02", status="HalfDay", check_in="9:00 AM"
    )
    assert record.status == AttendanceStatus.HALF_DAY

    with pytest.raises(ConflictError):
        service.record(person_kind="Employee", person_id=2, work_date="2026-03-02", status="Present")

    updated = service.update(record.attendance_id, status="Present", check_out="1:30 PM")
    assert updated.status == AttendanceStatus.PRESENT
    assert service.to_view(updated)["totalHours"] == "4:30"


def test_record_validation(service):
    with pytest.raises(ValidationError):
        service.record(person_kind="Employee", person_id=2, work_date="", status="Present")
    with pytest.raises(ValidationError):
        service.record(person_kind="Robot", person_id=2, work_date="2026-03-02", status="Present")
    with pytest.raises(ValidationError):
        service.record(person_kind="Employee", person_id=2, work_date="2026-03-02", status="Sleeping")


def test_update_missing_record(service):
    with pytest.raises(NotFoundError):
        service.update(404, status="Present")


def test_list_by_month_and_summary(service):
    service.record(person_kind="Employee", person_id=1, work_date="2026-02-27", status="Present",
                   check_in="09:00", check_out="17:00")
    service.record(person_kind="Employee", person_id=1, work_date="2026-03-02", status="Present",
                   check_in="09:00", check_out="17:30")
    service.record(person_kind="Employee", person_id=1, work_date="2026-03-03", status="Late",
                   check_in="10:00", check_out="bad")
    service.record(person_kind="Intern", person_id=7, work_date="2026-03-02", status="Present",
                   check_in="09:00", check_out="13:00")

    march = service.list_records(month=3, year=2026)
    assert len(march) == 3

    summary = {(s["personType"], s["personId"]): s for s in service.summarize(march)}
    employee = summary[("Employee", 1)]
    assert employee["days"] == 2
    assert employee["totalHours"] == "8:30"
    assert employee["statuses"]["Late"] == 1
    assert summary[("Intern", 7)]["decimalHours"] == 4.0

    assert len(service.list_records(day="2026-02-27")) == 1
    assert len(service.list_records(person_kind="Intern", person_id=7)) == 1


def test_list_rejects_bad_month(service):
    with pytest.raises(ValidationError):
        service.list_records(month=13, year=2026)
