from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Iterable, Optional, Union

from ..common.datetime_utils import now_local, parse_optional_date
from ..common.validators import optional_text
from ..core.enums import AttendanceStatus, PersonKind
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..interns.repository import InternRepository
from .model import AttendanceRecord
from .policy import LateCutoffPolicy
from .repository import AttendanceRepository
from .time_utils import calculate_total_hours, duration_to_decimal_hours, elapsed_minutes, format_time_for_display

PUNCH_FORMAT = "%H:%M:%S"


def _coerce_kind(value: Union[PersonKind, str]) -> PersonKind:
    try:
        return PersonKind(value)
    except ValueError:
        raise ValidationError(f"Unknown person type: {value}")


def _coerce_status(value: Union[AttendanceStatus, str]) -> AttendanceStatus:
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {value}")


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        interns: InternRepository,
        *,
        policy: Optional[LateCutoffPolicy] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._interns = interns
        self._policy = policy or LateCutoffPolicy()

    def _require_person(self, kind: PersonKind, person_id: int) -> None:
        if kind == PersonKind.EMPLOYEE:
            found = self._employees.get_by_id(person_id)
        else:
            found = self._interns.get_by_id(person_id)
        if not found:
            raise NotFoundError(f"{kind.value} not found")

    def _get(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def punch_in(
        self,
        person_kind: Union[PersonKind, str],
        person_id: int,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = now or now_local()
        kind = _coerce_kind(person_kind)
        person_id = int(person_id)
        self._require_person(kind, person_id)

        if self._attendance.get_for_person_and_date(kind, person_id, now.date()):
            raise ConflictError("Already punched in today")

        # A concurrent punch-in that slips past the check above still fails
        # on the (person, day) unique key with ConflictError.
        attendance_id = self._attendance.create(
            person_kind=kind,
            person_id=person_id,
            work_date=now.date(),
            status=self._policy.for_punch_in(now),
            check_in=now.strftime(PUNCH_FORMAT),
        )
        return self._get(attendance_id)

    def punch_out(
        self,
        person_kind: Union[PersonKind, str],
        person_id: int,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = now or now_local()
        kind = _coerce_kind(person_kind)

        record = self._attendance.get_for_person_and_date(kind, int(person_id), now.date())
        if not record or not record.check_in:
            raise ValidationError("Cannot punch out. Please punch in first")
        if record.check_out:
            raise ConflictError("Already punched out today")

        if not self._attendance.set_check_out(record.attendance_id, now.strftime(PUNCH_FORMAT)):
            raise ConflictError("Already punched out today")
        return self._get(record.attendance_id)

    def record(
        self,
        *,
        person_kind: Union[PersonKind, str],
        person_id: int,
        work_date: str,
        status: Union[AttendanceStatus, str],
        check_in: Optional[str] = None,
        check_out: Optional[str] = None,
    ) -> AttendanceRecord:
        """Admin entry of a full day's record."""
        kind = _coerce_kind(person_kind)
        day = parse_optional_date(work_date, "Date")
        if day is None or not status:
            raise ValidationError("Missing required fields")
        person_id = int(person_id)
        self._require_person(kind, person_id)

        if self._attendance.get_for_person_and_date(kind, person_id, day):
            raise ConflictError("Attendance already exists for this date")

        attendance_id = self._attendance.create(
            person_kind=kind,
            person_id=person_id,
            work_date=day,
            status=_coerce_status(status),
            check_in=optional_text(check_in),
            check_out=optional_text(check_out),
        )
        return self._get(attendance_id)

    def update(
        self,
        attendance_id: int,
        *,
        status: Optional[Union[AttendanceStatus, str]] = None,
        check_in: Optional[str] = None,
        check_out: Optional[str] = None,
    ) -> AttendanceRecord:
        record = self._get(attendance_id)
        self._attendance.update(
            record.attendance_id,
            status=_coerce_status(status) if status else None,
            check_in=optional_text(check_in),
            check_out=optional_text(check_out),
        )
        return self._get(record.attendance_id)

    def today(self, person_kind: Union[PersonKind, str], person_id: int, *, now: Optional[datetime] = None):
        now = now or now_local()
        return self._attendance.get_for_person_and_date(_coerce_kind(person_kind), int(person_id), now.date())

    def list_records(
        self,
        *,
        day: Optional[str] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        person_kind: Optional[Union[PersonKind, str]] = None,
        person_id: Optional[int] = None,
    ) -> list[AttendanceRecord]:
        start: Optional[date] = None
        end: Optional[date] = None
        if day:
            start = end = parse_optional_date(day, "Date")
        elif month and year:
            if not 1 <= int(month) <= 12:
                raise ValidationError("Month must be between 1 and 12")
            start = date(int(year), int(month), 1)
            end = date(int(year), int(month), calendar.monthrange(int(year), int(month))[1])

        return list(
            self._attendance.list_records(
                start_date=start,
                end_date=end,
                person_kind=_coerce_kind(person_kind) if person_kind else None,
                person_id=person_id,
            )
        )

    @staticmethod
    def to_view(record: AttendanceRecord) -> dict:
        total = calculate_total_hours(record.check_in, record.check_out)
        return {
            "id": record.attendance_id,
            "personType": record.person_kind.value,
            "personId": record.person_id,
            "personName": record.person_name,
            "date": record.work_date.isoformat(),
            "status": record.status.value,
            "checkIn": format_time_for_display(record.check_in) if record.check_in else None,
            "checkOut": format_time_for_display(record.check_out) if record.check_out else None,
            "totalHours": total,
            "decimalHours": round(duration_to_decimal_hours(total), 2),
        }

    @staticmethod
    def summarize(records: Iterable[AttendanceRecord]) -> list[dict]:
        """Per-person totals: worked time and day counts by status."""
        summary_map: dict[tuple[PersonKind, int], dict] = {}
        for r in records:
            s = summary_map.get(r.person_key)
            if not s:
                s = {
                    "personType": r.person_kind.value,
                    "personId": r.person_id,
                    "personName": r.person_name,
                    "total_minutes": 0,
                    "days": 0,
                    "statuses": {status.value: 0 for status in AttendanceStatus},
                }
                summary_map[r.person_key] = s
            s["days"] += 1
            s["statuses"][r.status.value] += 1
            s["total_minutes"] += elapsed_minutes(r.check_in, r.check_out) or 0

        summary = []
        for s in summary_map.values():
            total_minutes = int(s.pop("total_minutes"))
            s["totalHours"] = f"{total_minutes // 60}:{total_minutes % 60:02d}"
            s["decimalHours"] = round(total_minutes / 60, 2)
            summary.append(s)

        summary.sort(key=lambda x: x["decimalHours"], reverse=True)
        return summary
