from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus, PersonKind
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.attendance_id, a.person_kind, a.person_id, a.work_date, a.status,
           a.check_in, a.check_out,
           COALESCE(e.name, i.name) AS person_name
    FROM attendance_records a
    LEFT JOIN employees e ON a.person_kind='Employee' AND e.employee_id = a.person_id
    LEFT JOIN interns i ON a.person_kind='Intern' AND i.intern_id = a.person_id
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        person_kind=PersonKind(r["person_kind"]),
        person_id=int(r["person_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
        person_name=r.get("person_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE a.attendance_id=%s", (attendance_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_person_and_date(
        self, person_kind: PersonKind, person_id: int, work_date: date
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE a.person_kind=%s AND a.person_id=%s AND a.work_date=%s",
                (person_kind.value, person_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_records(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        person_kind: Optional[PersonKind] = None,
        person_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        where = []
        params: list = []
        if start_date:
            where.append("a.work_date >= %s")
            params.append(start_date)
        if end_date:
            where.append("a.work_date <= %s")
            params.append(end_date)
        if person_kind:
            where.append("a.person_kind=%s")
            params.append(person_kind.value)
        if person_id is not None:
            where.append("a.person_id=%s")
            params.append(int(person_id))

        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY a.work_date DESC, a.attendance_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(person_kind, person_id, work_date, status, check_in, check_out)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (person_kind.value, person_id, work_date, status.value, check_in, check_out),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            # uq_attendance_person_day turns a punch-in race into a rejected duplicate.
            if is_duplicate_key(e):
                raise ConflictError("Attendance already exists for this date") from e
            raise

    def set_check_out(self, attendance_id: int, check_out: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET check_out=%s WHERE attendance_id=%s AND check_out IS NULL",
                (check_out, attendance_id),
            )
            return cur.rowcount > 0

    def update(
        self,
        attendance_id: int,
        *,
        status: Optional[AttendanceStatus] = None,
        check_in: Optional[str] = None,
        check_out: Optional[str] = None,
    ) -> bool:
        sets = []
        params: list = []
        if status is not None:
            sets.append("status=%s")
            params.append(status.value)
        if check_in is not None:
            sets.append("check_in=%s")
            params.append(check_in)
        if check_out is not None:
            sets.append("check_out=%s")
            params.append(check_out)
        if not sets:
            return True

        params.append(attendance_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE attendance_records SET {', '.join(sets)} WHERE attendance_id=%s", tuple(params))
            # rowcount is 0 for a no-op update; existence is checked by the service.
            return True
