from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.constants import DAILY_LOG_LIST_LIMIT
from ..core.enums import LogCategory, PersonKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DailyLog
from .repository import DailyLogRepository

_SELECT = """
    SELECT l.log_id, l.project_id, l.person_kind, l.person_id, l.log_date, l.summary,
           l.category, l.hours_worked, l.created_at,
           p.name AS project_name,
           COALESCE(e.name, i.name) AS person_name
    FROM daily_logs l
    JOIN projects p ON p.project_id = l.project_id
    LEFT JOIN employees e ON l.person_kind='Employee' AND e.employee_id = l.person_id
    LEFT JOIN interns i ON l.person_kind='Intern' AND i.intern_id = l.person_id
"""


def _to_log(r: dict) -> DailyLog:
    hours = r.get("hours_worked")
    return DailyLog(
        log_id=int(r["log_id"]),
        project_id=int(r["project_id"]),
        person_kind=PersonKind(r["person_kind"]),
        person_id=int(r["person_id"]),
        log_date=r["log_date"],
        summary=r["summary"],
        category=LogCategory(r["category"]),
        hours_worked=float(hours) if hours is not None else None,
        created_at=r.get("created_at"),
        project_name=r.get("project_name"),
        person_name=r.get("person_name"),
    )


class MySQLDailyLogRepository(DailyLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO daily_logs(project_id, person_kind, person_id, log_date, summary, category, hours_worked)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(project_id), person_kind.value, int(person_id), log_date, summary, category.value, hours_worked),
            )
            return int(cur.lastrowid)

    def get(self, log_id: int) -> Optional[DailyLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE l.log_id=%s", (int(log_id),))
            r = fetchone(cur)
            return _to_log(r) if r else None

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
        where = []
        params: list = []
        if project_id is not None:
            where.append("l.project_id=%s")
            params.append(int(project_id))
        if person_kind is not None:
            where.append("l.person_kind=%s")
            params.append(person_kind.value)
        if person_id is not None:
            where.append("l.person_id=%s")
            params.append(int(person_id))
        if start_date:
            where.append("l.log_date >= %s")
            params.append(start_date)
        if end_date:
            where.append("l.log_date <= %s")
            params.append(end_date)

        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY l.log_date DESC, l.created_at DESC, l.log_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_log(r) for r in fetchall(cur)]

    def update(
        self,
        log_id: int,
        *,
        summary: Optional[str] = None,
        category: Optional[LogCategory] = None,
        hours_worked: Optional[float] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE daily_logs
                SET summary=COALESCE(%s, summary),
                    category=COALESCE(%s, category),
                    hours_worked=COALESCE(%s, hours_worked)
                WHERE log_id=%s
                """,
                (summary, category.value if category else None, hours_worked, int(log_id)),
            )
            return cur.rowcount > 0

    def delete(self, log_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM daily_logs WHERE log_id=%s", (int(log_id),))
            return cur.rowcount > 0
