from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import InternshipStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from ..projects.membership import ProjectMembership
from .model import Intern
from .repository import InternRepository

_COLUMNS = """
    intern_id, name, email, university, degree, start_date, end_date, status,
    mentor_id, projects, termination_date, termination_reason
"""


def _to_intern(r: dict) -> Intern:
    return Intern(
        intern_id=int(r["intern_id"]),
        name=r["name"],
        email=r["email"],
        start_date=r["start_date"],
        end_date=r.get("end_date"),
        status=InternshipStatus(r["status"]),
        university=r.get("university"),
        degree=r.get("degree"),
        mentor_id=r.get("mentor_id"),
        membership=ProjectMembership.from_json(r.get("projects")),
        termination_date=r.get("termination_date"),
        termination_reason=r.get("termination_reason"),
    )


class MySQLInternRepository(InternRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(
        self,
        *,
        mentor_id: Optional[int] = None,
        project: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Sequence[Intern]:
        where = []
        params: list = []
        if mentor_id is not None:
            where.append("mentor_id=%s")
            params.append(int(mentor_id))
        if project:
            where.append("JSON_CONTAINS(projects, JSON_QUOTE(%s))")
            params.append(project)
        if search:
            where.append("(name LIKE %s OR email LIKE %s OR university LIKE %s)")
            like = f"%{search}%"
            params.extend([like, like, like])

        sql = f"SELECT {_COLUMNS} FROM interns"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY created_at DESC, intern_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_intern(r) for r in fetchall(cur)]

    def get_by_id(self, intern_id: int) -> Optional[Intern]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM interns WHERE intern_id=%s", (intern_id,))
            r = fetchone(cur)
            return _to_intern(r) if r else None

    def get_by_email(self, email: str) -> Optional[Intern]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM interns WHERE email=%s", (email,))
            r = fetchone(cur)
            return _to_intern(r) if r else None

    def create(
        self,
        *,
        name: str,
        email: str,
        university: Optional[str],
        degree: Optional[str],
        start_date: date,
        end_date: Optional[date],
        status: InternshipStatus,
        mentor_id: Optional[int],
        membership: ProjectMembership,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO interns(
                        name, email, university, degree, start_date, end_date, status, mentor_id, projects
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        name,
                        email,
                        university,
                        degree,
                        start_date,
                        end_date,
                        status.value,
                        mentor_id,
                        membership.to_json(),
                    ),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("An intern with this email already exists") from e
            raise

    def update_status(self, intern_id: int, status: InternshipStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Never overwrite a termination that happened concurrently.
            cur.execute(
                "UPDATE interns SET status=%s WHERE intern_id=%s AND status<>%s",
                (status.value, intern_id, InternshipStatus.TERMINATED.value),
            )
            return cur.rowcount > 0

    def terminate(self, intern_id: int, *, termination_date: datetime, reason: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE interns
                SET status=%s, termination_date=%s, termination_reason=%s
                WHERE intern_id=%s
                """,
                (InternshipStatus.TERMINATED.value, termination_date, reason, intern_id),
            )
            return cur.rowcount > 0

    def save_membership(self, intern_id: int, membership: ProjectMembership) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE interns SET projects=%s WHERE intern_id=%s", (membership.to_json(), intern_id))
            return cur.rowcount > 0

    def set_mentor(self, intern_id: int, mentor_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE interns SET mentor_id=%s WHERE intern_id=%s", (int(mentor_id), int(intern_id)))
            return cur.rowcount > 0
