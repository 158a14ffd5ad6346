from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import ProjectStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, is_duplicate_key
from .model import Project
from .repository import ProjectRepository

_COLUMNS = "project_id, name, description, status, created_at"


def _to_project(r: dict) -> Project:
    return Project(
        project_id=int(r["project_id"]),
        name=r["name"],
        description=r.get("description"),
        status=ProjectStatus(r["status"]),
        created_at=r.get("created_at"),
    )


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects ORDER BY name")
            return [_to_project(r) for r in fetchall(cur)]

    def get_by_name(self, name: str) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM projects WHERE name=%s", (name,))
            r = fetchone(cur)
            return _to_project(r) if r else None

    def missing_names(self, names: Sequence[str]) -> list[str]:
        if not names:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT name FROM projects WHERE name IN ({in_clause(names)})", tuple(names))
            found = {r["name"] for r in fetchall(cur)}
        return [n for n in names if n not in found]

    def create(self, *, name: str, description: Optional[str], status: ProjectStatus) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO projects(name, description, status) VALUES(%s,%s,%s)",
                    (name, description, status.value),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError(f'Project "{name}" already exists') from e
            raise
