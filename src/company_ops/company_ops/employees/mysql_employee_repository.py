from __future__ import annotations

import hashlib
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.constants import DEFAULT_TEAM_LEAD_LOCK_TIMEOUT
from ..core.enums import EmployeeRole
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from ..projects.membership import ProjectMembership
from .model import Employee
from .repository import EmployeeRepository, EmployeeUnitOfWork

_COLUMNS = "employee_id, name, email, login_email, role, projects, is_active, enrollment_date"


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        name=r["name"],
        email=r["email"],
        login_email=r.get("login_email"),
        role=EmployeeRole(r["role"]),
        membership=ProjectMembership.from_json(r.get("projects")),
        is_active=bool(r.get("is_active", True)),
        enrollment_date=r.get("enrollment_date"),
    )


def _lock_name(project_name: str) -> str:
    # MySQL caps lock names at 64 characters.
    digest = hashlib.sha1(project_name.encode("utf-8")).hexdigest()
    return f"team-lead:{digest}"


class _MySQLEmployeeUnitOfWork(EmployeeUnitOfWork):
    def __init__(self, cur, *, lock_timeout: int):
        self._cur = cur
        self._lock_timeout = lock_timeout
        self._locks: list[str] = []

    def lock_project(self, project_name: str) -> None:
        name = _lock_name(project_name)
        self._cur.execute("SELECT GET_LOCK(%s, %s) AS acquired", (name, self._lock_timeout))
        row = fetchone(self._cur)
        if not row or row.get("acquired") != 1:
            raise ConflictError(f'Project "{project_name}" is being reassigned, try again')
        self._locks.append(name)

    def release_locks(self) -> None:
        while self._locks:
            self._cur.execute("SELECT RELEASE_LOCK(%s) AS released", (self._locks.pop(),))
            fetchall(self._cur)

    def get_for_update(self, employee_id: int) -> Optional[Employee]:
        self._cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s FOR UPDATE", (employee_id,))
        r = fetchone(self._cur)
        return _to_employee(r) if r else None

    def find_team_lead(self, project_name: str, *, exclude_id: int) -> Optional[Employee]:
        self._cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM employees
            WHERE primary_project=%s AND role=%s AND employee_id<>%s
            ORDER BY employee_id
            LIMIT 1
            FOR UPDATE
            """,
            (project_name, EmployeeRole.TEAM_LEAD.value, exclude_id),
        )
        r = fetchone(self._cur)
        return _to_employee(r) if r else None

    def set_role(self, employee_id: int, role: EmployeeRole) -> None:
        self._cur.execute("UPDATE employees SET role=%s WHERE employee_id=%s", (role.value, employee_id))

    def save_assignment(self, employee_id: int, *, membership: ProjectMembership, role: EmployeeRole) -> None:
        self._cur.execute(
            "UPDATE employees SET projects=%s, role=%s WHERE employee_id=%s",
            (membership.to_json(), role.value, employee_id),
        )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, lock_timeout: int = DEFAULT_TEAM_LEAD_LOCK_TIMEOUT):
        self._conn_factory = conn_factory
        self._lock_timeout = int(lock_timeout)

    def list_all(self, *, active_only: bool = False) -> Sequence[Employee]:
        where = "WHERE is_active=1" if active_only else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees {where} ORDER BY enrollment_date DESC, employee_id DESC")
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def find_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM employees WHERE email=%s OR login_email=%s LIMIT 1",
                (email, email),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def create(
        self,
        *,
        name: str,
        email: str,
        login_email: Optional[str],
        role: EmployeeRole,
        membership: ProjectMembership,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(name, email, login_email, role, projects, is_active)
                    VALUES(%s,%s,%s,%s,%s,1)
                    """,
                    (name, email, login_email, role.value, membership.to_json()),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Employee with this email already exists") from e
            raise

    @contextmanager
    def unit_of_work(self) -> Iterator[EmployeeUnitOfWork]:
        with db_cursor(self._conn_factory) as (conn, cur):
            unit = _MySQLEmployeeUnitOfWork(cur, lock_timeout=self._lock_timeout)
            try:
                yield unit
                # Commit while still holding the project lock.
                conn.commit()
            finally:
                unit.release_locks()
