from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import PersonKind, RequestStatus, TaskPriority, TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Task, TaskComment
from .repository import TaskRepository

_SELECT = """
    SELECT t.task_id, t.title, t.description, t.assignee_kind, t.assignee_id, t.project_id,
           t.status, t.priority, t.due_date, t.approval_status, t.requested_by,
           t.rating, t.feedback, t.rated_by, t.rated_at, t.created_at,
           p.name AS project_name,
           COALESCE(e.name, i.name) AS assignee_name
    FROM tasks t
    JOIN projects p ON p.project_id = t.project_id
    LEFT JOIN employees e ON t.assignee_kind='Employee' AND e.employee_id = t.assignee_id
    LEFT JOIN interns i ON t.assignee_kind='Intern' AND i.intern_id = t.assignee_id
"""


def _to_task(r: dict) -> Task:
    return Task(
        task_id=int(r["task_id"]),
        title=r["title"],
        description=r.get("description"),
        assignee_kind=PersonKind(r["assignee_kind"]),
        assignee_id=int(r["assignee_id"]),
        project_id=int(r["project_id"]),
        status=TaskStatus(r["status"]),
        priority=TaskPriority(r["priority"]),
        due_date=r.get("due_date"),
        approval_status=RequestStatus(r["approval_status"]),
        requested_by=r.get("requested_by"),
        rating=r.get("rating"),
        feedback=r.get("feedback"),
        rated_by=r.get("rated_by"),
        rated_at=r.get("rated_at"),
        created_at=r.get("created_at"),
        project_name=r.get("project_name"),
        assignee_name=r.get("assignee_name"),
    )


def _to_comment(r: dict) -> TaskComment:
    return TaskComment(
        comment_id=int(r["comment_id"]),
        task_id=int(r["task_id"]),
        content=r["content"],
        comment_type=r.get("comment_type") or "comment",
        author_user_id=r.get("author_user_id"),
        created_at=r.get("created_at"),
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        title: str,
        description: Optional[str],
        assignee_kind: PersonKind,
        assignee_id: int,
        project_id: int,
        status: TaskStatus,
        priority: TaskPriority,
        due_date: Optional[date],
        approval_status: RequestStatus,
        requested_by: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(
                    title, description, assignee_kind, assignee_id, project_id,
                    status, priority, due_date, approval_status, requested_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    title,
                    description,
                    assignee_kind.value,
                    int(assignee_id),
                    int(project_id),
                    status.value,
                    priority.value,
                    due_date,
                    approval_status.value,
                    requested_by,
                ),
            )
            return int(cur.lastrowid)

    def get(self, task_id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE t.task_id=%s", (int(task_id),))
            r = fetchone(cur)
            return _to_task(r) if r else None

    def list_tasks(
        self,
        *,
        assignee_kind: Optional[PersonKind] = None,
        assignee_id: Optional[int] = None,
        project_id: Optional[int] = None,
        approval_status: Optional[RequestStatus] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Task]:
        where = []
        params: list = []
        if assignee_kind is not None:
            where.append("t.assignee_kind=%s")
            params.append(assignee_kind.value)
        if assignee_id is not None:
            where.append("t.assignee_id=%s")
            params.append(int(assignee_id))
        if project_id is not None:
            where.append("t.project_id=%s")
            params.append(int(project_id))
        if approval_status is not None:
            where.append("t.approval_status=%s")
            params.append(approval_status.value)

        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY t.created_at DESC, t.task_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_task(r) for r in fetchall(cur)]

    def set_status(self, task_id: int, status: TaskStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE tasks SET status=%s WHERE task_id=%s", (status.value, int(task_id)))
            return cur.rowcount > 0

    def set_approval(self, task_id: int, approval_status: RequestStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE tasks SET approval_status=%s WHERE task_id=%s",
                (approval_status.value, int(task_id)),
            )
            return cur.rowcount > 0

    def rate(
        self,
        task_id: int,
        *,
        rating: int,
        feedback: Optional[str],
        rated_by: Optional[int],
        rated_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE tasks
                SET rating=%s, feedback=%s, rated_by=COALESCE(%s, rated_by), rated_at=%s
                WHERE task_id=%s
                """,
                (int(rating), feedback, rated_by, rated_at, int(task_id)),
            )
            return cur.rowcount > 0

    def add_comment(self, task_id: int, *, content: str, comment_type: str, author_user_id: Optional[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO task_comments(task_id, content, comment_type, author_user_id)
                VALUES(%s,%s,%s,%s)
                """,
                (int(task_id), content, comment_type, author_user_id),
            )
            return int(cur.lastrowid)

    def list_comments(self, task_id: int) -> Sequence[TaskComment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT comment_id, task_id, content, comment_type, author_user_id, created_at
                FROM task_comments
                WHERE task_id=%s
                ORDER BY created_at, comment_id
                """,
                (int(task_id),),
            )
            return [_to_comment(r) for r in fetchall(cur)]
