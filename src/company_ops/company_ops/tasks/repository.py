from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import PersonKind, RequestStatus, TaskPriority, TaskStatus
from .model import Task, TaskComment


class TaskRepository(Protocol):
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
        raise NotImplementedError

    def get(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    def list_tasks(
        self,
        *,
        assignee_kind: Optional[PersonKind] = None,
        assignee_id: Optional[int] = None,
        project_id: Optional[int] = None,
        approval_status: Optional[RequestStatus] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Task]:
        """Newest first."""
        raise NotImplementedError

    def set_status(self, task_id: int, status: TaskStatus) -> bool:
        raise NotImplementedError

    def set_approval(self, task_id: int, approval_status: RequestStatus) -> bool:
        raise NotImplementedError

    def rate(
        self,
        task_id: int,
        *,
        rating: int,
        feedback: Optional[str],
        rated_by: Optional[int],
        rated_at: datetime,
    ) -> bool:
        raise NotImplementedError

    def add_comment(self, task_id: int, *, content: str, comment_type: str, author_user_id: Optional[int]) -> int:
        raise NotImplementedError

    def list_comments(self, task_id: int) -> Sequence[TaskComment]:
        """Oldest first."""
        raise NotImplementedError
