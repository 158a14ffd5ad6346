from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence, Union

from ..common.datetime_utils import now_local, parse_optional_date
from ..common.validators import optional_text, require_non_empty
from ..core.constants import MAX_TASK_RATING, MIN_TASK_RATING
from ..core.enums import PersonKind, RequestStatus, TaskPriority, TaskStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..interns.repository import InternRepository
from ..projects.model import Project
from ..projects.repository import ProjectRepository
from .model import Task, TaskComment
from .repository import TaskRepository

logger = logging.getLogger(__name__)

_DECISIONS = (RequestStatus.APPROVED, RequestStatus.REJECTED)


def _coerce(enum_type, value, default, label: str):
    if value is None or value == "":
        return default
    try:
        return enum_type(value)
    except ValueError:
        raise ValidationError(f"Unknown {label}: {value}")


def _as_id(value, label: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be an integer")


def _parse_rating(value) -> int:
    try:
        rating = int(str(value).strip())
    except (TypeError, ValueError):
        rating = 0
    if not MIN_TASK_RATING <= rating <= MAX_TASK_RATING:
        raise ValidationError(f"Rating must be between {MIN_TASK_RATING} and {MAX_TASK_RATING}")
    return rating


class TaskService:
    """Use cases: task assignment, approval of requested tasks, comments and rating."""

    def __init__(
        self,
        tasks: TaskRepository,
        projects: ProjectRepository,
        employees: EmployeeRepository,
        interns: InternRepository,
    ):
        self._tasks = tasks
        self._projects = projects
        self._employees = employees
        self._interns = interns

    def _project(self, name: str) -> Project:
        project = self._projects.get_by_name((name or "").strip())
        if not project:
            raise NotFoundError(f'Project "{name}" not found')
        return project

    def _require_person(self, kind: PersonKind, person_id: int) -> None:
        if kind == PersonKind.EMPLOYEE:
            found = self._employees.get_by_id(person_id)
        else:
            found = self._interns.get_by_id(person_id)
        if not found:
            raise NotFoundError(f"{kind.value} not found")

    def get_task(self, task_id: int) -> Task:
        task = self._tasks.get(int(task_id))
        if not task:
            raise NotFoundError("Task not found")
        return task

    def create_task(
        self,
        *,
        title: str,
        assignee_type: Union[PersonKind, str],
        assignee_id: Optional[int],
        project: str,
        description: Optional[str] = None,
        status: Optional[Union[TaskStatus, str]] = None,
        priority: Optional[Union[TaskPriority, str]] = None,
        due_date: Optional[str] = None,
        approval_status: Optional[Union[RequestStatus, str]] = None,
        requested_by: Optional[int] = None,
    ) -> Task:
        if not (title or "").strip() or not assignee_id or not (project or "").strip():
            raise ValidationError("Title, assignee and project are required")
        title = require_non_empty(title, "Title")
        kind = _coerce(PersonKind, assignee_type, PersonKind.EMPLOYEE, "assignee type")
        status = _coerce(TaskStatus, status, TaskStatus.TODO, "task status")
        priority = _coerce(TaskPriority, priority, TaskPriority.MEDIUM, "task priority")
        approval = _coerce(RequestStatus, approval_status, RequestStatus.APPROVED, "approval status")
        due = parse_optional_date(due_date, "Due date")

        assignee_id = _as_id(assignee_id, "Assignee ID")
        if requested_by is not None:
            requested_by = _as_id(requested_by, "Requested by")

        target = self._project(project)
        self._require_person(kind, assignee_id)
        if requested_by is not None and not self._employees.get_by_id(requested_by):
            raise NotFoundError("Requesting employee not found")

        task_id = self._tasks.create(
            title=title,
            description=optional_text(description),
            assignee_kind=kind,
            assignee_id=assignee_id,
            project_id=target.project_id,
            status=status,
            priority=priority,
            due_date=due,
            approval_status=approval,
            requested_by=requested_by,
        )
        return self.get_task(task_id)

    def list_tasks(
        self,
        *,
        assignee_type: Optional[Union[PersonKind, str]] = None,
        assignee_id: Optional[int] = None,
        project: Optional[str] = None,
        approval_status: Optional[Union[RequestStatus, str]] = None,
    ) -> Sequence[Task]:
        kind = _coerce(PersonKind, assignee_type, None, "assignee type")
        approval = _coerce(RequestStatus, approval_status, None, "approval status")
        project_id = None
        if project and project != "all":
            project_id = self._project(project).project_id
        return self._tasks.list_tasks(
            assignee_kind=kind,
            assignee_id=assignee_id,
            project_id=project_id,
            approval_status=approval,
        )

    def update_status(self, task_id: int, status: Union[TaskStatus, str]) -> Task:
        status = _coerce(TaskStatus, status, None, "task status")
        if status is None:
            raise ValidationError("Status is required")
        task = self.get_task(task_id)
        self._tasks.set_status(task.task_id, status)
        return self.get_task(task.task_id)

    def decide(self, task_id: int, approval_status: Union[RequestStatus, str]) -> Task:
        """Approve or reject a requested task."""
        if approval_status not in [d.value for d in _DECISIONS]:
            raise ValidationError("Invalid approval status")
        task = self.get_task(task_id)
        self._tasks.set_approval(task.task_id, RequestStatus(approval_status))
        return self.get_task(task.task_id)

    def comments(self, task_id: int) -> Sequence[TaskComment]:
        task = self.get_task(task_id)
        return self._tasks.list_comments(task.task_id)

    def add_comment(
        self,
        task_id: int,
        *,
        content: str,
        comment_type: Optional[str] = None,
        author_user_id: Optional[int] = None,
    ) -> TaskComment:
        content = require_non_empty(content, "Content")
        task = self.get_task(task_id)
        comment_id = self._tasks.add_comment(
            task.task_id,
            content=content,
            comment_type=optional_text(comment_type) or "comment",
            author_user_id=author_user_id,
        )
        return next(c for c in self._tasks.list_comments(task.task_id) if c.comment_id == comment_id)

    def rate(
        self,
        task_id: int,
        *,
        rating,
        feedback: Optional[str] = None,
        rated_by: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Task:
        """Rate a finished task from 1 to 5; rating again replaces the previous one."""
        rating = _parse_rating(rating)
        task = self.get_task(task_id)
        if not task.is_done:
            raise ValidationError("Task must be completed before rating")

        self._tasks.rate(
            task.task_id,
            rating=rating,
            feedback=optional_text(feedback),
            rated_by=rated_by,
            rated_at=now or now_local(),
        )
        logger.info("Task %s rated %s/%s", task.task_id, rating, MAX_TASK_RATING)
        return self.get_task(task.task_id)
