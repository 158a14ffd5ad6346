from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import PersonKind, RequestStatus, TaskPriority, TaskStatus


@dataclass(frozen=True)
class TaskComment:
    comment_id: int
    task_id: int
    content: str
    comment_type: str = "comment"
    author_user_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.comment_id,
            "taskId": self.task_id,
            "content": self.content,
            "type": self.comment_type,
            "authorId": self.author_user_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class Task:
    """Domain entity: a unit of project work assigned to an employee or intern.

    Tasks requested by an employee start Pending until approved.
    """

    task_id: int
    title: str
    assignee_kind: PersonKind
    assignee_id: int
    project_id: int
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    approval_status: RequestStatus = RequestStatus.APPROVED
    description: Optional[str] = None
    due_date: Optional[date] = None
    requested_by: Optional[int] = None
    rating: Optional[int] = None
    feedback: Optional[str] = None
    rated_by: Optional[int] = None
    rated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    project_name: Optional[str] = None
    assignee_name: Optional[str] = None

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE

    def to_dict(self) -> dict:
        return {
            "id": self.task_id,
            "title": self.title,
            "description": self.description,
            "assigneeType": self.assignee_kind.value,
            "assigneeId": self.assignee_id,
            "assigneeName": self.assignee_name,
            "projectId": self.project_id,
            "project": self.project_name,
            "status": self.status.value,
            "priority": self.priority.value,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "approvalStatus": self.approval_status.value,
            "requestedBy": self.requested_by,
            "rating": self.rating,
            "feedback": self.feedback,
            "ratedBy": self.rated_by,
            "ratedAt": self.rated_at.isoformat() if self.rated_at else None,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
