from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ProjectStatus


@dataclass(frozen=True)
class Project:
    project_id: int
    name: str
    description: Optional[str]
    status: ProjectStatus
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.project_id,
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
