from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import ProjectStatus
from .model import Project


class ProjectRepository(Protocol):
    def list_all(self) -> Sequence[Project]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Project]:
        raise NotImplementedError

    def missing_names(self, names: Sequence[str]) -> list[str]:
        """Names from ``names`` that have no project row, in input order."""
        raise NotImplementedError

    def create(self, *, name: str, description: Optional[str], status: ProjectStatus) -> int:
        raise NotImplementedError
