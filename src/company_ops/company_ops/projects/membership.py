"""Ordered project membership of a person.

The first project is the primary one. Only the ordered list is stored; the
primary project is always derived from it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

from ..core.constants import UNASSIGNED_PROJECT
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _clean_names(names: Iterable[object]) -> tuple[str, ...]:
    out: list[str] = []
    for raw in names:
        if raw is None:
            continue
        name = str(raw).strip()
        if not name or name == UNASSIGNED_PROJECT or name in out:
            continue
        out.append(name)
    return tuple(out)


@dataclass(frozen=True)
class ProjectMembership:
    projects: tuple[str, ...] = ()

    @property
    def primary(self) -> str:
        return self.projects[0] if self.projects else UNASSIGNED_PROJECT

    @property
    def is_assigned(self) -> bool:
        return bool(self.projects)

    @property
    def secondary(self) -> tuple[str, ...]:
        return self.projects[1:]

    def includes(self, project_name: str) -> bool:
        return project_name in self.projects

    def is_primary(self, project_name: str) -> bool:
        return self.is_assigned and self.primary == project_name

    def to_json(self) -> str:
        return json.dumps(list(self.projects))

    def as_list(self) -> list[str]:
        return list(self.projects)

    @classmethod
    def of(cls, *names: str) -> "ProjectMembership":
        return cls(_clean_names(names))

    @classmethod
    def from_request(
        cls,
        *,
        project: Optional[str] = None,
        projects: Optional[Union[Sequence[str], str]] = None,
    ) -> "ProjectMembership":
        """Build the membership an assign request asks for.

        ``projects`` (ordered, first is primary) wins over the single legacy
        ``project`` field. A request naming only "Unassigned" clears the
        membership.
        """
        if isinstance(projects, str):
            projects = [projects]
        elif projects is not None and not isinstance(projects, (list, tuple)):
            raise ValidationError("projects must be a list of project names")

        if projects:
            requested = list(projects)
        elif project and str(project).strip():
            requested = [project]
        else:
            raise ValidationError("Project name or projects array is required")

        membership = cls(_clean_names(requested))
        if membership.is_assigned:
            return membership
        if any(p is not None and str(p).strip() == UNASSIGNED_PROJECT for p in requested):
            return membership
        raise ValidationError("Project name or projects array is required")

    @classmethod
    def from_json(cls, raw: Optional[str]) -> "ProjectMembership":
        """Decode the stored column, tolerating legacy single-name values."""
        if raw is None or not str(raw).strip():
            return cls()
        try:
            data = json.loads(raw)
        except ValueError:
            logger.debug("Treating non-JSON projects value %r as a single project", raw)
            data = [raw]
        if isinstance(data, str):
            data = [data]
        if not isinstance(data, list):
            return cls()
        return cls(_clean_names(data))
