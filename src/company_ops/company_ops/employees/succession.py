"""Team-lead succession.

Making a project someone's primary project makes them its team lead. The
previous lead of that project, if any, drops back to the baseline role.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import BASELINE_ROLE, EmployeeRole
from ..projects.membership import ProjectMembership
from .model import Employee


@dataclass(frozen=True)
class SuccessionPlan:
    project: str
    new_role: EmployeeRole
    demote_id: Optional[int] = None
    demoted_role: EmployeeRole = BASELINE_ROLE

    @property
    def promotes(self) -> bool:
        return self.new_role == EmployeeRole.TEAM_LEAD


def plan_lead_succession(
    employee: Employee,
    membership: ProjectMembership,
    incumbent: Optional[Employee],
) -> SuccessionPlan:
    if not membership.is_assigned:
        # Unassigned: nothing to lead, keep whatever role they had.
        return SuccessionPlan(project=membership.primary, new_role=employee.role)

    demote_id = None
    if incumbent is not None and incumbent.employee_id != employee.employee_id:
        demote_id = incumbent.employee_id

    return SuccessionPlan(project=membership.primary, new_role=EmployeeRole.TEAM_LEAD, demote_id=demote_id)
