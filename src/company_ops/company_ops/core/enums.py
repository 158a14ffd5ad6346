from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """Account role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"
    INTERN = "intern"


class EmployeeRole(str, Enum):
    """Job role of an employee.

    TEAM_LEAD is positional: it means "team lead of the primary project".
    """

    ADMIN = "Admin"
    DEVELOPER = "Developer"
    DESIGNER = "Designer"
    MANAGER = "Manager"
    QA = "QA"
    TEAM_LEAD = "TeamLead"
    TELECALLER = "Telecaller"


# Role an outgoing team lead falls back to.
BASELINE_ROLE = EmployeeRole.DEVELOPER


class PersonKind(str, Enum):
    EMPLOYEE = "Employee"
    INTERN = "Intern"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    LATE = "Late"
    ABSENT = "Absent"
    HALF_DAY = "HalfDay"
    ON_LEAVE = "OnLeave"


class InternshipStatus(str, Enum):
    UPCOMING = "Upcoming"
    ACTIVE = "Active"
    COMPLETED = "Completed"
    TERMINATED = "Terminated"


class ProjectStatus(str, Enum):
    ACTIVE = "Active"
    ON_HOLD = "OnHold"
    COMPLETED = "Completed"


class RequestStatus(str, Enum):
    """Approval flow state of a leave request."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class TaskStatus(str, Enum):
    TODO = "ToDo"
    IN_PROGRESS = "InProgress"
    REVIEW = "Review"
    DONE = "Done"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class LogCategory(str, Enum):
    """Kind of work a daily project log describes."""

    GENERAL = "General"
    ENVIRONMENT = "Environment"
    DEPLOYMENT = "Deployment"
    BUG_FIX = "BugFix"
    FEATURE = "Feature"
    DOCUMENTATION = "Documentation"
    MEETING = "Meeting"
    REVIEW = "Review"
