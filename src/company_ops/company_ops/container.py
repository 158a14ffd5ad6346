from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.policy import LateCutoffPolicy
from .attendance.service import AttendanceService
from .common.datetime_utils import parse_clock
from .core.constants import DEFAULT_LOGIN_EMAIL_DOMAIN, DEFAULT_TEAM_LEAD_LOCK_TIMEOUT
from .daily_logs.mysql_daily_log_repository import MySQLDailyLogRepository
from .daily_logs.service import DailyLogService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .interns.mysql_intern_repository import MySQLInternRepository
from .interns.service import InternService
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.service import ProjectService
from .requests.mysql_request_repository import MySQLLeaveRequestRepository
from .requests.service import LeaveRequestService
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.service import TaskService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    projects_repo: MySQLProjectRepository
    employees_repo: MySQLEmployeeRepository
    interns_repo: MySQLInternRepository
    attendance_repo: MySQLAttendanceRepository
    requests_repo: MySQLLeaveRequestRepository
    tasks_repo: MySQLTaskRepository
    daily_logs_repo: MySQLDailyLogRepository

    auth_service: AuthService
    employee_service: EmployeeService
    intern_service: InternService
    project_service: ProjectService
    attendance_service: AttendanceService
    leave_service: LeaveRequestService
    task_service: TaskService
    daily_log_service: DailyLogService


def build_container(
    *,
    db_config: dict,
    late_cutoff: str = "09:30",
    login_email_domain: str = DEFAULT_LOGIN_EMAIL_DOMAIN,
    lock_timeout: int = DEFAULT_TEAM_LEAD_LOCK_TIMEOUT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    projects_repo = MySQLProjectRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn, lock_timeout=lock_timeout)
    interns_repo = MySQLInternRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    requests_repo = MySQLLeaveRequestRepository(conn)
    tasks_repo = MySQLTaskRepository(conn)
    daily_logs_repo = MySQLDailyLogRepository(conn)

    auth_service = AuthService(users_repo)
    employee_service = EmployeeService(employees_repo, projects_repo, login_email_domain=login_email_domain)
    intern_service = InternService(interns_repo, projects_repo, employees_repo)
    project_service = ProjectService(projects_repo, employees_repo, interns_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        interns_repo,
        policy=LateCutoffPolicy(parse_clock(late_cutoff)),
    )
    leave_service = LeaveRequestService(requests_repo, employees_repo)
    task_service = TaskService(tasks_repo, projects_repo, employees_repo, interns_repo)
    daily_log_service = DailyLogService(daily_logs_repo, projects_repo, employees_repo, interns_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        projects_repo=projects_repo,
        employees_repo=employees_repo,
        interns_repo=interns_repo,
        attendance_repo=attendance_repo,
        requests_repo=requests_repo,
        tasks_repo=tasks_repo,
        daily_logs_repo=daily_logs_repo,
        auth_service=auth_service,
        employee_service=employee_service,
        intern_service=intern_service,
        project_service=project_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        task_service=task_service,
        daily_log_service=daily_log_service,
    )
