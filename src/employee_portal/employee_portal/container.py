from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from .attendance.factory import ClockInStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.mysql_credential_repository import MySQLCredentialRepository
from .auth.repository import CredentialRepository
from .auth.service import AuthService
from .core.constants import DEFAULT_LATE_GRACE_MINUTES, DEFAULT_WORKDAY_START
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .login_logs.mysql_login_log_repository import MySQLLoginLogRepository
from .login_logs.repository import LoginLogRepository
from .login_logs.service import LoginLogService
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    credentials_repo: CredentialRepository
    tasks_repo: TaskRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    login_logs_repo: LoginLogRepository

    employee_service: EmployeeService
    task_service: TaskService
    attendance_service: AttendanceService
    leave_service: LeaveService
    login_log_service: LoginLogService
    auth_service: AuthService


def wire_container(
    *,
    employees_repo: EmployeeRepository,
    credentials_repo: CredentialRepository,
    tasks_repo: TaskRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    login_logs_repo: LoginLogRepository,
    workday_start: time = DEFAULT_WORKDAY_START,
    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
) -> Container:
    """Build services on top of any set of repositories (MySQL or in-memory)."""

    login_log_service = LoginLogService(login_logs_repo)
    return Container(
        employees_repo=employees_repo,
        credentials_repo=credentials_repo,
        tasks_repo=tasks_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        login_logs_repo=login_logs_repo,
        employee_service=EmployeeService(employees_repo),
        task_service=TaskService(tasks_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            strategy_factory=ClockInStrategyFactory(),
            workday_start=workday_start,
            grace_minutes=grace_minutes,
        ),
        leave_service=LeaveService(leaves_repo),
        login_log_service=login_log_service,
        auth_service=AuthService(employees_repo, credentials_repo, login_log_service),
    )


def build_container(
    *,
    db_config: dict,
    workday_start: time = DEFAULT_WORKDAY_START,
    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        employees_repo=MySQLEmployeeRepository(conn),
        credentials_repo=MySQLCredentialRepository(conn),
        tasks_repo=MySQLTaskRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        login_logs_repo=MySQLLoginLogRepository(conn),
        workday_start=workday_start,
        grace_minutes=grace_minutes,
    )
