from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.grid_state import GridStore
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceGridService
from .core.constants import DEFAULT_PAGE_SIZE, DEFAULT_PASSWORD_RESET_TTL_MINUTES, DEFAULT_SESSION_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .permissions.mysql_permission_repository import MySQLPermissionRepository
from .permissions.repository import PermissionRepository
from .reference.mysql_reference_repository import MySQLDepartmentRepository, MySQLStatusRepository
from .reference.repository import DepartmentRepository, StatusRepository
from .reference.service import DepartmentService, StatusCatalogService
from .reports.mysql_report_repository import MySQLReportRepository
from .reports.repository import ReportRepository
from .reports.service import ReportAggregator
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    permissions_repo: PermissionRepository
    employees_repo: EmployeeRepository
    departments_repo: DepartmentRepository
    statuses_repo: StatusRepository
    attendance_repo: AttendanceRepository
    reports_repo: ReportRepository

    grid_store: GridStore

    auth_service: AuthService
    employee_service: EmployeeService
    department_service: DepartmentService
    status_service: StatusCatalogService
    attendance_service: AttendanceGridService
    report_aggregator: ReportAggregator

    page_size: int = DEFAULT_PAGE_SIZE
    session_days: int = DEFAULT_SESSION_DAYS


def wire_container(
    *,
    conn: Optional[DatabaseConnection],
    users_repo: UserRepository,
    permissions_repo: PermissionRepository,
    employees_repo: EmployeeRepository,
    departments_repo: DepartmentRepository,
    statuses_repo: StatusRepository,
    attendance_repo: AttendanceRepository,
    reports_repo: ReportRepository,
    page_size: int = DEFAULT_PAGE_SIZE,
    session_days: int = DEFAULT_SESSION_DAYS,
    reset_ttl_minutes: int = DEFAULT_PASSWORD_RESET_TTL_MINUTES,
) -> Container:
    """Build services on top of the given repositories."""
    grid_store = GridStore()

    auth_service = AuthService(users_repo, permissions_repo, reset_ttl_minutes=reset_ttl_minutes)
    employee_service = EmployeeService(employees_repo, departments_repo, grid_store=grid_store)
    department_service = DepartmentService(departments_repo, employees_repo)
    status_service = StatusCatalogService(statuses_repo, attendance_repo)
    attendance_service = AttendanceGridService(attendance_repo, status_service)
    report_aggregator = ReportAggregator(reports_repo, employees_repo, departments_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        permissions_repo=permissions_repo,
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        statuses_repo=statuses_repo,
        attendance_repo=attendance_repo,
        reports_repo=reports_repo,
        grid_store=grid_store,
        auth_service=auth_service,
        employee_service=employee_service,
        department_service=department_service,
        status_service=status_service,
        attendance_service=attendance_service,
        report_aggregator=report_aggregator,
        page_size=int(page_size),
        session_days=int(session_days),
    )


def build_container(*, db_config: dict, **settings: Any) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        permissions_repo=MySQLPermissionRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        departments_repo=MySQLDepartmentRepository(conn),
        statuses_repo=MySQLStatusRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        reports_repo=MySQLReportRepository(conn),
        **settings,
    )
