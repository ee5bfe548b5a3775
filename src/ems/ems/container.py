from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_TIMEZONE
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .health.service import HealthService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.service import PayrollService
from .users.mysql_department_repository import MySQLDepartmentRepository, MySQLPositionRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, EmployeeService, OrganizationService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    departments_repo: MySQLDepartmentRepository
    positions_repo: MySQLPositionRepository
    attendance_repo: MySQLAttendanceRepository
    leaves_repo: MySQLLeaveRepository
    salaries_repo: MySQLSalaryRepository

    auth_service: AuthService
    employee_service: EmployeeService
    organization_service: OrganizationService
    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService
    dashboard_service: DashboardService
    health_service: HealthService


def build_container(*, db_config: dict, tz_name: str = DEFAULT_TIMEZONE) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    departments_repo = MySQLDepartmentRepository(conn)
    positions_repo = MySQLPositionRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    salaries_repo = MySQLSalaryRepository(conn)

    attendance_service = AttendanceService(attendance_repo, tz_name=tz_name)

    return Container(
        conn=conn,
        users_repo=users_repo,
        departments_repo=departments_repo,
        positions_repo=positions_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        salaries_repo=salaries_repo,
        auth_service=AuthService(users_repo),
        employee_service=EmployeeService(users_repo),
        organization_service=OrganizationService(departments_repo, positions_repo),
        attendance_service=attendance_service,
        leave_service=LeaveService(leaves_repo),
        payroll_service=PayrollService(salaries_repo, users_repo),
        dashboard_service=DashboardService(attendance_repo, leaves_repo, salaries_repo, attendance_service),
        health_service=HealthService(conn),
    )
