from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .attendance.service import AttendanceService
from .attendance.sqlite_attendance_repository import SQLiteAttendanceRepository
from .common.sanitizer import RemarkSanitizer
from .core.constants import DEFAULT_REMARK_DENYLIST
from .core.enums import RejectionPolicy
from .database.connection import DBConfig, DatabaseConnection
from .leave.service import LeaveService
from .leave.sqlite_leave_repository import SQLiteLeaveRepository
from .payroll.service import PayrollService
from .payroll.sqlite_payroll_repository import SQLitePayrollRepository
from .users.service import AuthService, EmployeeService
from .users.sqlite_user_repository import SQLiteUserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: SQLiteUserRepository
    attendance_repo: SQLiteAttendanceRepository
    leave_repo: SQLiteLeaveRepository
    payroll_repo: SQLitePayrollRepository

    auth_service: AuthService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService


def build_container(
    *,
    db_config: dict,
    rejection_policy: str = RejectionPolicy.ABSENT.value,
    allow_redecision: bool = True,
    remark_denylist: Optional[Iterable[str]] = None,
    remark_word_boundary: bool = False,
) -> Container:
    config = DBConfig(
        path=str(db_config["path"]),
        timeout=float(db_config.get("timeout", 5.0)),
    )
    conn = DatabaseConnection.get_instance(config)

    users_repo = SQLiteUserRepository(conn)
    attendance_repo = SQLiteAttendanceRepository(conn)
    leave_repo = SQLiteLeaveRepository(conn)
    payroll_repo = SQLitePayrollRepository(conn)

    sanitizer = RemarkSanitizer(
        DEFAULT_REMARK_DENYLIST if remark_denylist is None else remark_denylist,
        word_boundary=remark_word_boundary,
    )

    auth_service = AuthService(users_repo)
    employee_service = EmployeeService(users_repo, transaction=conn.transaction)
    attendance_service = AttendanceService(attendance_repo)
    leave_service = LeaveService(
        leave_repo,
        attendance_repo,
        sanitizer=sanitizer,
        rejection_policy=RejectionPolicy(rejection_policy),
        allow_redecision=allow_redecision,
        transaction=conn.transaction,
    )
    payroll_service = PayrollService(payroll_repo, users_repo, transaction=conn.transaction)

    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        payroll_repo=payroll_repo,
        auth_service=auth_service,
        employee_service=employee_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        payroll_service=payroll_service,
    )
