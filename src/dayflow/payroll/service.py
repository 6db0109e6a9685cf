from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import Any, Callable, ContextManager, Mapping, Optional

from ..common.validators import optional_int, require_amount, require_enum, require_int
from ..core.constants import MAX_PAYROLL_YEAR, MIN_PAYROLL_YEAR
from ..core.enums import PayrollStatus
from ..core.exceptions import NotFoundError
from ..core.identity import Identity
from ..core.policy import authorize, is_allowed
from ..users.repository import UserRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import SalarySlip
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayrollService:
    def __init__(
        self,
        payroll: PayrollRepository,
        users: UserRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        transaction: Callable[[], ContextManager] = nullcontext,
    ):
        self._payroll = payroll
        self._users = users
        self._calculator = calculator or StandardPayrollCalculator()
        self._transaction = transaction

    def list_mine(self, caller: Identity) -> list[dict]:
        authorize(caller.role, "payroll", "list_own")
        return list(self._payroll.list_records(user_id=caller.user_id))

    def list_all(
        self,
        caller: Identity,
        *,
        month: Any = None,
        year: Any = None,
        user_id: Any = None,
    ) -> list[dict]:
        authorize(caller.role, "payroll", "list_all")
        return list(
            self._payroll.list_records(
                user_id=optional_int(user_id, "user_id"),
                month=optional_int(month, "month", min_value=1, max_value=12),
                year=optional_int(year, "year"),
            )
        )

    def list(self, caller: Identity, **filters: Any) -> list[dict]:
        """All records (filtered) for admin/hr, the caller's own otherwise."""
        if is_allowed(caller.role, "payroll", "list_all"):
            return self.list_all(caller, **filters)
        return self.list_mine(caller)

    def create(self, caller: Identity, record: Mapping[str, Any]) -> tuple[int, float]:
        authorize(caller.role, "payroll", "create")

        user_id = require_int(record.get("user_id"), "user_id", min_value=1)
        month = require_int(record.get("month"), "month", min_value=1, max_value=12)
        year = require_int(record.get("year"), "year", min_value=MIN_PAYROLL_YEAR, max_value=MAX_PAYROLL_YEAR)
        base_salary = require_amount(record.get("base_salary"), "base_salary")
        allowances = require_amount(record.get("allowances"), "allowances", default=0)
        deductions = require_amount(record.get("deductions"), "deductions", default=0)
        status = require_enum(record.get("status") or PayrollStatus.PENDING.value, PayrollStatus, "Invalid status")

        net_salary = self._calculator.net_salary(
            base_salary=base_salary,
            allowances=allowances,
            deductions=deductions,
        )

        with self._transaction():
            if not self._users.get_by_id(user_id):
                raise NotFoundError("Employee not found")
            payroll_id = self._payroll.save_record(
                user_id=user_id,
                month=month,
                year=year,
                base_salary=base_salary,
                allowances=allowances,
                deductions=deductions,
                net_salary=net_salary,
                status=status,
            )

        logger.info("Payroll %s saved for user %s (%02d/%d, net %.2f)", payroll_id, user_id, month, year, net_salary)
        return payroll_id, net_salary

    def set_status(self, caller: Identity, payroll_id: int, status: Any) -> str:
        authorize(caller.role, "payroll", "set_status")
        new_status = require_enum(status, PayrollStatus, "Invalid status")

        with self._transaction():
            if not self._payroll.get_record(payroll_id=int(payroll_id)):
                raise NotFoundError("Payroll record not found")
            self._payroll.set_status(payroll_id=int(payroll_id), status=new_status)

        return f"Payroll status updated to {new_status.value}"

    def salary_slip(self, caller: Identity, user_id: int, *, month: Any, year: Any) -> SalarySlip:
        authorize(caller.role, "salary_slip", "read", owner=caller.owns(user_id))
        month_n = require_int(month, "month", min_value=1, max_value=12)
        year_n = require_int(year, "year", min_value=MIN_PAYROLL_YEAR, max_value=MAX_PAYROLL_YEAR)

        employee = self._users.get_employee(int(user_id))
        if not employee:
            raise NotFoundError("Employee not found")

        record = self._payroll.get_for_period(user_id=int(user_id), month=month_n, year=year_n)
        if not record:
            raise NotFoundError("Payroll record not found for this period")

        return SalarySlip(
            employee={
                "id": employee["id"],
                "employee_id": employee["employee_id"],
                "first_name": employee.get("first_name"),
                "last_name": employee.get("last_name"),
                "department": employee.get("department"),
                "job_title": employee.get("job_title"),
            },
            month=record.month,
            year=record.year,
            base_salary=record.base_salary,
            allowances=record.allowances,
            deductions=record.deductions,
            net_salary=record.net_salary,
            status=record.status,
        )

    @staticmethod
    def render_salary_slip(slip: SalarySlip) -> str:
        emp = slip.employee
        name = f"{emp.get('first_name') or ''} {emp.get('last_name') or ''}".strip()
        lines = [
            "SALARY SLIP",
            "===========",
            f"Employee: {name}",
            f"Employee ID: {emp.get('employee_id')}",
            f"Department: {emp.get('department') or 'N/A'}",
            f"Month: {slip.month}/{slip.year}",
            "",
            f"Base Salary: ${slip.base_salary:.2f}",
            f"Allowances: ${slip.allowances:.2f}",
            f"Deductions: ${slip.deductions:.2f}",
            "------------------------",
            f"Net Salary: ${slip.net_salary:.2f}",
            f"Status: {slip.status.value}",
        ]
        return "\n".join(lines) + "\n"

    @staticmethod
    def slip_filename(slip: SalarySlip) -> str:
        return f"salary-slip-{slip.employee.get('employee_id')}-{slip.month}-{slip.year}.txt"
