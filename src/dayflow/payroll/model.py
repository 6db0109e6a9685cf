from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class PayrollRecord:
    payroll_id: int
    user_id: int
    month: int
    year: int
    base_salary: float
    allowances: float
    deductions: float
    net_salary: float
    status: PayrollStatus
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass(frozen=True)
class SalarySlip:
    """Read model of one employee's pay for one period."""

    employee: dict
    month: int
    year: int
    base_salary: float
    allowances: float
    deductions: float
    net_salary: float
    status: PayrollStatus

    def to_dict(self) -> dict:
        return {
            "employee": self.employee,
            "month": self.month,
            "year": self.year,
            "base_salary": self.base_salary,
            "allowances": self.allowances,
            "deductions": self.deductions,
            "net_salary": self.net_salary,
            "status": self.status.value,
        }
