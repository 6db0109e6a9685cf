from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: base + allowances - deductions, rounded to cents."""

    def net_salary(self, *, base_salary: float, allowances: float, deductions: float) -> float:
        total = Decimal(str(base_salary)) + Decimal(str(allowances)) - Decimal(str(deductions))
        return float(total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
