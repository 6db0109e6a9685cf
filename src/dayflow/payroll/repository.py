from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayrollRecord


class PayrollRepository(Protocol):
    def save_record(
        self,
        *,
        user_id: int,
        month: int,
        year: int,
        base_salary: float,
        allowances: float,
        deductions: float,
        net_salary: float,
        status: PayrollStatus,
    ) -> int:
        """Insert the period's record, or overwrite it when (user, month, year) exists."""

        raise NotImplementedError

    def get_record(self, *, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_for_period(self, *, user_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def set_status(self, *, payroll_id: int, status: PayrollStatus) -> bool:
        raise NotImplementedError

    def list_records(
        self,
        *,
        user_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[dict]:
        """Return API rows joined with employee identity, newest period first."""

        raise NotImplementedError
