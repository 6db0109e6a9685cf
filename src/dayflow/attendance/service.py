from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from ..core.identity import Identity
from ..core.policy import authorize
from .repository import AttendanceRepository


class AttendanceService:
    """Use case: read the per-day attendance calendar."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    @staticmethod
    def _check_range(start: Optional[date], end: Optional[date]) -> None:
        if start and end and end < start:
            raise ValidationError("Start date must be before end date")

    def list_mine(self, caller: Identity, *, start: Optional[date] = None, end: Optional[date] = None) -> list[dict]:
        authorize(caller.role, "attendance", "list_own")
        self._check_range(start, end)
        return list(self._attendance.list_range(user_id=caller.user_id, start=start, end=end))

    def list_all(
        self,
        caller: Identity,
        *,
        user_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[dict]:
        authorize(caller.role, "attendance", "list_all")
        self._check_range(start, end)
        return list(self._attendance.list_range(user_id=user_id, start=start, end=end))
