from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert_status(self, *, user_id: int, work_date: date, status: AttendanceStatus) -> None:
        """Set the day's status, inserting the row when the day has none."""

        raise NotImplementedError

    def set_status_if_exists(self, *, user_id: int, work_date: date, status: AttendanceStatus) -> bool:
        raise NotImplementedError

    def delete_for_user_and_date(self, user_id: int, work_date: date) -> bool:
        raise NotImplementedError

    def list_range(
        self,
        *,
        user_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[dict]:
        """Return rows joined with the employee's identity, newest day first."""

        raise NotImplementedError
