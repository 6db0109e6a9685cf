from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create_leave(
        self,
        *,
        user_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        remarks: str,
    ) -> int:
        raise NotImplementedError

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_leave_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[dict]:
        """Return API rows, newest first. Rows carry the employee's identity columns."""

        raise NotImplementedError

    def decide_leave(
        self,
        *,
        request_id: int,
        status: LeaveStatus,
        decided_by: int,
        admin_comment: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def list_overlapping(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        exclude_request_id: int,
    ) -> Sequence[LeaveRequest]:
        """Return the user's other non-rejected requests whose range meets start..end."""

        raise NotImplementedError

    # Pre-leave attendance snapshots
    def save_snapshot(self, *, request_id: int, work_date: date, previous_status: Optional[AttendanceStatus]) -> None:
        raise NotImplementedError

    def get_snapshots(self, *, request_id: int) -> dict[date, Optional[AttendanceStatus]]:
        raise NotImplementedError
