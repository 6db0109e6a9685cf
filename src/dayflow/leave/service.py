from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import Any, Callable, ContextManager, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import iter_days
from ..common.sanitizer import RemarkSanitizer
from ..common.validators import require_date, require_enum
from ..core.enums import AttendanceStatus, LeaveStatus, LeaveType, RejectionPolicy
from ..core.exceptions import NotFoundError, ValidationError
from ..core.identity import Identity
from ..core.policy import authorize
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

DECISION_STATUSES = {LeaveStatus.APPROVED, LeaveStatus.REJECTED}


class LeaveService:
    """Use case: leave requests and the attendance days they drive.

    Submitting a request marks every day of its range as ``leave`` in
    attendance. Rejecting it reverts those days according to
    ``rejection_policy``: ``ABSENT`` forces each day to ``absent`` whatever it
    held before, ``RESTORE`` puts back the status recorded at submission.
    Each operation runs inside one ``transaction()`` block.
    """

    def __init__(
        self,
        leaves: LeaveRepository,
        attendance: AttendanceRepository,
        *,
        sanitizer: Optional[RemarkSanitizer] = None,
        rejection_policy: RejectionPolicy = RejectionPolicy.ABSENT,
        allow_redecision: bool = True,
        transaction: Callable[[], ContextManager] = nullcontext,
    ):
        self._leaves = leaves
        self._attendance = attendance
        self._sanitize = sanitizer or RemarkSanitizer()
        self._rejection_policy = RejectionPolicy(rejection_policy)
        self._allow_redecision = bool(allow_redecision)
        self._transaction = transaction

    def submit(
        self,
        caller: Identity,
        *,
        leave_type: Any,
        start_date: Any,
        end_date: Any,
        remarks: Optional[str] = None,
    ) -> int:
        authorize(caller.role, "leave", "submit")

        kind = require_enum(leave_type, LeaveType, "Invalid leave type")
        start = require_date(start_date, "Start date")
        end = require_date(end_date, "End date")
        if start > end:
            raise ValidationError("Start date must be before end date")

        with self._transaction():
            request_id = self._leaves.create_leave(
                user_id=caller.user_id,
                leave_type=kind,
                start_date=start,
                end_date=end,
                remarks=self._sanitize(remarks),
            )
            # A day already under another request keeps that request's pre-leave status.
            inherited: dict = {}
            for other in self._leaves.list_overlapping(
                user_id=caller.user_id, start_date=start, end_date=end, exclude_request_id=request_id
            ):
                for day, previous in self._leaves.get_snapshots(request_id=other.request_id).items():
                    inherited.setdefault(day, previous)

            for day in iter_days(start, end):
                if day in inherited:
                    previous = inherited[day]
                else:
                    existing = self._attendance.get_for_user_and_date(caller.user_id, day)
                    previous = existing.status if existing else None
                self._leaves.save_snapshot(request_id=request_id, work_date=day, previous_status=previous)
                self._attendance.upsert_status(user_id=caller.user_id, work_date=day, status=AttendanceStatus.LEAVE)

        logger.info("Leave %s submitted by user %s (%s, %s..%s)", request_id, caller.user_id, kind.value, start, end)
        return request_id

    def _clean(self, rows) -> list[dict]:
        return [
            {**row, "remarks": self._sanitize(row.get("remarks")), "admin_comment": self._sanitize(row.get("admin_comment"))}
            for row in rows
        ]

    def list_mine(self, caller: Identity) -> list[dict]:
        authorize(caller.role, "leave", "list_own")
        return self._clean(self._leaves.list_leave_requests(user_id=caller.user_id))

    def list_all(self, caller: Identity, *, status: Any = None) -> list[dict]:
        authorize(caller.role, "leave", "list_all")
        status_filter = require_enum(status, LeaveStatus, "Invalid status") if status else None
        return self._clean(self._leaves.list_leave_requests(status=status_filter))

    def decide(self, caller: Identity, request_id: int, *, status: Any, admin_comment: Optional[str] = None) -> str:
        authorize(caller.role, "leave", "decide")

        decision = require_enum(status, LeaveStatus, "Invalid status")
        if decision not in DECISION_STATUSES:
            raise ValidationError("Invalid status")

        with self._transaction():
            leave = self._leaves.get_leave(request_id=int(request_id))
            if not leave:
                raise NotFoundError("Leave request not found")
            if not self._allow_redecision and leave.status != LeaveStatus.PENDING:
                raise ValidationError(f"Leave request is already {leave.status.value}")

            self._leaves.decide_leave(
                request_id=leave.request_id,
                status=decision,
                decided_by=caller.user_id,
                admin_comment=self._sanitize(admin_comment),
            )
            if decision == LeaveStatus.REJECTED:
                self._revert_attendance(leave)

        logger.info("Leave %s %s by user %s", leave.request_id, decision.value, caller.user_id)
        return f"Leave request {decision.value} successfully"

    def _revert_attendance(self, leave: LeaveRequest) -> None:
        snapshots: dict = {}
        still_on_leave: set = set()
        if self._rejection_policy == RejectionPolicy.RESTORE:
            snapshots = self._leaves.get_snapshots(request_id=leave.request_id)
            # Days another pending or approved request covers stay as leave.
            for other in self._leaves.list_overlapping(
                user_id=leave.user_id,
                start_date=leave.start_date,
                end_date=leave.end_date,
                exclude_request_id=leave.request_id,
            ):
                still_on_leave.update(iter_days(max(other.start_date, leave.start_date), min(other.end_date, leave.end_date)))

        for day in iter_days(leave.start_date, leave.end_date):
            if day in still_on_leave:
                continue
            if self._rejection_policy == RejectionPolicy.RESTORE and day in snapshots:
                previous = snapshots[day]
                if previous is None:
                    self._attendance.delete_for_user_and_date(leave.user_id, day)
                else:
                    self._attendance.upsert_status(user_id=leave.user_id, work_date=day, status=previous)
                continue
            self._attendance.set_status_if_exists(user_id=leave.user_id, work_date=day, status=AttendanceStatus.ABSENT)
