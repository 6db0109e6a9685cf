from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    status: LeaveStatus
    remarks: Optional[str] = None
    admin_comment: Optional[str] = None
    approved_by: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
