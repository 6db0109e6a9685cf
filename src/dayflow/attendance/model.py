from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's attendance for one calendar day."""

    attendance_id: int
    user_id: int
    work_date: date
    status: AttendanceStatus
    check_in: Optional[str] = None
    check_out: Optional[str] = None
