from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    HR = "hr"
    EMPLOYEE = "employee"

    @property
    def is_privileged(self) -> bool:
        return self in {Role.ADMIN, Role.HR}


class LeaveType(str, Enum):
    PAID = "paid"
    SICK = "sick"
    UNPAID = "unpaid"


class LeaveStatus(str, Enum):
    """Approval workflow state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AttendanceStatus(str, Enum):
    """Per-day attendance status stored in the database."""

    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half_day"
    LEAVE = "leave"


class PayrollStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class RejectionPolicy(str, Enum):
    """What happens to leave days in attendance when a request is rejected."""

    ABSENT = "absent"
    RESTORE = "restore"
