from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access control."""

    ADMIN = "Admin"
    EMPLOYEE = "Employee"


class AttendanceStatus(str, Enum):
    """Normalized attendance status stored in the database."""

    PRESENT = "Present"
    ABSENT = "Absent"
    ON_LEAVE = "OnLeave"


class LeaveType(str, Enum):
    PAID = "Paid"
    SICK = "Sick"
    UNPAID = "Unpaid"


class LeaveStatus(str, Enum):
    """Leave approval workflow state."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class AttendanceAction(str, Enum):
    CHECK_IN = "checkIn"
    CHECK_OUT = "checkOut"
