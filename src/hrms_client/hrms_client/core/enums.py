from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles as issued by the auth endpoint."""

    ADMIN = "Admin"
    HR_OFFICER = "HR Officer"
    EMPLOYEE = "Employee"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    HALF_DAY = "Half-day"
    LATE = "Late"


class LeaveType(str, Enum):
    PAID = "Paid"
    SICK = "Sick"
    UNPAID = "Unpaid"


class RequestStatus(str, Enum):
    """Approval workflow status shared by leave requests and teams."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ViewState(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
