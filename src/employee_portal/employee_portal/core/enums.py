from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for client-side permission checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"


class AttendanceStatus(str, Enum):
    """Attendance status as stored and sent on the wire."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"


class LeaveType(str, Enum):
    SICK = "sick"
    VACATION = "vacation"
    PERSONAL = "personal"
    OTHER = "other"


class LeaveStatus(str, Enum):
    """Leave approval states. APPROVED and REJECTED are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LoginAction(str, Enum):
    LOGIN = "login"
    LOGOUT = "logout"
