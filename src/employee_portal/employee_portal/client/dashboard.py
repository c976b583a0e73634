from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from ..core.enums import AttendanceStatus, LeaveStatus, TaskStatus


def _count_by(rows: Iterable[Dict[str, Any]], key: str, values: Iterable[str]) -> Dict[str, int]:
    counts = Counter(row.get(key) for row in rows)
    return {v: counts.get(v, 0) for v in values}


def attendance_percentage(records: List[Dict[str, Any]]) -> float:
    """Share of records marked present, 0..100 (0 when there are none)."""
    if not records:
        return 0.0
    present = sum(1 for r in records if r.get("status") == AttendanceStatus.PRESENT.value)
    return round(present * 100.0 / len(records), 1)


def admin_summary(
    *,
    employees: List[Dict[str, Any]],
    tasks: List[Dict[str, Any]],
    attendance: List[Dict[str, Any]],
    leaves: List[Dict[str, Any]],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    today_str = (today or date.today()).isoformat()
    attendance_counts = _count_by(attendance, "status", [s.value for s in AttendanceStatus])
    return {
        "employeeCount": len(employees),
        "tasksByStatus": _count_by(tasks, "status", [s.value for s in TaskStatus]),
        "openTasks": sum(1 for t in tasks if t.get("status") != TaskStatus.COMPLETED.value),
        "pendingLeaves": sum(1 for lr in leaves if lr.get("status") == LeaveStatus.PENDING.value),
        "approvedLeaves": sum(1 for lr in leaves if lr.get("status") == LeaveStatus.APPROVED.value),
        "attendance": attendance_counts,
        "absentToday": sum(
            1 for r in attendance if r.get("date") == today_str and r.get("status") == AttendanceStatus.ABSENT.value
        ),
        "attendancePercentage": attendance_percentage(attendance),
    }


def employee_summary(
    employee_id: str,
    *,
    tasks: List[Dict[str, Any]],
    attendance: List[Dict[str, Any]],
    leaves: List[Dict[str, Any]],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    today_str = (today or date.today()).isoformat()
    own_tasks = [t for t in tasks if t.get("assignedTo") == employee_id]
    own_attendance = [r for r in attendance if r.get("employeeId") == employee_id]
    own_leaves = [lr for lr in leaves if lr.get("employeeId") == employee_id]
    todays = next((r for r in own_attendance if r.get("date") == today_str), None)

    return {
        "tasksByStatus": _count_by(own_tasks, "status", [s.value for s in TaskStatus]),
        "attendanceRecords": len(own_attendance),
        "attendancePercentage": attendance_percentage(own_attendance),
        "clockedInToday": bool(todays and todays.get("clockIn")),
        "clockedOutToday": bool(todays and todays.get("clockOut")),
        "leavesByStatus": _count_by(own_leaves, "status", [s.value for s in LeaveStatus]),
    }
