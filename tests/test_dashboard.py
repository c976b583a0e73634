from __future__ import annotations

from datetime import date

from employee_portal.client.dashboard import admin_summary, attendance_percentage, employee_summary

TODAY = date(2026, 10, 18)

TASKS = [
    {"id": "t1", "assignedTo": "2", "status": "pending"},
    {"id": "t2", "assignedTo": "2", "status": "completed"},
    {"id": "t3", "assignedTo": "3", "status": "in_progress"},
]
ATTENDANCE = [
    {"id": "a1", "employeeId": "2", "date": "2026-10-18", "status": "present", "clockIn": "08:55", "clockOut": None},
    {"id": "a2", "employeeId": "3", "date": "2026-10-18", "status": "absent", "clockIn": None, "clockOut": None},
    {"id": "a3", "employeeId": "2", "date": "2026-10-17", "status": "late", "clockIn": "10:10", "clockOut": "18:00"},
    {"id": "a4", "employeeId": "3", "date": "2026-10-17", "status": "present", "clockIn": "09:00", "clockOut": "17:00"},
]
LEAVES = [
    {"id": "l1", "employeeId": "2", "status": "approved"},
    {"id": "l2", "employeeId": "3", "status": "pending"},
]


def test_attendance_percentage_handles_empty():
    assert attendance_percentage([]) == 0.0
    assert attendance_percentage(ATTENDANCE) == 50.0


def test_admin_summary_counts():
    summary = admin_summary(employees=[{"id": "1"}, {"id": "2"}, {"id": "3"}], tasks=TASKS, attendance=ATTENDANCE, leaves=LEAVES, today=TODAY)

    assert summary["employeeCount"] == 3
    assert summary["openTasks"] == 2
    assert summary["tasksByStatus"] == {"pending": 1, "in_progress": 1, "completed": 1, "on_hold": 0}
    assert summary["pendingLeaves"] == 1
    assert summary["approvedLeaves"] == 1
    assert summary["attendance"]["late"] == 1
    assert summary["absentToday"] == 1


def test_employee_summary_only_counts_own_rows():
    summary = employee_summary("2", tasks=TASKS, attendance=ATTENDANCE, leaves=LEAVES, today=TODAY)

    assert summary["tasksByStatus"]["completed"] == 1
    assert summary["tasksByStatus"]["in_progress"] == 0
    assert summary["attendanceRecords"] == 2
    assert summary["clockedInToday"] is True
    assert summary["clockedOutToday"] is False
    assert summary["leavesByStatus"] == {"pending": 0, "approved": 1, "rejected": 0}
