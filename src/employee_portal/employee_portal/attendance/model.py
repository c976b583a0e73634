from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Any, Dict, Optional

from ..common.datetime_utils import format_clock, format_date
from ..core.enums import AttendanceStatus

# Fields a PUT may change; employee and date are fixed once recorded.
ATTENDANCE_UPDATE_COLUMNS: Dict[str, str] = {
    "clockOut": "clock_out",
    "status": "status",
    "notes": "notes",
}

ATTENDANCE_CREATE_FIELDS = ("employeeId", "date", "clockIn", "clockOut", "status", "notes")


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day."""

    id: str
    employee_id: str
    work_date: date
    clock_in: time
    clock_out: Optional[time]
    status: AttendanceStatus
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "date": format_date(self.work_date),
            "clockIn": format_clock(self.clock_in),
            "clockOut": format_clock(self.clock_out),
            "status": self.status.value,
            "notes": self.notes,
        }
