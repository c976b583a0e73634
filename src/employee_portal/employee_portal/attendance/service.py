from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local, parse_clock, parse_iso_date
from ..common.ids import new_id
from ..common.validators import is_blank, reject_unknown_fields, require_enum, require_fields, require_non_empty
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES, DEFAULT_WORKDAY_START
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from .factory import ClockInStrategyFactory
from .model import ATTENDANCE_CREATE_FIELDS, ATTENDANCE_UPDATE_COLUMNS, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _optional_clock(value: Any, field_name: str) -> Optional[time]:
    return None if is_blank(value) else parse_clock(value, field_name)


def _optional_text(value: Any) -> Optional[str]:
    return None if is_blank(value) else str(value)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        strategy_factory: ClockInStrategyFactory | None = None,
        workday_start: time = DEFAULT_WORKDAY_START,
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    ):
        self._attendance = attendance
        self._factory = strategy_factory or ClockInStrategyFactory()
        self._workday_start = workday_start
        self._grace_minutes = int(grace_minutes)

    def list_records(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all()

    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_employee(employee_id)

    def get_record(self, attendance_id: str) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def mark_attendance(self, body: Mapping[str, Any]) -> AttendanceRecord:
        """Admin/manual entry of a full record."""
        require_fields(body, ("employeeId", "date", "clockIn", "status"))
        reject_unknown_fields(body, ATTENDANCE_CREATE_FIELDS)

        clock_in = parse_clock(body["clockIn"], "clockIn")
        clock_out = _optional_clock(body.get("clockOut"), "clockOut")
        if clock_out and clock_out < clock_in:
            raise ValidationError("clockOut cannot be earlier than clockIn")

        record = AttendanceRecord(
            id=new_id(),
            employee_id=require_non_empty(body["employeeId"], "employeeId"),
            work_date=parse_iso_date(body["date"], "date"),
            clock_in=clock_in,
            clock_out=clock_out,
            status=require_enum(body["status"], AttendanceStatus, "status"),
            notes=_optional_text(body.get("notes")),
        )
        self._attendance.create(record)
        logger.info("Attendance record added with id=%s (employee=%s, date=%s)", record.id, record.employee_id, record.work_date)
        return record

    def update_record(self, attendance_id: str, body: Mapping[str, Any]) -> None:
        if not body:
            raise ValidationError("No fields to update")
        reject_unknown_fields(body, ATTENDANCE_UPDATE_COLUMNS)

        changes: dict[str, Any] = {}
        if "clockOut" in body:
            changes["clockOut"] = _optional_clock(body["clockOut"], "clockOut")
        if "status" in body:
            changes["status"] = require_enum(body["status"], AttendanceStatus, "status")
        if "notes" in body:
            changes["notes"] = _optional_text(body["notes"])

        if changes.get("clockOut") is not None and changes["clockOut"] < self.get_record(attendance_id).clock_in:
            raise ValidationError("clockOut cannot be earlier than clockIn")

        if not self._attendance.update_fields(attendance_id, changes):
            raise NotFoundError("Attendance record not found")
        logger.info("Attendance record %s updated (%s)", attendance_id, ", ".join(sorted(changes)))

    def delete_record(self, attendance_id: str) -> None:
        if not self._attendance.delete_by_id(attendance_id):
            raise NotFoundError("Attendance record not found")
        logger.info("Attendance record %s deleted", attendance_id)

    def clock_in(self, employee_id: Any, *, now: datetime | None = None) -> AttendanceRecord:
        employee_id = require_non_empty(employee_id, "employeeId")
        now = (now or now_local()).replace(second=0, microsecond=0)
        if self._attendance.get_for_employee_and_date(employee_id, now.date()):
            raise ValidationError("Already clocked in today")

        strategy =self._factory.for_clock_in(now=now, workday_start=self._workday_start, grace_minutes=self._grace_minutes)
        decision = strategy.decide_clock_in(now=now, workday_start=self._workday_start, grace_minutes=self._grace_minutes)

        record = AttendanceRecord(
            id=new_id(),
            employee_id=employee_id,
            work_date=now.date(),
            clock_in=now.time(),
            clock_out=None,
            status=decision.status,
            notes=decision.note,
        )
        self._attendance.create(record)
        logger.info("Employee %s clocked in at %s (%s)", employee_id, f"{now:%H:%M}", decision.status.value)
        return record

    def clock_out(self, employee_id: Any, *, now: datetime | None = None) -> AttendanceRecord:
        employee_id = require_non_empty(employee_id, "employeeId")
        now = (now or now_local()).replace(second=0, microsecond=0)

        record = self._attendance.get_for_employee_and_date(employee_id, now.date())
        if not record:
            raise NotFoundError("No clock-in found for today")
        if record.clock_out:
            raise ValidationError("Already clocked out today")

        if not self._attendance.update_fields(record.id, {"clockOut": now.time()}):
            raise NotFoundError("Attendance record not found")
        logger.info("Employee %s clocked out at %s", employee_id, f"{now:%H:%M}")
        return self.get_record(record.id)
