from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> None:
        """Insert one record per (employee, date).

        Raises DanglingReferenceError for an unknown employee and
        DuplicateKeyError when the employee already has a record that day.
        """

        raise NotImplementedError

    def update_fields(self, attendance_id: str, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete_by_id(self, attendance_id: str) -> bool:
        raise NotImplementedError
