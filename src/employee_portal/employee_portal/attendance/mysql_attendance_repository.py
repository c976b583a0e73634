from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import DanglingReferenceError, DuplicateKeyError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    build_set_clause,
    db_cursor,
    employee_exists,
    fetchall,
    fetchone,
    normalize_mysql_time,
)
from .model import ATTENDANCE_UPDATE_COLUMNS, AttendanceRecord
from .repository import AttendanceRepository

DUPLICATE_DAY_MESSAGE = "Attendance record already exists for this employee on this date"

_SELECT = """
    SELECT id, employee_id, work_date, clock_in, clock_out, status, notes
    FROM attendance
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        clock_in=normalize_mysql_time(r["clock_in"]),
        clock_out=normalize_mysql_time(r.get("clock_out")),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY work_date DESC, clock_in")
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s ORDER BY work_date DESC", (employee_id,))
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (attendance_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s AND work_date=%s", (employee_id, work_date))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create(self, record: AttendanceRecord) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                if not employee_exists(cur, record.employee_id):
                    raise DanglingReferenceError("Employee does not exist")

                cur.execute(
                    "SELECT id FROM attendance WHERE employee_id=%s AND work_date=%s",
                    (record.employee_id, record.work_date),
                )
                if fetchone(cur):
                    raise DuplicateKeyError(DUPLICATE_DAY_MESSAGE)

                cur.execute(
                    """
                    INSERT INTO attendance(id, employee_id, work_date, clock_in, clock_out, status, notes)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.id,
                        record.employee_id,
                        record.work_date,
                        record.clock_in,
                        record.clock_out,
                        record.status.value,
                        record.notes,
                    ),
                )
        except DuplicateKeyError as e:
            # The unique index backs the pre-check when two requests race past it.
            raise DuplicateKeyError(DUPLICATE_DAY_MESSAGE) from e

    def update_fields(self, attendance_id: str, changes: Mapping[str, Any]) -> bool:
        set_clause, values = build_set_clause(changes, ATTENDANCE_UPDATE_COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE attendance SET {set_clause} WHERE id=%s", tuple(values + [attendance_id]))
            return cur.rowcount > 0

    def delete_by_id(self, attendance_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE id=%s", (attendance_id,))
            return cur.rowcount > 0
