from __future__ import annotations

from datetime import date, time, timedelta

import mysql.connector
import pytest

from employee_portal.attendance.model import AttendanceRecord
from employee_portal.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from employee_portal.core.enums import AttendanceStatus, LeaveStatus, Role
from employee_portal.core.exceptions import (
    ConflictError,
    DanglingReferenceError,
    DuplicateKeyError,
    NotFoundError,
    ReviewerNotFoundError,
    StoreError,
)
from employee_portal.database.mysql_base import build_set_clause, db_cursor, normalize_mysql_time
from employee_portal.employees.model import EMPLOYEE_COLUMNS
from employee_portal.leaves.mysql_leave_repository import MySQLLeaveRepository
from employee_portal.tasks.mysql_task_repository import MySQLTaskRepository


class ScriptedCursor:
    """Replays one scripted result per execute(); an Exception entry is raised."""

    def __init__(self, script):
        self._script = list(script)
        self._current = {}
        self.executed: list[tuple[str, tuple]] = []
        self.rowcount = -1
        self.closed = False

    def execute(self, sql, params=()):
        self.executed.append((" ".join(sql.split()), tuple(params)))
        step = self._script.pop(0) if self._script else {}
        if isinstance(step, Exception):
            raise step
        self._current = step
        self.rowcount = step.get("rowcount", -1)

    def fetchone(self):
        return self._current.get("fetchone")

    def fetchall(self):
        return self._current.get("fetchall", [])

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: ScriptedCursor):
        self._cursor = cursor
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, *script):
        self.cursor = ScriptedCursor(script)
        self.conn = FakeConnection(self.cursor)

    def connect(self):
        return self.conn


def _review(repo, version=0):
    repo.review(
        request_id="lr-1",
        status=LeaveStatus.APPROVED,
        reviewed_by="1",
        review_date=date(2026, 10, 18),
        comments=None,
        expected_version=version,
    )


def test_review_success_is_one_conditional_update_committed():
    factory = FakeConnFactory({"fetchone": {"id": "1"}}, {"rowcount": 1})

    _review(MySQLLeaveRepository(factory), version=0)

    update_sql, params = factory.cursor.executed[1]
    assert update_sql.startswith("UPDATE leave_requests SET status=%s")
    assert "version=version + 1" in update_sql
    assert "WHERE id=%s AND version=%s AND status=%s" in update_sql
    assert params == ("approved", "1", date(2026, 10, 18), None, "lr-1", 0, "pending")
    assert factory.conn.commits == 1
    assert factory.conn.rollbacks == 0
    assert factory.conn.closed


def test_review_stale_version_reports_current_version_and_rolls_back():
    factory = FakeConnFactory({"fetchone": {"id": "1"}}, {"rowcount": 0}, {"fetchone": {"version": 3}})

    with pytest.raises(ConflictError) as exc:
        _review(MySQLLeaveRepository(factory), version=1)

    assert exc.value.current_version == 3
    assert factory.cursor.executed[2][0] == "SELECT version FROM leave_requests WHERE id=%s FOR UPDATE"
    assert factory.conn.commits == 0
    assert factory.conn.rollbacks == 1
    assert factory.conn.closed


def test_review_unknown_request_is_not_found():
    factory = FakeConnFactory({"fetchone": {"id": "1"}}, {"rowcount": 0}, {"fetchone": None})

    with pytest.raises(NotFoundError):
        _review(MySQLLeaveRepository(factory))
    assert factory.conn.rollbacks == 1


def test_review_unknown_reviewer_never_updates():
    factory = FakeConnFactory({"fetchone": None})

    with pytest.raises(ReviewerNotFoundError):
        _review(MySQLLeaveRepository(factory))
    assert len(factory.cursor.executed) == 1
    assert factory.conn.rollbacks == 1


@pytest.mark.parametrize(
    "errno,expected",
    [(1062, DuplicateKeyError), (1452, DanglingReferenceError), (1451, DanglingReferenceError), (1213, StoreError)],
)
def test_db_cursor_translates_driver_errors(errno, expected):
    factory = FakeConnFactory(mysql.connector.errors.DatabaseError(msg="boom", errno=errno))

    with pytest.raises(expected) as exc:
        with db_cursor(factory) as (_, cur):
            cur.execute("UPDATE anything SET x=1")

    assert isinstance(exc.value.__cause__, mysql.connector.Error)
    assert factory.conn.rollbacks == 1
    assert factory.conn.commits == 0
    assert factory.conn.closed
    assert factory.cursor.closed


def test_store_error_keeps_driver_message():
    factory = FakeConnFactory(mysql.connector.errors.OperationalError(msg="Lost connection", errno=2013))

    with pytest.raises(StoreError, match="Lost connection"):
        with db_cursor(factory) as (_, cur):
            cur.execute("SELECT 1")


def test_attendance_unique_index_race_surfaces_as_duplicate_day():
    record = AttendanceRecord(
        id="a-1",
        employee_id="2",
        work_date=date(2026, 10, 12),
        clock_in=time(9, 0),
        clock_out=None,
        status=AttendanceStatus.PRESENT,
    )
    factory = FakeConnFactory(
        {"fetchone": {"id": "2"}},
        {"fetchone": None},
        mysql.connector.errors.IntegrityError(msg="Duplicate entry '2-2026-10-12'", errno=1062),
    )

    with pytest.raises(DuplicateKeyError, match="already exists for this employee on this date"):
        MySQLAttendanceRepository(factory).create(record)
    assert factory.conn.rollbacks == 1


def test_task_update_on_missing_row_skips_assignee_check():
    factory = FakeConnFactory({"fetchone": None})

    assert MySQLTaskRepository(factory).update_fields("missing", {"assignedTo": "99"}) is False
    assert factory.cursor.executed == [("SELECT id FROM tasks WHERE id=%s FOR UPDATE", ("missing",))]
    assert factory.conn.commits == 1


def test_build_set_clause_uses_column_names_and_enum_values():
    clause, values = build_set_clause({"joinedDate": date(2020, 1, 1), "role": Role.ADMIN}, EMPLOYEE_COLUMNS)

    assert clause == "joined_date=%s, role=%s"
    assert values == [date(2020, 1, 1), "admin"]


def test_build_set_clause_refuses_unknown_field():
    with pytest.raises(KeyError):
        build_set_clause({"id = 'x'; --": 1}, EMPLOYEE_COLUMNS)


@pytest.mark.parametrize(
    "raw,expected",
    [(timedelta(hours=9, minutes=5), time(9, 5)), ("17:30:00", time(17, 30)), (time(8, 0), time(8, 0)), (None, None)],
)
def test_normalize_mysql_time(raw, expected):
    assert normalize_mysql_time(raw) == expected
