from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import (
    ConflictError,
    DanglingReferenceError,
    DuplicateKeyError,
    NotFoundError,
    ReviewerNotFoundError,
)
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, employee_exists, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

CONFLICT_MESSAGE = "Conflict: Leave request was modified by another user"

_SELECT = """
    SELECT id, employee_id, start_date, end_date, type, reason, status,
           applied_date, reviewed_by, review_date, comments, version
    FROM leave_requests
"""


def _row_to_leave(r: dict) -> LeaveRequest:
    reviewed_by = r.get("reviewed_by")
    return LeaveRequest(
        id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        type=LeaveType(r["type"]),
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        applied_date=r["applied_date"],
        reviewed_by=str(reviewed_by) if reviewed_by is not None else None,
        review_date=r.get("review_date"),
        comments=r.get("comments"),
        version=int(r["version"]),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_requests(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[LeaveStatus] = None,
    ) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {where} ORDER BY applied_date DESC, start_date DESC", tuple(params))
            return [_row_to_leave(r) for r in fetchall(cur)]

    def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (request_id,))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def create(self, leave: LeaveRequest) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                if not employee_exists(cur, leave.employee_id):
                    raise DanglingReferenceError("Employee does not exist")
                cur.execute(
                    """
                    INSERT INTO leave_requests(
                        id, employee_id, start_date, end_date, type, reason, status, applied_date, version
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        leave.id,
                        leave.employee_id,
                        leave.start_date,
                        leave.end_date,
                        leave.type.value,
                        leave.reason,
                        leave.status.value,
                        leave.applied_date,
                        int(leave.version),
                    ),
                )
        except DuplicateKeyError as e:
            raise DuplicateKeyError("Leave request ID already exists") from e

    def review(
        self,
        *,
        request_id: str,
        status: LeaveStatus,
        reviewed_by: str,
        review_date: date,
        comments: Optional[str],
        expected_version: int,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            if not employee_exists(cur, reviewed_by):
                raise ReviewerNotFoundError("Admin does not exist")

            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, reviewed_by=%s, review_date=%s, comments=%s, version=version + 1
                WHERE id=%s AND version=%s AND status=%s
                """,
                (
                    status.value,
                    reviewed_by,
                    review_date,
                    comments,
                    request_id,
                    int(expected_version),
                    LeaveStatus.PENDING.value,
                ),
            )
            if cur.rowcount == 1:
                return

            # Locking read: returns the latest committed version, not the snapshot.
            cur.execute("SELECT version FROM leave_requests WHERE id=%s FOR UPDATE", (request_id,))
            current = fetchone(cur)
            if not current:
                raise NotFoundError("Leave request not found")
            raise ConflictError(CONFLICT_MESSAGE, current_version=int(current["version"]))
