from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import LoginAction
from ..core.exceptions import DanglingReferenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, employee_exists, fetchall
from .model import LoginLog
from .repository import LoginLogRepository


def _row_to_log(r: dict) -> LoginLog:
    return LoginLog(
        id=str(r["id"]),
        employee_id=str(r["employee_id"]),
        action=LoginAction(r["action"]),
        timestamp=r["timestamp"],
    )


class MySQLLoginLogRepository(LoginLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_logs(self, employee_id: Optional[str] = None) -> Sequence[LoginLog]:
        sql = "SELECT id, employee_id, action, timestamp FROM login_logs"
        params: tuple = ()
        if employee_id is not None:
            sql += " WHERE employee_id=%s"
            params = (employee_id,)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " ORDER BY timestamp DESC", params)
            return [_row_to_log(r) for r in fetchall(cur)]

    def append(self, log: LoginLog) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            if not employee_exists(cur, log.employee_id):
                raise DanglingReferenceError("Employee does not exist")
            cur.execute(
                "INSERT INTO login_logs(id, employee_id, action, timestamp) VALUES(%s,%s,%s,%s)",
                (log.id, log.employee_id, log.action.value, log.timestamp),
            )
