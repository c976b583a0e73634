from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import CredentialRepository


class MySQLCredentialRepository(CredentialRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_password_hash(self, employee_id: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT password_hash FROM employee_credentials WHERE employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return str(row["password_hash"]) if row else None
