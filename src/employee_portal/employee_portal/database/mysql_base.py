from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import DanglingReferenceError, DuplicateKeyError, StoreError

logger = logging.getLogger(__name__)


def translate_error(exc: mysql.connector.Error) -> Exception:
    """Map a driver error onto the domain error taxonomy."""

    message = getattr(exc, "msg", None) or str(exc)
    errno = getattr(exc, "errno", None)
    if errno == errorcode.ER_DUP_ENTRY:
        return DuplicateKeyError(f"Duplicate entry: {message}")
    if errno in (errorcode.ER_NO_REFERENCED_ROW_2, errorcode.ER_ROW_IS_REFERENCED_2):
        return DanglingReferenceError(f"Referenced employee does not exist: {message}")
    return StoreError(f"Database error: {message}")


@contextmanager
def db_cursor(conn_factory, *, dictionary: bool = True):
    """One unit of work: commit on success, roll back on any exception.

    Driver errors leave as domain errors (see ``translate_error``); domain
    errors raised inside the block propagate unchanged after the rollback.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("Could not obtain a database connection: %s", exc)
        raise translate_error(exc) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        logger.error("Transaction rolled back: %s", exc)
        raise translate_error(exc) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def employee_exists(cur, employee_id: str) -> bool:
    """Reference check run on the caller's cursor, inside its transaction."""
    cur.execute("SELECT id FROM employees WHERE id=%s", (employee_id,))
    return fetchone(cur) is not None


def to_db_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def build_set_clause(changes: Mapping[str, Any], columns: Mapping[str, str]) -> Tuple[str, List[Any]]:
    """Build ``col=%s, ...`` and its values in lockstep.

    Column names only ever come from ``columns`` (a fixed allow-list); a key
    outside it is a programming error here, since services reject unknown
    fields before reaching the repository.
    """

    assignments: List[str] = []
    values: List[Any] = []
    for field, value in changes.items():
        column = columns[field]
        assignments.append(f"{column}=%s")
        values.append(to_db_value(value))
    return ", ".join(assignments), values


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns arrive as timedelta from mysql-connector; some builds give time or "HH:MM:SS"."""

    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        minutes, seconds = divmod(int(value.total_seconds()) % 86400, 60)
        return time(minutes // 60, minutes % 60, seconds)
    if isinstance(value, str):
        hh, mm, *rest = value.strip().split(":")
        return time(int(hh), int(mm), int(rest[0]) if rest and rest[0] else 0)
    raise TypeError(f"Cannot read {type(value).__name__} as a TIME value")
