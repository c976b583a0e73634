from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

# Demo accounts: (employee id, email, password). Employees come from seed.sql.
DEMO_ACCOUNTS = (
    ("1", "admin@company.com", "admin123"),
    ("2", "employee@company.com", "emp123"),
)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


_DB_SELECTION = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def _prepare_sql(text: str) -> str:
    # The target database comes from DB_CONFIG, not from the file.
    return _DB_SELECTION.sub("", _LINE_COMMENT.sub("", text))


def _iter_sql_statements(sql: str) -> Iterable[str]:
    """Split on semicolons that sit outside quoted literals."""
    start = 0
    quote = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", "\""):
            quote = ch
        elif ch == ";":
            statement = sql[start:i].strip()
            if statement:
                yield statement
            start = i + 1
        i += 1

    statement = sql[start:].strip()
    if statement:
        yield statement


def _run_sql_file(db_config: dict, path: str | Path) -> None:
    target = DBConfig.from_dict(db_config)
    sql = _prepare_sql(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_sql_file(db_config, schema_path)
    logger.info("Applied schema from %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_sql_file(db_config, seed_path)
    logger.info("Applied seed data from %s", seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Give the seeded demo employees real password hashes."""

    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)
        for employee_id, email, password in DEMO_ACCOUNTS:
            cur.execute("SELECT id FROM employees WHERE id=%s AND email=%s", (employee_id, email))
            if not cur.fetchone():
                logger.warning("Demo employee %s (%s) missing; run the seed first", employee_id, email)
                continue
            cur.execute(
                """
                INSERT INTO employee_credentials(employee_id, password_hash)
                VALUES(%s, %s)
                ON DUPLICATE KEY UPDATE password_hash=VALUES(password_hash)
                """,
                (employee_id, generate_password_hash(password)),
            )
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
