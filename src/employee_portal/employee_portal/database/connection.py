from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling
from mysql.connector.constants import ClientFlag

from ..core.constants import DEFAULT_POOL_SIZE

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = DEFAULT_POOL_SIZE

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "employee_management")),
            pool_size=int(db_config.get("pool_size", DEFAULT_POOL_SIZE)),
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class _PooledConnection:
    """A checked-out pool connection that frees its pool slot on close()."""

    def __init__(self, conn, release):
        self._conn = conn
        self._release = release

    def __getattr__(self, name):
        return getattr(self._conn, name)

    def close(self):
        if self._release is None:
            return
        try:
            self._conn.close()
        finally:
            self._release()
            self._release = None


class DatabaseConnection:
    """Singleton-like DB connection factory backed by a bounded pool.

    The pool is created lazily on first use so the app can start (and be
    tested) without a reachable server. ``connect()`` hands out a pooled
    connection and closing it returns it to the pool. When every connection
    is checked out, ``connect()`` blocks until one is closed instead of
    failing with the pool's PoolError.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._lock = threading.Lock()
        self._slots = threading.BoundedSemaphore(int(config.pool_size))

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance._config != config:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._lock:
            if self._pool is None:
                logger.info("Opening connection pool (size=%s) to %s", self._config.pool_size, self._config.describe())
                self._pool = pooling.MySQLConnectionPool(
                    pool_name="employee_portal",
                    pool_size=int(self._config.pool_size),
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                    autocommit=False,
                    # rowcount = matched rows, so an UPDATE that changes nothing still counts as found.
                    client_flags=[ClientFlag.FOUND_ROWS],
                )
            return self._pool

    def connect(self):
        self._slots.acquire()
        try:
            conn = self._get_pool().get_connection()
        except BaseException:
            self._slots.release()
            raise
        return _PooledConnection(conn, self._slots.release)
