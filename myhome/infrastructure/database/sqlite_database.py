"""
SQLite Database - Infrastructure Layer

Owns a single sqlite3 connection shared across threads. Statements are
serialized through a lock since sqlite3 connections are not safe for
concurrent use.
"""

import sqlite3
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from myhome.shared import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS node (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    category TEXT NOT NULL,
    manufacturer TEXT NOT NULL,
    hardware_id TEXT NOT NULL,
    type TEXT,
    UNIQUE(category, manufacturer, hardware_id)
);

CREATE TABLE IF NOT EXISTS node_status (
    node_id INTEGER NOT NULL REFERENCES node(id) ON DELETE CASCADE,
    "key" TEXT NOT NULL,
    value TEXT,
    PRIMARY KEY (node_id, "key")
);
"""


class SqliteDatabase:
    """sqlite3 client for the node store."""

    def __init__(self, path: str):
        """
        Args:
            path: Database file path, or ":memory:"
        """
        self.path = path
        self._lock = threading.RLock()
        self._connection: Optional[sqlite3.Connection] = sqlite3.connect(
            path, check_same_thread=False
        )

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise sqlite3.ProgrammingError("Database connection is closed")
        return self._connection

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @contextmanager
    def locked(self) -> Iterator[sqlite3.Connection]:
        """Hold the connection lock for the duration of the block."""
        with self._lock:
            yield self.connection

    def create_schema(self) -> None:
        """Create the node tables if they do not exist yet."""
        with self.locked() as connection:
            connection.executescript(SCHEMA_SQL)
            connection.commit()
        logger.info("sqlite.schema.ensured", path=self.path)

    def close(self) -> None:
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
