"""Database connection manager for regcheck.

Provides a simple SQLite connection wrapper that:
- Creates database file and directories automatically
- Keeps one connection per thread for concurrent access
- Configures WAL mode so availability reads don't block writers
- Registers `email_key()` so stored emails are normalized in SQL exactly as
  candidate emails are normalized in Python
"""

from __future__ import annotations

import logging
import os
import sqlite3
import threading
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import Generator
from urllib.parse import urlparse

from regcheck.config import DEFAULT_DATABASE_URL
from regcheck.exceptions import ConfigurationError
from regcheck.normalizer import normalize

logger = logging.getLogger("regcheck.database")

MEMORY = ":memory:"


class Database:
    """SQLite database connection manager.

    Thread-safe connection pool for SQLite databases.

    Args:
        url: Database URL (e.g., "sqlite:///data/regcheck.db" or "sqlite:///:memory:")

    Example:
        db = Database("sqlite:///regcheck.db")
        with db.connection() as conn:
            conn.execute("SELECT email_key(email) FROM users")

    Note:
        File databases get one connection per thread. An in-memory database
        exists only inside its connection, so ":memory:" uses a single
        shared connection serialized by a lock.
    """

    def __init__(self, url: str | None = None) -> None:
        """Initialize database connection.

        Args:
            url: Database URL. Defaults to DATABASE_URL env var or sqlite:///data/regcheck.db

        Raises:
            ConfigurationError: If the URL scheme is not sqlite
        """
        self._url = url or os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
        self._db_path = self._parse_url(self._url)
        self._local = threading.local()
        self._shared: sqlite3.Connection | None = None
        self._lock = threading.RLock()
        # close() must reach connections owned by other threads
        self._connections: list[sqlite3.Connection] = []
        self._connections_lock = threading.Lock()
        self._generation = 0
        self._ensure_directory()

    def _parse_url(self, url: str) -> str:
        """Parse database URL to extract file path.

        Args:
            url: Database URL (sqlite:///path/to/db.db)

        Returns:
            File path or ":memory:" for in-memory databases
        """
        if url in ("sqlite:///:memory:", MEMORY):
            return MEMORY

        parsed = urlparse(url)
        if parsed.scheme != "sqlite":
            raise ConfigurationError(f"Unsupported database URL scheme: {parsed.scheme!r}")

        # sqlite:////abs/path -> "//abs/path"; sqlite:///rel/path -> "/rel/path"
        path = parsed.path
        if path.startswith("//"):
            path = path[1:]
        elif path.startswith("/"):
            path = path[1:]

        return path or MEMORY

    def _ensure_directory(self) -> None:
        """Create database directory if it doesn't exist."""
        if self._db_path != MEMORY:
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)

    def _open(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            self._db_path,
            check_same_thread=False,
            timeout=30.0,
        )
        # WAL lets availability reads run alongside writes
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        conn.create_function("email_key", 1, normalize, deterministic=True)
        conn.row_factory = sqlite3.Row
        with self._connections_lock:
            self._connections.append(conn)
        logger.debug("Opened SQLite connection to %s", self._db_path)
        return conn

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create the connection for the current thread."""
        if self.is_memory:
            if self._shared is None:
                self._shared = self._open()
            return self._shared

        conn = getattr(self._local, "connection", None)
        if conn is None or getattr(self._local, "generation", None) != self._generation:
            conn = self._open()
            self._local.connection = conn
            self._local.generation = self._generation
        return conn

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection.

        Commits on success, rolls back on error.

        Yields:
            sqlite3.Connection: Database connection
        """
        with self._lock if self.is_memory else nullcontext():
            conn = self._get_connection()
            try:
                yield conn
            except Exception:
                conn.rollback()
                raise
            else:
                conn.commit()

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        """Execute a SQL statement."""
        with self.connection() as conn:
            return conn.execute(sql, params)

    def fetchone(self, sql: str, params: tuple = ()) -> sqlite3.Row | None:
        """Execute query and return single row.

        Args:
            sql: SQL query
            params: Query parameters

        Returns:
            Row or None if no results
        """
        with self.connection() as conn:
            cursor = conn.execute(sql, params)
            return cursor.fetchone()

    def fetchall(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        """Execute query and return all rows."""
        with self.connection() as conn:
            cursor = conn.execute(sql, params)
            return cursor.fetchall()

    def close(self) -> None:
        """Close every connection this instance opened, on any thread.

        Threads that use the database afterwards get a fresh connection.
        """
        with self._lock:
            with self._connections_lock:
                connections = self._connections
                self._connections = []
                self._generation += 1
            self._shared = None
            for conn in connections:
                conn.close()
        self._local.connection = None
        if connections:
            logger.debug("Closed %d SQLite connection(s) to %s", len(connections), self._db_path)

    @property
    def open_connections(self) -> int:
        """Number of connections opened and not yet closed by `close()`."""
        with self._connections_lock:
            return len(self._connections)

    @property
    def is_memory(self) -> bool:
        return self._db_path == MEMORY

    @property
    def path(self) -> str:
        """Return the database file path."""
        return self._db_path

    @property
    def url(self) -> str:
        return self._url
