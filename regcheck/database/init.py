"""Database initialization and schema management.

Creates the tables regcheck reads from:
- users: registered accounts (only `email` matters to the availability check)
- migrations: schema version tracking
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone

from regcheck.database.connection import Database

logger = logging.getLogger("regcheck.database")

SCHEMA_VERSION = 1

TABLES = {
    "users": """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            email TEXT UNIQUE NOT NULL,
            name TEXT,
            created_at TEXT NOT NULL
        )
    """,
    "migrations": """
        CREATE TABLE IF NOT EXISTS migrations (
            version INTEGER PRIMARY KEY,
            applied_at TEXT NOT NULL
        )
    """,
}

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_users_email ON users(email)",
]


def init_database(db: Database | None = None, url: str | None = None) -> Database:
    """Initialize database with required tables.

    Creates all tables and indexes if they don't exist.

    Args:
        db: Existing Database instance (optional)
        url: Database URL (optional, uses default if not provided)

    Returns:
        Database: Initialized database instance
    """
    if db is None:
        db = Database(url)

    logger.info("Initializing database at %s", db.path)

    with db.connection() as conn:
        for table_name, ddl in TABLES.items():
            logger.debug("Creating table: %s", table_name)
            conn.execute(ddl)

        for index_ddl in INDEXES:
            conn.execute(index_ddl)

        now = datetime.now(timezone.utc).isoformat()
        conn.execute(
            "INSERT OR IGNORE INTO migrations (version, applied_at) VALUES (?, ?)",
            (SCHEMA_VERSION, now),
        )

    logger.info("Database initialized successfully")
    return db


def get_schema_version(db: Database) -> int:
    """Get current schema version.

    Returns:
        Current schema version number, or 0 if not initialized
    """
    try:
        row = db.fetchone("SELECT MAX(version) AS version FROM migrations")
    except sqlite3.OperationalError:
        return 0
    return row["version"] if row and row["version"] else 0
