"""SQLite-based user repository.

Implements the read side the availability checker depends on, plus the
few helpers needed to seed and inspect the store.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime, timezone

from regcheck.database.connection import Database
from regcheck.exceptions import StoreUnavailableError
from regcheck.normalizer import normalize

logger = logging.getLogger("regcheck.database")


def _row_to_user(row: sqlite3.Row) -> dict:
    return {
        "id": row["id"],
        "email": row["email"],
        "name": row["name"],
        "created_at": row["created_at"],
    }


class SQLiteUserRepo:
    """SQLite-backed user repository.

    Stored emails are compared through `email_key()`, the SQL twin of
    `regcheck.normalizer.normalize`, so rows written before normalization
    existed (mixed case, stray whitespace) still match.

    Every `sqlite3.Error` is re-raised as `StoreUnavailableError`.

    Args:
        db: Database instance

    Example:
        db = init_database(url="sqlite:///regcheck.db")
        repo = SQLiteUserRepo(db)
        repo.exists_normalized("john@example.com")
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    def exists_normalized(self, key: str) -> bool:
        """Check if any stored email normalizes to `key`.

        Args:
            key: Canonical email (already normalized by the caller)

        Returns:
            True if a matching user exists, False otherwise

        Raises:
            StoreUnavailableError: If the query fails
        """
        try:
            row = self._db.fetchone(
                "SELECT 1 FROM users WHERE email_key(email) = email_key(?) LIMIT 1",
                (key,),
            )
        except sqlite3.Error as exc:
            raise StoreUnavailableError(f"Email lookup failed: {exc}") from exc
        return row is not None

    def get_user_by_email(self, email: str) -> dict | None:
        """Fetch the first user whose stored email normalizes to `email`'s key.

        Returns:
            User dict or None if not found
        """
        try:
            row = self._db.fetchone(
                """
                SELECT id, email, name, created_at
                FROM users WHERE email_key(email) = ?
                ORDER BY created_at LIMIT 1
                """,
                (normalize(email),),
            )
        except sqlite3.Error as exc:
            raise StoreUnavailableError(f"User lookup failed: {exc}") from exc
        return _row_to_user(row) if row else None

    def count_exact_email(self, email: str) -> int:
        """Count rows whose stored email equals `email` byte for byte.

        Differs from `exists_normalized` only when legacy rows were stored
        with non-canonical casing or whitespace.
        """
        try:
            row = self._db.fetchone(
                "SELECT COUNT(*) AS count FROM users WHERE email = ?",
                (email,),
            )
        except sqlite3.Error as exc:
            raise StoreUnavailableError(f"Exact email count failed: {exc}") from exc
        return row["count"] if row else 0

    def find_similar_emails(self, fragment: str, *, limit: int = 20) -> list[str]:
        """Return stored emails containing `fragment`, ignoring case.

        Args:
            fragment: Substring to look for (normalized before matching)
            limit: Maximum emails to return
        """
        escaped = (
            normalize(fragment)
            .replace("\\", "\\\\")
            .replace("%", r"\%")
            .replace("_", r"\_")
        )
        pattern = f"%{escaped}%"
        try:
            rows = self._db.fetchall(
                r"""
                SELECT email FROM users
                WHERE email_key(email) LIKE ? ESCAPE '\'
                ORDER BY email LIMIT ?
                """,
                (pattern, limit),
            )
        except sqlite3.Error as exc:
            raise StoreUnavailableError(f"Similar email search failed: {exc}") from exc
        return [row["email"] for row in rows]

    def add_user(self, email: str, *, name: str | None = None) -> dict:
        """Insert a user with its email stored in canonical form.

        Args:
            email: User email (must be unique after normalization)
            name: Display name (optional)

        Returns:
            Created user as dict

        Raises:
            sqlite3.IntegrityError: If a stored email (legacy rows included)
                already normalizes to the same canonical email
        """
        user_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc).isoformat()
        key = normalize(email)

        with self._db.connection() as conn:
            # Write lock first so no other writer can slip in between check and insert
            conn.execute("BEGIN IMMEDIATE")
            clash = conn.execute(
                "SELECT 1 FROM users WHERE email_key(email) = ? LIMIT 1",
                (key,),
            ).fetchone()
            if clash is not None:
                raise sqlite3.IntegrityError(f"Email already registered: {key}")
            conn.execute(
                "INSERT INTO users (id, email, name, created_at) VALUES (?, ?, ?, ?)",
                (user_id, key, name, now),
            )
        logger.debug("Added user %s", user_id)

        return {"id": user_id, "email": key, "name": name, "created_at": now}

    def count_users(self) -> int:
        """Count total users."""
        try:
            row = self._db.fetchone("SELECT COUNT(*) AS count FROM users")
        except sqlite3.Error as exc:
            raise StoreUnavailableError(f"User count failed: {exc}") from exc
        return row["count"] if row else 0
