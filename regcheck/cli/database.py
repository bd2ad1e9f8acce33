"""Database CLI commands for regcheck.

Provides commands for database management:
  - init: Initialize database with tables
  - status: Show database status and schema version
  - add: Seed a user
  - lookup: Diagnose how an email matches stored rows
"""

from __future__ import annotations

import logging
import sqlite3

from regcheck.database import Database, SQLiteUserRepo, init_database
from regcheck.database.init import get_schema_version
from regcheck.exceptions import StoreError
from regcheck.normalizer import normalize
from regcheck.validators import validate_email

logger = logging.getLogger("regcheck.cli.database")


def db_init(url: str | None = None) -> int:
    """Initialize database with required tables.

    Args:
        url: Database URL (optional, uses DATABASE_URL env var or default)
    """
    db = init_database(url=url)
    print(f"Database initialized at: {db.path}")
    print(f"Schema version: {get_schema_version(db)}")
    return 0


def db_status(url: str | None = None) -> int:
    """Show database status and schema version."""
    db = Database(url)

    print(f"Database path: {db.path}")
    print(f"Schema version: {get_schema_version(db)}")

    try:
        print(f"Total users: {SQLiteUserRepo(db).count_users()}")
    except StoreError as exc:
        logger.debug("User count unavailable: %s", exc)
        print("(Could not fetch user statistics)")
    return 0


def db_add(email: str, name: str | None = None, url: str | None = None) -> int:
    """Seed a user after validating the email format.

    Returns:
        0 on success, 1 if the email is invalid or already registered.
    """
    result = validate_email(email)
    if not result.valid:
        print(f"Refusing to add {email!r}: {result.error}")
        return 1

    repo = SQLiteUserRepo(init_database(url=url))
    try:
        user = repo.add_user(email, name=name)
    except sqlite3.IntegrityError:
        print(f"Email already registered: {normalize(email)}")
        return 1
    print(f"Added user {user['id']} <{user['email']}>")
    return 0


def db_lookup(email: str, url: str | None = None) -> int:
    """Show how `email` matches stored rows.

    Prints the normalized match (if any), the number of byte-exact matches
    and stored emails that contain the normalized address.
    """
    repo = SQLiteUserRepo(Database(url))
    key = normalize(email)

    try:
        user = repo.get_user_by_email(email)
        exact = repo.count_exact_email(email)
        similar = repo.find_similar_emails(key)
    except StoreError as exc:
        print(f"Lookup failed: {exc}")
        return 1

    print(f"Normalized email: {key}")
    if user:
        print(f"Normalized match: {user['id']} <{user['email']}>")
    else:
        print("Normalized match: none")
    print(f"Exact matches: {exact}")
    print("Similar emails:")
    for stored in similar:
        print(f"  {stored!r}")
    return 0
