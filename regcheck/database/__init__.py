"""regcheck database module.

Provides SQLite-based persistence with simple configuration:
- Default: sqlite:///data/regcheck.db
- Configure via DATABASE_URL environment variable

Exports:
- Database: Connection manager
- SQLiteUserRepo: User storage implementation
- InMemoryUserRepo: Dict-backed storage for tests and demos
- init_database: Initialize tables
"""

from regcheck.database.connection import Database
from regcheck.database.init import init_database
from regcheck.database.memory import InMemoryUserRepo
from regcheck.database.user_repo import SQLiteUserRepo

__all__ = [
    "Database",
    "InMemoryUserRepo",
    "SQLiteUserRepo",
    "init_database",
]
