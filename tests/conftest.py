from __future__ import annotations

from pathlib import Path

import pytest

from regcheck.database import Database, InMemoryUserRepo, SQLiteUserRepo, init_database


class RecordingAuditor:
    """Auditor that keeps every event for assertions."""

    def __init__(self) -> None:
        self.events: list[dict] = []

    def record(self, event, *, normalized_email, success=True, details=None, exc=None):
        self.events.append(
            {
                "event": event,
                "normalized_email": normalized_email,
                "success": success,
                "details": details,
                "exc": exc,
            }
        )


class CountingRepo:
    """Wraps a repo and counts existence queries."""

    def __init__(self, inner) -> None:
        self.inner = inner
        self.queries: list[str] = []

    def exists_normalized(self, key: str) -> bool:
        self.queries.append(key)
        return self.inner.exists_normalized(key)


@pytest.fixture
def auditor() -> RecordingAuditor:
    return RecordingAuditor()


@pytest.fixture
def memory_repo() -> InMemoryUserRepo:
    return InMemoryUserRepo()


@pytest.fixture
def counting_repo(memory_repo: InMemoryUserRepo) -> CountingRepo:
    return CountingRepo(memory_repo)


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'regcheck.db'}"


@pytest.fixture
def db(db_url: str) -> Database:
    database = init_database(url=db_url)
    try:
        yield database
    finally:
        database.close()


@pytest.fixture
def sqlite_repo(db: Database) -> SQLiteUserRepo:
    return SQLiteUserRepo(db)


@pytest.fixture
def insert_legacy_email(db: Database):
    """Insert rows bypassing `add_user`, as pre-normalization code did."""

    def insert(email: str) -> None:
        db.execute(
            "INSERT INTO users (id, email, name, created_at) VALUES (?, ?, ?, ?)",
            (f"legacy-{email.strip()}", email, None, "2020-01-01T00:00:00+00:00"),
        )

    return insert
