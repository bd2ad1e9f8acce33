"""In-memory user repository.

Same contract as `SQLiteUserRepo`, kept in a dict. Used by tests and by
`create_app` callers that want a throwaway store.
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from typing import Optional

from regcheck.normalizer import normalize


class InMemoryUserRepo:
    """In-memory user repository with a normalized email index.

    Users are stored verbatim (so legacy-style emails with odd casing or
    whitespace can be seeded), while the index is keyed by the canonical
    email.
    """

    def __init__(self) -> None:
        self._users: dict[str, dict] = {}
        self._email_index: dict[str, str] = {}  # canonical email -> user_id
        self._lock = threading.Lock()

    def add_user(self, email: str, *, name: str | None = None) -> dict:
        """Add a user, storing `email` exactly as given.

        Raises:
            ValueError: If another user already has the same canonical email
        """
        key = normalize(email)
        user = {
            "id": str(uuid.uuid4()),
            "email": email,
            "name": name,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        with self._lock:
            if key in self._email_index:
                raise ValueError(f"Email already registered: {key}")
            self._users[user["id"]] = user
            self._email_index[key] = user["id"]
        return user

    def exists_normalized(self, key: str) -> bool:
        return normalize(key) in self._email_index

    def get_user_by_email(self, email: str) -> Optional[dict]:
        user_id = self._email_index.get(normalize(email))
        if user_id:
            return self._users.get(user_id)
        return None

    def count_exact_email(self, email: str) -> int:
        return sum(1 for user in self._users.values() if user["email"] == email)

    def find_similar_emails(self, fragment: str, *, limit: int = 20) -> list[str]:
        needle = normalize(fragment)
        matches = sorted(
            user["email"]
            for user in self._users.values()
            if needle in normalize(user["email"])
        )
        return matches[:limit]

    def count_users(self) -> int:
        return len(self._users)
