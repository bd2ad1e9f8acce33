"""Email normalization.

Turns an untrusted email string into the key used for uniqueness
comparisons. The same function is registered inside SQLite so stored values
are normalized identically at query time (see `regcheck.database`).
"""

from __future__ import annotations


def normalize(raw: str | None) -> str:
    """Return the canonical comparison key for an email address.

    Strips leading/trailing whitespace and lower-cases every character.
    `str.lower()` does not consult the process locale, so the key is stable
    across platforms.

    Args:
        raw: Email as supplied by the caller. May be None.

    Returns:
        Canonical email, or "" when `raw` is None.

    Examples:
        >>> normalize("  John@Example.COM ")
        'john@example.com'
        >>> normalize(None)
        ''
    """
    if raw is None:
        return ""
    return raw.strip().lower()


def is_blank(raw: str | None) -> bool:
    """True if `raw` is None or whitespace only."""
    return normalize(raw) == ""
