"""Email availability checker.

Decides whether a candidate email is free to register:

    raw email -> normalize() -> user_repo.exists_normalized(key) -> verdict

The caller always gets an `AvailabilityResult`. Store failures become a
verdict with reason ERROR instead of an exception, and ERROR is kept
distinct from both AVAILABLE and EMAIL_EXISTS so callers can tell
"taken", "free" and "could not determine" apart.

The checker holds no per-request state; one instance may serve any number
of concurrent requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from regcheck.audit import Auditor, CheckEvent, LoggingAuditor
from regcheck.exceptions import MalformedStoreResponseError
from regcheck.normalizer import is_blank, normalize

MESSAGE_AVAILABLE = "Email address is available"
MESSAGE_EXISTS = "This email address is already registered"
MESSAGE_ERROR = "Error checking email availability"
MESSAGE_REQUIRED = "Email address is required"


class AvailabilityReason(str, Enum):
    """Machine-readable classification of a verdict."""

    AVAILABLE = "AVAILABLE"
    EMAIL_EXISTS = "EMAIL_EXISTS"
    ERROR = "ERROR"


@dataclass(frozen=True)
class AvailabilityResult:
    """Verdict for one availability check.

    Attributes:
        available: True iff no stored email normalizes to the same key
        reason: Why the verdict was reached
        original_email: Input exactly as received (may be None)
        normalized_email: Key that was compared
        message: Human-readable summary
    """

    available: bool
    reason: AvailabilityReason
    original_email: str | None
    normalized_email: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serializable wire representation."""
        return {
            "available": self.available,
            "email": self.original_email,
            "normalizedEmail": self.normalized_email,
            "message": self.message,
            "reason": self.reason.value,
        }


class UserStore(Protocol):
    """Read capability the checker needs from the user store."""

    def exists_normalized(self, key: str) -> bool: ...


class AvailabilityChecker:
    """Check whether emails are already registered.

    Args:
        user_repo: Store offering `exists_normalized(key) -> bool`
        auditor: Observability collaborator (default: `LoggingAuditor`)

    Example:
        checker = AvailabilityChecker(SQLiteUserRepo(db))
        result = checker.check_availability(" John@Example.com ")
        result.to_dict()
    """

    def __init__(self, user_repo: UserStore, auditor: Auditor | None = None) -> None:
        self._user_repo = user_repo
        self._auditor = auditor or LoggingAuditor()

    def check_availability(self, raw: str | None) -> AvailabilityResult:
        """Check a single candidate email.

        Blank input is never looked up: an empty key could only match
        rows that are themselves blank, and it is never registrable.

        Args:
            raw: Candidate email as supplied by the caller

        Returns:
            AvailabilityResult; never raises for store failures.
        """
        if is_blank(raw):
            self._auditor.record(CheckEvent.EMPTY_INPUT, normalized_email="")
            return AvailabilityResult(
                available=False,
                reason=AvailabilityReason.ERROR,
                original_email=raw,
                normalized_email="",
                message=MESSAGE_REQUIRED,
            )

        key = normalize(raw)
        try:
            exists = self._user_repo.exists_normalized(key)
            if not isinstance(exists, bool):
                raise MalformedStoreResponseError(exists)
        except Exception as exc:
            self._auditor.record(
                CheckEvent.CHECK_FAILED,
                normalized_email=key,
                success=False,
                details={"error": type(exc).__name__},
                exc=exc,
            )
            return AvailabilityResult(
                available=False,
                reason=AvailabilityReason.ERROR,
                original_email=raw,
                normalized_email=key,
                message=MESSAGE_ERROR,
            )

        if exists:
            self._auditor.record(
                CheckEvent.EMAIL_EXISTS,
                normalized_email=key,
                details={"available": False},
            )
            return AvailabilityResult(
                available=False,
                reason=AvailabilityReason.EMAIL_EXISTS,
                original_email=raw,
                normalized_email=key,
                message=MESSAGE_EXISTS,
            )

        self._auditor.record(
            CheckEvent.CHECK_COMPLETED,
            normalized_email=key,
            details={"available": True},
        )
        return AvailabilityResult(
            available=True,
            reason=AvailabilityReason.AVAILABLE,
            original_email=raw,
            normalized_email=key,
            message=MESSAGE_AVAILABLE,
        )


def check_availability(
    raw: str | None,
    user_repo: UserStore,
    auditor: Auditor | None = None,
) -> AvailabilityResult:
    """One-shot helper around `AvailabilityChecker.check_availability`."""
    return AvailabilityChecker(user_repo, auditor).check_availability(raw)
