"""Audit events for email availability checks.

The checker never logs through a module-level logger directly; it reports
structured events to an injected auditor. `LoggingAuditor` is the default
and writes them to the `regcheck.audit` logger. Tests and applications may
pass any object implementing `Auditor`.

Privacy:
- Candidate emails are PII. The default auditor logs the normalized key
  only; set `include_email=False` to drop it as well.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Protocol

# Audit logger - configure handler in application
audit_logger = logging.getLogger("regcheck.audit")


class CheckEvent(Enum):
    """Audit event types emitted by the availability checker."""

    CHECK_COMPLETED = "check_completed"
    EMAIL_EXISTS = "email_exists"
    EMPTY_INPUT = "empty_input"
    CHECK_FAILED = "check_failed"


class Auditor(Protocol):
    """Observability collaborator used by `AvailabilityChecker`."""

    def record(
        self,
        event: CheckEvent,
        *,
        normalized_email: str,
        success: bool = True,
        details: dict[str, Any] | None = None,
        exc: BaseException | None = None,
    ) -> None: ...


class LoggingAuditor:
    """Auditor that writes structured log records.

    Each record carries a `key=value` message and the same data under
    `extra={"audit_data": {...}}` for structured handlers.

    Args:
        logger: Logger to write to (default: `regcheck.audit`)
        include_email: Whether to include the normalized email in records

    Example:
        auditor = LoggingAuditor()
        auditor.record(
            CheckEvent.CHECK_COMPLETED,
            normalized_email="user@example.com",
            details={"available": True},
        )
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        *,
        include_email: bool = True,
    ) -> None:
        self._logger = logger or audit_logger
        self._include_email = include_email

    def record(
        self,
        event: CheckEvent,
        *,
        normalized_email: str,
        success: bool = True,
        details: dict[str, Any] | None = None,
        exc: BaseException | None = None,
    ) -> None:
        """Log a check event.

        Args:
            event: The type of check event
            normalized_email: Canonical key that was (or would be) compared
            success: Whether the check reached a definite verdict
            details: Additional event-specific details
            exc: Exception that caused a failed check, logged with traceback
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event": event.value,
            "success": success,
        }
        message_parts = [f"event={event.value}"]

        if self._include_email and normalized_email:
            log_data["normalized_email"] = normalized_email
            message_parts.append(f"email={normalized_email}")
        if not success:
            message_parts.append("success=false")
        if details:
            log_data["details"] = details
            for key, value in details.items():
                message_parts.append(f"{key}={value}")

        message = " ".join(message_parts)
        extra = {"audit_data": log_data}

        if exc is not None:
            self._logger.error(
                message,
                exc_info=(type(exc), exc, exc.__traceback__),
                extra=extra,
            )
        elif not success:
            self._logger.error(message, extra=extra)
        elif event == CheckEvent.EMAIL_EXISTS:
            self._logger.warning(message, extra=extra)
        elif event == CheckEvent.EMPTY_INPUT:
            self._logger.debug(message, extra=extra)
        else:
            self._logger.info(message, extra=extra)
