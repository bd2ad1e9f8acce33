"""Email format validation.

Format and availability are independent questions: nothing here is called
by `AvailabilityChecker`, so a syntactically invalid address can still be
reported as available. Callers that want both must ask both.

The pattern is deliberately conservative:
- local part: letters, digits, `+`, `_`, `.`, `-`
- domain: letters, digits, `.`, `-`
- final label: at least two letters
"""

import re
from dataclasses import dataclass


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes:
        valid: Whether the input passed validation
        error: Error message if validation failed (None if valid)
    """

    valid: bool
    error: str | None = None


EMAIL_REGEX = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")

# RFC 5321 path limit
MAX_EMAIL_LENGTH = 254


def is_valid_format(raw: str | None) -> bool:
    """Check the trimmed input against the email pattern.

    Args:
        raw: Email as supplied by the caller. May be None.

    Returns:
        True if the address looks like an email, False otherwise
        (including for None and blank input).

    Examples:
        >>> is_valid_format("a.b+c@sub.example.co")
        True
        >>> is_valid_format("a@b")
        False
    """
    if raw is None:
        return False
    candidate = raw.strip()
    if not candidate:
        return False
    return EMAIL_REGEX.match(candidate) is not None


def validate_email(
    email: str | None,
    max_length: int = MAX_EMAIL_LENGTH,
) -> ValidationResult:
    """Validate an email address and explain why it fails.

    Checks:
    - Non-empty
    - Maximum length (default: 254 per RFC 5321)
    - Valid format (see `is_valid_format`)

    Args:
        email: Email address to validate
        max_length: Maximum allowed length (default: 254)

    Returns:
        ValidationResult with valid=True if email is valid, or error message.
    """
    if not email or not email.strip():
        return ValidationResult(valid=False, error="Email is required")

    email = email.strip()

    if len(email) > max_length:
        return ValidationResult(
            valid=False,
            error=f"Email must be at most {max_length} characters",
        )

    if not is_valid_format(email):
        return ValidationResult(valid=False, error="Invalid email format")

    return ValidationResult(valid=True)
