"""regcheck package root.

Answers one question during signup: is this email address already
registered? The answer is normalized (trim + lower-case) and structured so a
registration form can give immediate feedback.

Provides:
- Version info (`__version__`).
- `normalize`, the comparison-key builder.
- `AvailabilityChecker` and its result types.
- `is_valid_format`, an independent syntactic check.
"""

from __future__ import annotations

__version__ = "0.1.0"

from regcheck.checker import (
    AvailabilityChecker,
    AvailabilityReason,
    AvailabilityResult,
    check_availability,
)
from regcheck.normalizer import normalize
from regcheck.validators import is_valid_format

__all__ = [
    "__version__",
    "AvailabilityChecker",
    "AvailabilityReason",
    "AvailabilityResult",
    "check_availability",
    "normalize",
    "is_valid_format",
]
