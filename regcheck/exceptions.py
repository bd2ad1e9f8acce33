"""Exception hierarchy for regcheck.

Store failures are raised by repositories and caught by
`AvailabilityChecker`, which turns them into an ERROR verdict. They never
reach HTTP callers as faults.
"""


class RegcheckError(Exception):
    """Base class for all regcheck errors."""


class ConfigurationError(RegcheckError):
    """Invalid configuration value (e.g. unsupported database URL)."""


class StoreError(RegcheckError):
    """Base class for failures of the user store."""


class StoreUnavailableError(StoreError):
    """The store could not be reached or the query failed."""


class MalformedStoreResponseError(StoreError):
    """The store answered, but not with a usable value."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"Expected a bool from the user store, got {type(value).__name__}"
        )
        self.value = value
