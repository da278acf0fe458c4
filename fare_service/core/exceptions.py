"""Exception hierarchy for the fare service."""

from typing import Any


class FareServiceError(Exception):
    """Base exception for all fare service errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class PermanentError(FareServiceError):
    """Errors that will not succeed on retry."""

    pass


class InvalidInputError(PermanentError):
    """A quote or rate input failed validation.

    ``field`` names the offending input (``distance``, ``duration``, ``surge``,
    ``vehicleType`` or a rate field) and ``reason`` says why it was rejected.
    """

    def __init__(self, field: str, reason: str, details: dict[str, Any] | None = None):
        super().__init__(f"Invalid {field}: {reason}", {"field": field, **(details or {})})
        self.field = field
        self.reason = reason


class ConfigurationError(PermanentError):
    """Missing or invalid configuration."""

    pass
