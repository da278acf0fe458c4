"""Context-local logging fields: correlation IDs and arbitrary extras."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

current_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_context_fields: ContextVar[dict[str, Any] | None] = ContextVar("log_fields", default=None)


class CorrelationFilter(logging.Filter):
    """Logging filter that adds the current correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = current_correlation_id.get() or "-"
        return True


class ContextFilter(logging.Filter):
    """Injects log_context fields into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in (_context_fields.get() or {}).items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


@contextmanager
def with_correlation(correlation_id: str) -> Iterator[None]:
    """Context manager to set the correlation ID for a block of code.

    Usage:
        with with_correlation(request_id):
            logger.info("Quoting fare")  # record carries correlation_id
    """
    token = current_correlation_id.set(correlation_id)
    try:
        yield
    finally:
        current_correlation_id.reset(token)


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Context manager that adds fields to every record logged inside it.

    Fields are injected via ContextFilter, which must be attached to the
    handler (see setup_logging). Nested contexts merge with the outer one.
    """
    token = _context_fields.set({**(_context_fields.get() or {}), **kwargs})
    try:
        yield
    finally:
        _context_fields.reset(token)


def get_current_correlation_id() -> str | None:
    """Get the correlation ID from the current context."""
    return current_correlation_id.get()
