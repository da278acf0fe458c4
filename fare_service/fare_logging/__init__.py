from .context import (
    ContextFilter,
    CorrelationFilter,
    get_current_correlation_id,
    log_context,
    with_correlation,
)
from .formatters import DevFormatter, JSONFormatter
from .setup import setup_logging

__all__ = [
    "ContextFilter",
    "CorrelationFilter",
    "DevFormatter",
    "JSONFormatter",
    "get_current_correlation_id",
    "log_context",
    "setup_logging",
    "with_correlation",
]
