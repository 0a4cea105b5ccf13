"""Logging context utilities for structured logging.

A caller validating many documents (a batch import, a request handler) can
set context once, e.g. the manifest being processed, and every event the
validators emit carries it.
"""

from contextvars import ContextVar
from typing import Any

from structlog.typing import FilteringBoundLogger

# Use None as default to avoid mutable default value issues
_log_context: ContextVar[dict[str, Any] | None] = ContextVar("log_context", default=None)


def get_log_context() -> dict[str, Any]:
    """Get the current logging context.

    Returns:
        Dict containing the current logging context
    """
    context: dict[str, Any] | None = _log_context.get()
    if context is None:
        context = {}
        _log_context.set(context)
    return context.copy()


def set_log_context(context: dict[str, Any]) -> None:
    """Set the logging context.

    Args:
        context: Dictionary with logging context data
    """
    _log_context.set(dict(context))


def update_log_context(key: str, value: Any) -> None:
    """Update a single key in the logging context.

    Args:
        key: Context key to update
        value: Value to set
    """
    context = get_log_context()
    context[key] = value
    _log_context.set(context)


def clear_log_context() -> None:
    """Clear the current logging context."""
    _log_context.set({})


def bind_log_context(logger: FilteringBoundLogger, **extra: Any) -> FilteringBoundLogger:
    """Bind the current context (plus any extra fields) onto a logger."""
    context = get_log_context()
    context.update(extra)
    return logger.bind(**context)
