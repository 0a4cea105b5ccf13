"""Centralized logging setup with Logfire integration.

The library itself never configures logging; applications call
``setup_logging`` once at startup. Logfire is configured via environment
variables (LOGFIRE_TOKEN, LOGFIRE_SERVICE_NAME, ...).
"""

import logging
import sys

import logfire
import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder
from structlog.types import EventDict, Processor, WrappedLogger
from structlog.typing import FilteringBoundLogger

from iiif_embedding.core.config import get_settings


def add_diagnostic_context(
    _logger: WrappedLogger,
    _method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add validation-specific context to log events.

    Args:
        logger: The wrapped logger instance
        method_name: The name of the logging method
        event_dict: The event dictionary

    Returns:
        The event dictionary with added context
    """
    if "error" in event_dict:
        event_dict["error_type"] = type(event_dict["error"]).__name__

    # Summaries are easier to query than raw counts
    errors = event_dict.get("errors")
    if isinstance(errors, int):
        event_dict["valid"] = errors == 0

    return event_dict


def setup_logging(level: str | None = None, colors: bool = True) -> None:
    """Set up application-wide logging with Logfire and structlog integration.

    Args:
        level: Minimum level name for both structlog and standard logging;
            defaults to IIIF_EMBEDDING_LOG_LEVEL
        colors: Whether the console renderer should use colors
    """
    if level is None:
        level = get_settings().log_level
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    processors: list[Processor] = [
        # Merge context from contextvars
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        CallsiteParameterAdder(
            parameters=[
                CallsiteParameter.FILENAME,
                CallsiteParameter.LINENO,
                CallsiteParameter.FUNC_NAME,
            ]
        ),
        add_diagnostic_context,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        # MUST come before final renderer
        logfire.StructlogProcessor(),
        structlog.dev.ConsoleRenderer(colors=colors),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        # Use PrintLogger to avoid double logging with standard library
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    # Standard library logs go through the same processors
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=colors),
        foreign_pre_chain=processors[:-2],  # Exclude the Logfire processor and final renderer
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level)


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Get a structured logger instance that's properly configured with Logfire.

    Args:
        name: The name of the logger (usually __name__)

    Returns:
        A configured structlog logger instance
    """
    return structlog.get_logger(name)
