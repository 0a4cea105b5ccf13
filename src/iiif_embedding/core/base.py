"""Base error classes and enums"""

from datetime import datetime
from enum import Enum
from typing import Any

from logfire.integrations.pydantic import PluginSettings
from pydantic import BaseModel, Field, field_serializer


class ErrorLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCode(str, Enum):
    """Error codes for the library."""

    # General Errors (1xxx)
    CONFIG_INVALID = "1001"

    # Validation Errors (2xxx)
    ANNOTATION_INVALID = "2001"

    # Reference Errors (5xxx)
    REFERENCE_UNSUPPORTED = "5001"


class ErrorDetails(BaseModel, plugin_settings=PluginSettings(logfire={"record": "all"})):
    """Base model for structured error details"""

    source: str = Field(description="Component or module where the error occurred")
    operation: str = Field(description="Operation being performed when the error occurred")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(), description="When the error occurred")

    # Ensure timestamp is serialized consistently
    @field_serializer("timestamp")
    def serialize_timestamp(self, timestamp: datetime) -> str:
        return timestamp.isoformat()


class ValidationErrorDetails(ErrorDetails):
    """Details for validation-related errors"""

    field: str | None = Field(None, description="JSON Pointer of the first offending value")
    diagnostics: list[dict[str, Any]] = Field(default_factory=list, description="Every diagnostic collected")
    error_count: int = Field(0, description="Number of error-level diagnostics")
    warning_count: int = Field(0, description="Number of warning-level diagnostics")


class ReferenceErrorDetails(ErrorDetails):
    """Details for errors raised around external vector references"""

    reference: str | None = Field(None, description="The vectorReference URI")
    media_type: str | None = Field(None, description="Declared media type of the reference")
    status_code: int | None = Field(None, description="HTTP status code, when a request was made")


class ApplicationError(Exception):
    """Base class for all library errors"""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        level: ErrorLevel = ErrorLevel.ERROR,
        details: ErrorDetails | dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.level = level

        # Convert dict to ErrorDetails if needed
        if details is None:
            self.details = ErrorDetails(source="unknown", operation="unknown")
        elif isinstance(details, dict):
            # Extract source and operation from dict if available, otherwise use defaults
            source = details.pop("source", "unknown")
            operation = details.pop("operation", "unknown")
            self.details = ErrorDetails(source=source, operation=operation, **details)
        else:
            self.details = details

        super().__init__(message)
