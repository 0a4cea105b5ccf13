"""Specific error types for the embedding annotation library."""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .base import (
    ApplicationError,
    ErrorCode,
    ErrorDetails,
    ErrorLevel,
    ReferenceErrorDetails,
    ValidationErrorDetails,
)

if TYPE_CHECKING:
    from iiif_embedding.domain.models.diagnostics import Diagnostic


class AnnotationValidationError(ApplicationError):
    """A document failed validation and the caller asked for an exception."""

    def __init__(
        self,
        message: str,
        diagnostics: Sequence["Diagnostic"],
        code: ErrorCode = ErrorCode.ANNOTATION_INVALID,
        operation: str = "validate_annotation",
    ):
        self.diagnostics = tuple(diagnostics)
        errors = [d for d in self.diagnostics if d.level == ErrorLevel.ERROR]
        super().__init__(
            message=message,
            code=code,
            level=ErrorLevel.ERROR,
            details=ValidationErrorDetails(
                source="validation",
                operation=operation,
                field=errors[0].path if errors else None,
                diagnostics=[d.model_dump(mode="json") for d in self.diagnostics],
                error_count=len(errors),
                warning_count=len(self.diagnostics) - len(errors),
            ),
        )


class ReferenceCheckError(ApplicationError):
    """Reference verification was requested for something that is not a reference."""

    def __init__(self, message: str, details: ReferenceErrorDetails | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.REFERENCE_UNSUPPORTED,
            level=ErrorLevel.ERROR,
            details=details or ReferenceErrorDetails(
                source="reference_check",
                operation="verify_reference",
            ),
        )


class ConfigurationError(ApplicationError):
    """Invalid library configuration."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.CONFIG_INVALID,
            level=ErrorLevel.ERROR,
            details=details or ErrorDetails(source="config", operation="load"),
        )
