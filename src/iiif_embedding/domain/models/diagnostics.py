"""Diagnostics produced by the validators and the result wrapper around them."""

from collections.abc import Callable, Iterable, Iterator
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from iiif_embedding.core.base import ErrorLevel
from iiif_embedding.core.errors import AnnotationValidationError

T = TypeVar("T")


class ErrorKind(str, Enum):
    """What went wrong, independent of where."""

    STRUCTURAL_ERROR = "StructuralError"
    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    MUTUALLY_EXCLUSIVE_FIELDS = "MutuallyExclusiveFields"
    MISSING_PAYLOAD = "MissingPayload"
    INVALID_MOTIVATION = "InvalidMotivation"
    INVALID_TYPE = "InvalidType"
    INVALID_VALUE = "InvalidValue"
    INVALID_BASE64 = "InvalidBase64"
    DIMENSION_MISMATCH = "DimensionMismatch"
    BYTE_LENGTH_MISMATCH = "ByteLengthMismatch"
    ENDIANNESS_NOT_APPLICABLE = "EndiannessNotApplicable"
    UNKNOWN_DATA_TYPE = "UnknownDataType"
    INVALID_URI = "InvalidUri"

    # Warnings
    NON_SPATIAL_HEIGHT_WIDTH = "NonSpatialHeightWidth"
    SPATIAL_DIMENSIONS_MISSING = "SpatialDimensionsMissing"
    RECOMMENDED_FIELD_MISSING = "RecommendedFieldMissing"
    CONTEXT_ORDER = "ContextOrder"
    FORMAT_MISMATCH = "FormatMismatch"

    # Reference checks
    REFERENCE_UNREACHABLE = "ReferenceUnreachable"

    # Alias: an absent endianness is a missing required field
    ENDIANNESS_REQUIRED = "MissingRequiredField"


class Diagnostic(BaseModel):
    """One problem found in a document, located by JSON Pointer."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    path: str = Field(description="JSON Pointer to the offending value; '' is the document root")
    message: str
    level: ErrorLevel = ErrorLevel.ERROR

    @property
    def is_error(self) -> bool:
        return self.level == ErrorLevel.ERROR

    def __str__(self) -> str:
        return f"{self.path or '/'}: {self.message} [{self.kind.value}]"


class DiagnosticCollector:
    """Accumulates diagnostics for one validation pass, in the order found."""

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def add(self, kind: ErrorKind, path: str, message: str, level: ErrorLevel = ErrorLevel.ERROR) -> None:
        self._diagnostics.append(Diagnostic(kind=kind, path=path, message=message, level=level))

    def error(self, kind: ErrorKind, path: str, message: str) -> None:
        self.add(kind, path, message, ErrorLevel.ERROR)

    def warning(self, kind: ErrorKind, path: str, message: str) -> None:
        self.add(kind, path, message, ErrorLevel.WARNING)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        self._diagnostics.extend(diagnostics)

    def merge(self, diagnostics: Iterable[Diagnostic]) -> None:
        """Extend, skipping diagnostics already collected by another validator."""
        for diagnostic in diagnostics:
            if diagnostic not in self._diagnostics:
                self._diagnostics.append(diagnostic)

    @property
    def has_errors(self) -> bool:
        return any(d.is_error for d in self._diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)

    def result(self, build: Callable[[], T]) -> "ValidationResult[T]":
        """Finish the pass; ``build`` only runs when no error was collected."""
        diagnostics = tuple(self._diagnostics)
        if self.has_errors:
            return ValidationResult(value=None, diagnostics=diagnostics)
        return ValidationResult(value=build(), diagnostics=diagnostics)


class ValidationResult(BaseModel, Generic[T]):
    """Either a normalized value (possibly with warnings) or a non-empty error list."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: T | None = None
    diagnostics: tuple[Diagnostic, ...] = ()

    @model_validator(mode="after")
    def _value_xor_errors(self) -> "ValidationResult[T]":
        has_errors = any(d.is_error for d in self.diagnostics)
        if has_errors == (self.value is not None):
            raise ValueError("a result carries either a value or errors, never both and never neither")
        return self

    @property
    def ok(self) -> bool:
        return self.value is not None

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.is_error)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if not d.is_error)

    def kinds(self) -> list[ErrorKind]:
        """Kinds of every diagnostic, in order."""
        return [d.kind for d in self.diagnostics]

    def unwrap(self) -> T:
        """Return the value or raise AnnotationValidationError with every diagnostic."""
        if self.value is None:
            summary = "; ".join(str(d) for d in self.errors)
            raise AnnotationValidationError(f"Validation failed: {summary}", self.diagnostics)
        return self.value
