"""Model descriptor validation.

Field checks only need the ``model`` object. Whether ``dimensions``,
``dataType`` and ``endianness`` are required depends on the vector payload,
so those checks take a ``ModelContext`` describing it.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from iiif_embedding.core.config import DEFAULT_OPTIONS, ValidationOptions
from iiif_embedding.core.logging import get_logger
from iiif_embedding.domain.codec import byte_width
from iiif_embedding.domain.models import DiagnosticCollector, ErrorKind, ModelDescriptor, ValidationResult
from iiif_embedding.domain.vocabulary import BASE64, DATA_TYPE_BYTE_WIDTHS, ENDIANNESS_VALUES

from .pointer import MISSING, get, json_type, pointer

logger = get_logger(__name__)


class ModelContext(BaseModel):
    """What the payload tells us about the vector the model describes."""

    model_config = ConfigDict(frozen=True)

    encoding: str | None = None
    reference: bool = False
    binary: bool = False


def report_unknown_data_type(
    collector: DiagnosticCollector,
    path: str,
    data_type: str,
    options: ValidationOptions,
) -> None:
    known = ", ".join(DATA_TYPE_BYTE_WIDTHS)
    collector.add(
        ErrorKind.UNKNOWN_DATA_TYPE,
        pointer(path, "dataType"),
        f"dataType '{data_type}' is not recognized (known: {known}); byte-length checks skipped",
        options.unknown_data_type_level,
    )


def _check_string(model: Mapping[str, Any], key: str, path: str, collector: DiagnosticCollector, required: bool) -> None:
    value = get(model, key)
    if value is MISSING:
        if required:
            collector.error(ErrorKind.MISSING_REQUIRED_FIELD, pointer(path, key), f"model.{key} is required")
    elif not isinstance(value, str):
        collector.error(
            ErrorKind.STRUCTURAL_ERROR,
            pointer(path, key),
            f"model.{key} must be a string, got {json_type(value)}",
        )


def _check_positive_int(model: Mapping[str, Any], key: str, path: str, collector: DiagnosticCollector) -> None:
    value = get(model, key)
    if value is MISSING:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        collector.error(
            ErrorKind.STRUCTURAL_ERROR,
            pointer(path, key),
            f"model.{key} must be an integer, got {json_type(value)}",
        )
    elif value <= 0:
        collector.error(ErrorKind.INVALID_VALUE, pointer(path, key), f"model.{key} must be positive, got {value}")


def check_model_fields(
    model: Any,
    collector: DiagnosticCollector,
    path: str,
    options: ValidationOptions,
) -> None:
    """Checks that need nothing but the model object itself."""
    if model is MISSING:
        collector.error(ErrorKind.MISSING_REQUIRED_FIELD, path, "model is required")
        return
    if not isinstance(model, Mapping):
        collector.error(ErrorKind.STRUCTURAL_ERROR, path, f"model must be an object, got {json_type(model)}")
        return

    _check_string(model, "name", path, collector, required=True)
    _check_string(model, "version", path, collector, required=True)

    data_type = get(model, "dataType")
    if data_type is not MISSING:
        if not isinstance(data_type, str):
            collector.error(
                ErrorKind.STRUCTURAL_ERROR,
                pointer(path, "dataType"),
                f"model.dataType must be a string, got {json_type(data_type)}",
            )
        elif data_type not in DATA_TYPE_BYTE_WIDTHS:
            report_unknown_data_type(collector, path, data_type, options)

    endianness = get(model, "endianness")
    if endianness is not MISSING:
        if not isinstance(endianness, str):
            collector.error(
                ErrorKind.STRUCTURAL_ERROR,
                pointer(path, "endianness"),
                f"model.endianness must be a string, got {json_type(endianness)}",
            )
        elif endianness not in ENDIANNESS_VALUES:
            collector.error(
                ErrorKind.INVALID_VALUE,
                pointer(path, "endianness"),
                f"model.endianness must be 'little' or 'big', got '{endianness}'",
            )

    _check_positive_int(model, "dimensions", path, collector)
    _check_string(model, "type", path, collector, required=False)

    normalization = get(model, "normalization")
    if normalization is not MISSING and not isinstance(normalization, bool):
        collector.error(
            ErrorKind.STRUCTURAL_ERROR,
            pointer(path, "normalization"),
            f"model.normalization must be a boolean, got {json_type(normalization)}",
        )

    _check_positive_int(model, "maxTokens", path, collector)


def check_model_requirements(
    model: Mapping[str, Any],
    context: ModelContext,
    collector: DiagnosticCollector,
    path: str,
    options: ValidationOptions,
) -> None:
    """Conditional requiredness of dimensions, dataType and endianness."""
    if get(model, "dimensions") is MISSING and (context.encoding == BASE64 or context.reference):
        reason = "vectorEncoding is base64" if context.encoding == BASE64 else "vectorReference is used"
        collector.error(
            ErrorKind.MISSING_REQUIRED_FIELD,
            pointer(path, "dimensions"),
            f"model.dimensions is required when {reason}",
        )

    data_type = get(model, "dataType")
    if data_type is MISSING:
        if context.binary:
            collector.error(
                ErrorKind.MISSING_REQUIRED_FIELD,
                pointer(path, "dataType"),
                "model.dataType is required for binary vectors",
            )
        elif options.report_recommendations:
            collector.warning(
                ErrorKind.RECOMMENDED_FIELD_MISSING,
                pointer(path, "dataType"),
                "model.dataType is recommended",
            )
        return

    width = byte_width(data_type) if isinstance(data_type, str) else None
    if width is None:
        return

    has_endianness = get(model, "endianness") is not MISSING
    if width == 1 and has_endianness:
        collector.error(
            ErrorKind.ENDIANNESS_NOT_APPLICABLE,
            pointer(path, "endianness"),
            f"model.endianness must be omitted for single-byte dataType '{data_type}'",
        )
    elif width > 1 and context.binary and not has_endianness:
        collector.error(
            ErrorKind.ENDIANNESS_REQUIRED,
            pointer(path, "endianness"),
            f"model.endianness is required for {width}-byte dataType '{data_type}' in binary encodings",
        )


def build_model(model: Mapping[str, Any]) -> ModelDescriptor:
    """Normalized descriptor; only call on a model that passed the field checks."""
    return ModelDescriptor.model_validate(dict(model))


def validate_model(
    model: Any,
    context: ModelContext | None = None,
    *,
    path: str = "",
    options: ValidationOptions | None = None,
) -> ValidationResult[ModelDescriptor]:
    """Validate a ``model`` object.

    Args:
        model: The raw value at ``body.model`` (MISSING or None when absent)
        context: Payload facts; when given, conditional requiredness is checked too
        path: JSON Pointer of the model within the document
        options: Validation options

    Returns:
        A result holding the normalized descriptor, or every error found
    """
    options = options or DEFAULT_OPTIONS
    if model is None:
        model = MISSING

    collector = DiagnosticCollector()
    check_model_fields(model, collector, path, options)
    if context is not None and isinstance(model, Mapping):
        check_model_requirements(model, context, collector, path, options)

    result = collector.result(lambda: build_model(model))
    logger.debug("Validated model descriptor", path=path, errors=len(result.errors), warnings=len(result.warnings))
    return result
