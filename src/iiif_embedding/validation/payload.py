"""Vector payload validation.

A body carries its vector in one of three ways: an inline JSON array, an
inline base64 string of packed binary elements, or a reference to an
external file. Exactly one of ``vector`` and ``vectorReference`` may be
present. The referenced file is never fetched here; only its description
is checked.
"""

from collections.abc import Mapping
from typing import Any

from iiif_embedding.core.config import DEFAULT_OPTIONS, ValidationOptions
from iiif_embedding.core.logging import get_logger
from iiif_embedding.domain.codec import byte_width, decode_base64
from iiif_embedding.domain.models import (
    DiagnosticCollector,
    EmbeddingVectorBody,
    ErrorKind,
    ExternalReferenceBody,
    InlineBase64Body,
    InlineJsonArrayBody,
    ModelDescriptor,
    PayloadKind,
    ValidationResult,
    VectorPayload,
)
from iiif_embedding.domain.vocabulary import (
    BASE64,
    DATA_TYPE_BYTE_WIDTHS,
    EMBEDDING_VECTOR_TYPE,
    JSON_ARRAY,
    TEXT_MEDIA_TYPES,
    VECTOR_ENCODINGS,
)

from .model import ModelContext, check_model_requirements, report_unknown_data_type, validate_model
from .pointer import MISSING, get, is_absolute_uri, is_json_number, is_positive_int, json_type, pointer

logger = get_logger(__name__)


def is_binary_media_type(media_type: str, options: ValidationOptions | None = None) -> bool:
    """Heuristic: anything that is not a declared text type holds packed binary data."""
    options = options or DEFAULT_OPTIONS
    essence = media_type.split(";", 1)[0].strip().lower()
    if essence.startswith("text/") or essence.endswith("+json"):
        return False
    return essence not in TEXT_MEDIA_TYPES and essence not in options.text_media_types


def _string_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _infer_encoding(vector: Any) -> str | None:
    if isinstance(vector, list):
        return JSON_ARRAY
    if isinstance(vector, str):
        return BASE64
    return None


class _PayloadCheck:
    """One pass over a body's payload properties."""

    def __init__(
        self,
        body: Mapping[str, Any],
        model: Mapping[str, Any] | None,
        path: str,
        options: ValidationOptions,
        collector: DiagnosticCollector,
    ):
        self.body = body
        self.model = model
        self.path = path
        self.model_path = pointer(path, "model")
        self.options = options
        self.collector = collector

    def run(self) -> VectorPayload | None:
        vector = get(self.body, "vector")
        reference = get(self.body, "vectorReference")

        if vector is not MISSING and reference is not MISSING:
            self.collector.error(
                ErrorKind.MUTUALLY_EXCLUSIVE_FIELDS,
                self.path,
                "vector and vectorReference are mutually exclusive; provide exactly one",
            )
            return None
        if vector is MISSING and reference is MISSING:
            self.collector.error(
                ErrorKind.MISSING_PAYLOAD,
                self.path,
                "one of vector or vectorReference is required",
            )
            return None

        if vector is not MISSING:
            return self._inline(vector)
        return self._reference(reference)

    # Inline payloads

    def _inline(self, vector: Any) -> VectorPayload | None:
        encoding = get(self.body, "vectorEncoding")
        encoding_path = pointer(self.path, "vectorEncoding")

        if encoding is MISSING:
            self.collector.error(
                ErrorKind.MISSING_REQUIRED_FIELD,
                encoding_path,
                "vectorEncoding is required when vector is present",
            )
            encoding = _infer_encoding(vector)
        elif not isinstance(encoding, str):
            self.collector.error(
                ErrorKind.STRUCTURAL_ERROR,
                encoding_path,
                f"vectorEncoding must be a string, got {json_type(encoding)}",
            )
            encoding = _infer_encoding(vector)
        elif encoding not in VECTOR_ENCODINGS:
            self.collector.error(
                ErrorKind.INVALID_VALUE,
                encoding_path,
                f"vectorEncoding must be one of {', '.join(sorted(VECTOR_ENCODINGS))}, got '{encoding}'",
            )
            return None

        if encoding is None:
            self.collector.error(
                ErrorKind.STRUCTURAL_ERROR,
                pointer(self.path, "vector"),
                f"vector must be an array of numbers or a base64 string, got {json_type(vector)}",
            )
            return None
        if encoding == JSON_ARRAY:
            return self._json_array(vector)
        return self._base64(vector)

    def _json_array(self, vector: Any) -> VectorPayload | None:
        vector_path = pointer(self.path, "vector")
        if not isinstance(vector, list):
            self.collector.error(
                ErrorKind.STRUCTURAL_ERROR,
                vector_path,
                f"vector must be an array when vectorEncoding is json-array, got {json_type(vector)}",
            )
            return None
        if not vector:
            self.collector.error(ErrorKind.INVALID_VALUE, vector_path, "vector must not be empty")
            return None

        malformed = False
        for index, element in enumerate(vector):
            if not is_json_number(element):
                malformed = True
                self.collector.error(
                    ErrorKind.STRUCTURAL_ERROR,
                    pointer(vector_path, index),
                    f"vector elements must be numbers, got {json_type(element)}",
                )

        count = len(vector)
        if self.model is not None:
            check_model_requirements(
                self.model, ModelContext(encoding=JSON_ARRAY), self.collector, self.model_path, self.options
            )
            dimensions = get(self.model, "dimensions")
            if is_positive_int(dimensions) and dimensions != count:
                self.collector.error(
                    ErrorKind.DIMENSION_MISMATCH,
                    pointer(self.model_path, "dimensions"),
                    f"model.dimensions is {dimensions} but vector has {count} elements",
                )

        if malformed:
            return None
        return VectorPayload(
            kind=PayloadKind.JSON_ARRAY,
            dimensions=count,
            data_type=self._model_string("dataType"),
            endianness=self._model_string("endianness"),
        )

    def _base64(self, vector: Any) -> VectorPayload | None:
        vector_path = pointer(self.path, "vector")
        if not isinstance(vector, str):
            self.collector.error(
                ErrorKind.STRUCTURAL_ERROR,
                vector_path,
                f"vector must be a string when vectorEncoding is base64, got {json_type(vector)}",
            )
            return None

        byte_length: int | None
        try:
            byte_length = len(decode_base64(vector))
        except ValueError as e:
            self.collector.error(ErrorKind.INVALID_BASE64, vector_path, f"vector is not valid base64 ({e})")
            byte_length = None

        dimensions = None
        if self.model is not None:
            self._binary_requirements(self.model, ModelContext(encoding=BASE64, binary=True))
            dimensions = get(self.model, "dimensions")
            data_type = get(self.model, "dataType")
            width = byte_width(data_type) if isinstance(data_type, str) else None
            if byte_length is not None and is_positive_int(dimensions) and width is not None:
                expected = dimensions * width
                if byte_length != expected:
                    self.collector.error(
                        ErrorKind.BYTE_LENGTH_MISMATCH,
                        vector_path,
                        f"decoded vector is {byte_length} bytes but {dimensions} x {data_type} "
                        f"requires {expected} bytes",
                    )

        if byte_length is None:
            return None
        return VectorPayload(
            kind=PayloadKind.BASE64,
            dimensions=dimensions if is_positive_int(dimensions) else None,
            byte_length=byte_length,
            data_type=self._model_string("dataType"),
            endianness=self._model_string("endianness"),
            binary=True,
        )

    # Referenced payloads

    def _reference(self, reference: Any) -> VectorPayload:
        reference_path = pointer(self.path, "vectorReference")
        if not isinstance(reference, str):
            self.collector.error(
                ErrorKind.STRUCTURAL_ERROR,
                reference_path,
                f"vectorReference must be a URI string, got {json_type(reference)}",
            )
        elif not is_absolute_uri(reference):
            self.collector.error(
                ErrorKind.INVALID_URI,
                reference_path,
                f"vectorReference must be an absolute URI, got '{reference}'",
            )

        media_type = get(self.body, "format")
        format_path = pointer(self.path, "format")
        binary = False
        if media_type is MISSING:
            self.collector.error(
                ErrorKind.MISSING_REQUIRED_FIELD,
                format_path,
                "format is required when vectorReference is used",
            )
        elif not isinstance(media_type, str):
            self.collector.error(
                ErrorKind.STRUCTURAL_ERROR,
                format_path,
                f"format must be a media type string, got {json_type(media_type)}",
            )
        elif "/" not in media_type:
            self.collector.error(
                ErrorKind.INVALID_VALUE,
                format_path,
                f"format must be a media type such as application/octet-stream, got '{media_type}'",
            )
        else:
            binary = is_binary_media_type(media_type, self.options)

        dimensions = None
        if self.model is not None:
            if binary:
                self._binary_requirements(self.model, ModelContext(reference=True, binary=True))
            else:
                check_model_requirements(
                    self.model, ModelContext(reference=True), self.collector, self.model_path, self.options
                )
            dimensions = get(self.model, "dimensions")

        return VectorPayload(
            kind=PayloadKind.REFERENCE,
            dimensions=dimensions if is_positive_int(dimensions) else None,
            data_type=self._model_string("dataType"),
            endianness=self._model_string("endianness"),
            reference=_string_or_none(reference),
            media_type=_string_or_none(media_type),
            binary=binary,
        )

    def _binary_requirements(self, model: Mapping[str, Any], context: ModelContext) -> None:
        check_model_requirements(model, context, self.collector, self.model_path, self.options)
        data_type = get(model, "dataType")
        if isinstance(data_type, str) and data_type not in DATA_TYPE_BYTE_WIDTHS:
            report_unknown_data_type(self.collector, self.model_path, data_type, self.options)

    def _model_string(self, key: str) -> str | None:
        if self.model is None:
            return None
        return _string_or_none(get(self.model, key))


def validate_payload(
    body: Any,
    model: Any = None,
    *,
    path: str = "",
    options: ValidationOptions | None = None,
) -> ValidationResult[VectorPayload]:
    """Validate the vector properties of a body against its model.

    Args:
        body: The raw body object
        model: The raw ``model`` object, or None to skip model-dependent checks
        path: JSON Pointer of the body within the document
        options: Validation options

    Returns:
        A result holding what was learned about the vector, or every error found
    """
    options = options or DEFAULT_OPTIONS
    collector = DiagnosticCollector()
    payload: VectorPayload | None = None

    if isinstance(body, Mapping):
        model_object = model if isinstance(model, Mapping) else None
        payload = _PayloadCheck(body, model_object, path, options, collector).run()
    else:
        collector.error(ErrorKind.STRUCTURAL_ERROR, path, f"body must be an object, got {json_type(body)}")

    result = collector.result(lambda: payload)
    logger.debug("Validated vector payload", path=path, errors=len(result.errors), warnings=len(result.warnings))
    return result


def _build_body(body: Mapping[str, Any], model: ModelDescriptor, payload: VectorPayload) -> EmbeddingVectorBody:
    data = {**body, "model": model}
    if payload.kind == PayloadKind.JSON_ARRAY:
        data["vector"] = tuple(body["vector"])
        return InlineJsonArrayBody.model_validate(data)
    if payload.kind == PayloadKind.BASE64:
        return InlineBase64Body.model_validate(data)
    return ExternalReferenceBody.model_validate(data)


def validate_body(
    body: Any,
    *,
    path: str = "/body",
    options: ValidationOptions | None = None,
) -> ValidationResult[EmbeddingVectorBody]:
    """Validate an EmbeddingVector body: its type, its model and its payload together.

    The model and payload validators see the same ``model`` object; their
    diagnostics are merged so a problem both notice is reported once.
    """
    options = options or DEFAULT_OPTIONS
    collector = DiagnosticCollector()

    if body is None or body is MISSING:
        collector.error(ErrorKind.MISSING_REQUIRED_FIELD, path, "body is required")
        return collector.result(lambda: None)
    if not isinstance(body, Mapping):
        collector.error(ErrorKind.STRUCTURAL_ERROR, path, f"body must be an object, got {json_type(body)}")
        return collector.result(lambda: None)

    body_type = get(body, "type")
    if body_type is MISSING:
        collector.error(ErrorKind.MISSING_REQUIRED_FIELD, pointer(path, "type"), "body.type is required")
    elif body_type != EMBEDDING_VECTOR_TYPE:
        collector.error(
            ErrorKind.INVALID_TYPE,
            pointer(path, "type"),
            f"body.type must be '{EMBEDDING_VECTOR_TYPE}', got {body_type!r}",
        )

    model = get(body, "model")
    model_result = validate_model(model, path=pointer(path, "model"), options=options)
    collector.extend(model_result.diagnostics)

    payload_result = validate_payload(body, model, path=path, options=options)
    collector.merge(payload_result.diagnostics)

    def build() -> EmbeddingVectorBody:
        return _build_body(body, model_result.unwrap(), payload_result.unwrap())

    return collector.result(build)
