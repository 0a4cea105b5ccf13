"""Embedding annotation validation.

Top-level shape, target and body are checked in one pass and every
diagnostic is collected before returning; a document with five problems
reports five.
"""

from collections.abc import Mapping
from typing import Any

from iiif_embedding.core.config import DEFAULT_OPTIONS, ValidationOptions
from iiif_embedding.core.logging import bind_log_context, get_logger
from iiif_embedding.domain.models import DiagnosticCollector, EmbeddingAnnotation, ErrorKind, ValidationResult
from iiif_embedding.domain.vocabulary import ANNOTATION_TYPE, EMBEDDING_MOTIVATION

from .context import check_context_order
from .payload import validate_body
from .pointer import MISSING, get, is_absolute_uri, json_type
from .target import validate_target

logger = get_logger(__name__)


def _check_header(doc: Mapping[str, Any], collector: DiagnosticCollector, options: ValidationOptions) -> None:
    annotation_id = get(doc, "id")
    if annotation_id is not MISSING:
        if not isinstance(annotation_id, str):
            collector.error(ErrorKind.STRUCTURAL_ERROR, "/id", f"id must be a URI string, got {json_type(annotation_id)}")
        elif not is_absolute_uri(annotation_id):
            collector.error(ErrorKind.INVALID_URI, "/id", f"id must be an absolute URI, got '{annotation_id}'")

    annotation_type = get(doc, "type")
    if annotation_type is MISSING:
        collector.error(ErrorKind.MISSING_REQUIRED_FIELD, "/type", "type is required")
    elif annotation_type != ANNOTATION_TYPE:
        collector.error(
            ErrorKind.INVALID_TYPE,
            "/type",
            f"type must be '{ANNOTATION_TYPE}', got {annotation_type!r}",
        )

    motivation = get(doc, "motivation")
    if motivation is MISSING:
        collector.error(ErrorKind.MISSING_REQUIRED_FIELD, "/motivation", "motivation is required")
    elif motivation != EMBEDDING_MOTIVATION:
        collector.error(
            ErrorKind.INVALID_MOTIVATION,
            "/motivation",
            f"motivation must be exactly '{EMBEDDING_MOTIVATION}', got {motivation!r}",
        )

    context = get(doc, "@context")
    if options.check_context_order and context is not MISSING:
        collector.extend(check_context_order(context))


def validate_annotation(doc: Any, *, options: ValidationOptions | None = None) -> ValidationResult[EmbeddingAnnotation]:
    """Validate a parsed Embedding Annotation document.

    Args:
        doc: The parsed JSON value
        options: Validation options

    Returns:
        A result holding the normalized annotation (warnings attached), or
        every error found. Malformed input never raises.
    """
    options = options or DEFAULT_OPTIONS
    collector = DiagnosticCollector()

    if not isinstance(doc, Mapping):
        collector.error(ErrorKind.STRUCTURAL_ERROR, "", f"annotation must be an object, got {json_type(doc)}")
        result = collector.result(lambda: None)
    else:
        _check_header(doc, collector, options)

        target_result = validate_target(get(doc, "target"), options=options)
        collector.extend(target_result.diagnostics)

        body_result = validate_body(get(doc, "body"), options=options)
        collector.extend(body_result.diagnostics)

        result = collector.result(
            lambda: EmbeddingAnnotation.model_validate(
                {**doc, "target": target_result.value, "body": body_result.value}
            )
        )

    annotation_id = doc.get("id") if isinstance(doc, Mapping) else None
    log = bind_log_context(logger, annotation_id=annotation_id)
    log.debug("Validated embedding annotation", errors=len(result.errors), warnings=len(result.warnings))
    return result


def ensure_valid(doc: Any, *, options: ValidationOptions | None = None) -> EmbeddingAnnotation:
    """Validate and return the annotation, raising AnnotationValidationError on failure."""
    result = validate_annotation(doc, options=options)
    if not result.ok:
        logger.warning(
            "Embedding annotation rejected",
            errors=[str(d) for d in result.errors],
        )
    return result.unwrap()
