"""Validation of IIIF Embedding Annotations.

Checks parsed JSON against the embedding vocabulary for Web Annotations and
returns either a normalized model or every diagnostic found.
"""

from .core import (
    AnnotationValidationError,
    ApplicationError,
    ConfigurationError,
    ErrorLevel,
    ReferenceCheckError,
    Settings,
    ValidationOptions,
    get_settings,
)
from .domain import vocabulary
from .domain.codec import byte_width, decode_base64_vector, encode_base64_vector
from .domain.models import (
    Diagnostic,
    EmbeddingAnnotation,
    EmbeddingVectorBody,
    ErrorKind,
    ExternalReferenceBody,
    InlineBase64Body,
    InlineJsonArrayBody,
    ModelDescriptor,
    PayloadKind,
    ResourceRef,
    Selector,
    SpecificResourceTarget,
    ValidationResult,
    VectorPayload,
)
from .services import ReferenceCheck, verify_reference
from .validation import (
    ModelContext,
    check_context_order,
    ensure_valid,
    validate_annotation,
    validate_body,
    validate_model,
    validate_payload,
    validate_target,
)

__all__ = [
    "AnnotationValidationError",
    "ApplicationError",
    "ConfigurationError",
    "Diagnostic",
    "EmbeddingAnnotation",
    "EmbeddingVectorBody",
    "ErrorKind",
    "ErrorLevel",
    "ExternalReferenceBody",
    "InlineBase64Body",
    "InlineJsonArrayBody",
    "ModelContext",
    "ModelDescriptor",
    "PayloadKind",
    "ReferenceCheck",
    "ReferenceCheckError",
    "ResourceRef",
    "Selector",
    "Settings",
    "SpecificResourceTarget",
    "ValidationOptions",
    "ValidationResult",
    "VectorPayload",
    "byte_width",
    "check_context_order",
    "decode_base64_vector",
    "encode_base64_vector",
    "ensure_valid",
    "get_settings",
    "validate_annotation",
    "validate_body",
    "validate_model",
    "validate_payload",
    "validate_target",
    "verify_reference",
    "vocabulary",
]
