"""Domain models for embedding annotations."""

from .annotation import (
    EmbeddingAnnotation,
    ResourceRef,
    Selector,
    SpecificResourceTarget,
    Target,
)
from .base import JsonLdModel
from .body import (
    EmbeddingVectorBody,
    ExternalReferenceBody,
    InlineBase64Body,
    InlineJsonArrayBody,
    PayloadKind,
    VectorPayload,
)
from .diagnostics import (
    Diagnostic,
    DiagnosticCollector,
    ErrorKind,
    ValidationResult,
)
from .model import ModelDescriptor

__all__ = [
    # Diagnostics
    "Diagnostic",
    "DiagnosticCollector",
    # Annotation
    "EmbeddingAnnotation",
    # Body
    "EmbeddingVectorBody",
    "ErrorKind",
    "ExternalReferenceBody",
    "InlineBase64Body",
    "InlineJsonArrayBody",
    "JsonLdModel",
    # Model
    "ModelDescriptor",
    "PayloadKind",
    "ResourceRef",
    "Selector",
    "SpecificResourceTarget",
    "Target",
    "ValidationResult",
    "VectorPayload",
]
