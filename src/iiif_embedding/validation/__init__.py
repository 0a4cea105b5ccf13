"""Validators for embedding annotations, bodies and model descriptors."""

from .annotation import ensure_valid, validate_annotation
from .context import check_context_order, is_context_ordered
from .model import ModelContext, validate_model
from .payload import is_binary_media_type, validate_body, validate_payload
from .pointer import MISSING, is_absolute_uri
from .target import is_valid_region, is_valid_xywh_fragment, validate_target

__all__ = [
    "MISSING",
    "ModelContext",
    "check_context_order",
    "ensure_valid",
    "is_absolute_uri",
    "is_binary_media_type",
    "is_context_ordered",
    "is_valid_region",
    "is_valid_xywh_fragment",
    "validate_annotation",
    "validate_body",
    "validate_model",
    "validate_payload",
    "validate_target",
]
