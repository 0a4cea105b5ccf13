"""Annotation target validation: URIs, resource objects and SpecificResources."""

import re
from collections.abc import Callable, Mapping
from typing import Any

from iiif_embedding.core.config import DEFAULT_OPTIONS, ValidationOptions
from iiif_embedding.domain.models import (
    DiagnosticCollector,
    ErrorKind,
    ResourceRef,
    Selector,
    SpecificResourceTarget,
    Target,
    ValidationResult,
)
from iiif_embedding.domain.vocabulary import (
    NON_SPATIAL_RESOURCE_TYPES,
    SPATIAL_RESOURCE_TYPES,
    SPECIFIC_RESOURCE_TYPE,
)

from .pointer import MISSING, get, is_absolute_uri, json_type, pointer

_NUMBER = re.compile(r"^\d+(\.\d+)?$")


def _four_numbers(text: str) -> bool:
    parts = text.split(",")
    return len(parts) == 4 and all(_NUMBER.match(part) for part in parts)


def is_valid_region(region: str) -> bool:
    """IIIF Image API region: full, square, pct:x,y,w,h or x,y,w,h."""
    if region in ("full", "square"):
        return True
    if region.startswith("pct:"):
        region = region[len("pct:") :]
    return _four_numbers(region)


def is_valid_xywh_fragment(value: str) -> bool:
    """Media fragment ``xywh=[pixel:|percent:]x,y,w,h``."""
    if not value.startswith("xywh="):
        return False
    box = value[len("xywh=") :]
    for unit in ("pixel:", "percent:"):
        if box.startswith(unit):
            box = box[len(unit) :]
            break
    return _four_numbers(box)


def _check_uri(value: Any, path: str, label: str, collector: DiagnosticCollector) -> None:
    if not isinstance(value, str):
        collector.error(ErrorKind.STRUCTURAL_ERROR, path, f"{label} must be a URI string, got {json_type(value)}")
    elif not is_absolute_uri(value):
        collector.error(ErrorKind.INVALID_URI, path, f"{label} must be an absolute URI, got '{value}'")


def _check_extent(obj: Mapping[str, Any], key: str, path: str, collector: DiagnosticCollector) -> None:
    value = get(obj, key)
    if value is MISSING:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        collector.error(
            ErrorKind.STRUCTURAL_ERROR,
            pointer(path, key),
            f"{key} must be an integer, got {json_type(value)}",
        )
    elif value <= 0:
        collector.error(ErrorKind.INVALID_VALUE, pointer(path, key), f"{key} must be positive, got {value}")


def _check_resource(
    obj: Mapping[str, Any],
    path: str,
    label: str,
    collector: DiagnosticCollector,
) -> Callable[[], ResourceRef]:
    resource_id = get(obj, "id")
    if resource_id is MISSING:
        collector.error(ErrorKind.MISSING_REQUIRED_FIELD, pointer(path, "id"), f"{label}.id is required")
    else:
        _check_uri(resource_id, pointer(path, "id"), f"{label}.id", collector)

    resource_type = get(obj, "type")
    if resource_type is MISSING:
        collector.error(ErrorKind.MISSING_REQUIRED_FIELD, pointer(path, "type"), f"{label}.type is required")
    elif not isinstance(resource_type, str):
        collector.error(
            ErrorKind.STRUCTURAL_ERROR,
            pointer(path, "type"),
            f"{label}.type must be a string, got {json_type(resource_type)}",
        )

    _check_extent(obj, "height", path, collector)
    _check_extent(obj, "width", path, collector)

    has_height = get(obj, "height") is not MISSING
    has_width = get(obj, "width") is not MISSING
    resource_type = resource_type if isinstance(resource_type, str) else None
    if resource_type in SPATIAL_RESOURCE_TYPES and not (has_height and has_width):
        collector.warning(
            ErrorKind.SPATIAL_DIMENSIONS_MISSING,
            path,
            f"{resource_type} resources should carry height and width",
        )
    elif resource_type in NON_SPATIAL_RESOURCE_TYPES and (has_height or has_width):
        collector.warning(
            ErrorKind.NON_SPATIAL_HEIGHT_WIDTH,
            path,
            f"height and width should be omitted for non-spatial {resource_type} resources",
        )

    return lambda: ResourceRef.model_validate(dict(obj))


def _check_selector(sel: Any, path: str, collector: DiagnosticCollector) -> Callable[[], Selector] | None:
    if not isinstance(sel, Mapping):
        collector.error(ErrorKind.STRUCTURAL_ERROR, path, f"selector must be an object, got {json_type(sel)}")
        return None

    selector_type = get(sel, "type")
    if selector_type is MISSING:
        collector.error(ErrorKind.MISSING_REQUIRED_FIELD, pointer(path, "type"), "selector.type is required")
    elif not isinstance(selector_type, str):
        collector.error(
            ErrorKind.STRUCTURAL_ERROR,
            pointer(path, "type"),
            f"selector.type must be a string, got {json_type(selector_type)}",
        )
    elif selector_type == "ImageApiSelector":
        region = get(sel, "region")
        if region is not MISSING:
            if not isinstance(region, str):
                collector.error(
                    ErrorKind.STRUCTURAL_ERROR,
                    pointer(path, "region"),
                    f"region must be a string, got {json_type(region)}",
                )
            elif not is_valid_region(region):
                collector.error(
                    ErrorKind.INVALID_VALUE,
                    pointer(path, "region"),
                    f"region must be full, square, pct:x,y,w,h or four non-negative numbers x,y,w,h, got '{region}'",
                )
    elif selector_type == "FragmentSelector":
        value = get(sel, "value")
        if value is MISSING:
            collector.error(
                ErrorKind.MISSING_REQUIRED_FIELD,
                pointer(path, "value"),
                "FragmentSelector.value is required",
            )
        elif not isinstance(value, str):
            collector.error(
                ErrorKind.STRUCTURAL_ERROR,
                pointer(path, "value"),
                f"FragmentSelector.value must be a string, got {json_type(value)}",
            )
        elif value.startswith("xywh=") and not is_valid_xywh_fragment(value):
            collector.error(
                ErrorKind.INVALID_VALUE,
                pointer(path, "value"),
                f"'{value}' is not a valid xywh media fragment",
            )

    return lambda: Selector.model_validate(dict(sel))


def _check_specific_resource(
    obj: Mapping[str, Any],
    path: str,
    collector: DiagnosticCollector,
) -> Callable[[], SpecificResourceTarget]:
    if get(obj, "id") is not MISSING:
        _check_uri(obj["id"], pointer(path, "id"), "target.id", collector)

    source = get(obj, "source")
    source_path = pointer(path, "source")
    build_source: Callable[[], str | ResourceRef] | None = None
    if source is MISSING:
        collector.error(ErrorKind.MISSING_REQUIRED_FIELD, source_path, "SpecificResource.source is required")
    elif isinstance(source, str):
        _check_uri(source, source_path, "source", collector)
        build_source = lambda: source  # noqa: E731
    elif isinstance(source, Mapping):
        build_source = _check_resource(source, source_path, "source", collector)
    else:
        collector.error(
            ErrorKind.STRUCTURAL_ERROR,
            source_path,
            f"source must be a URI or a resource object, got {json_type(source)}",
        )

    selector = get(obj, "selector")
    selector_path = pointer(path, "selector")
    build_selector: Callable[[], Selector | tuple[Selector, ...]] | None = None
    if selector is MISSING:
        collector.error(ErrorKind.MISSING_REQUIRED_FIELD, selector_path, "SpecificResource.selector is required")
    elif isinstance(selector, list):
        if not selector:
            collector.error(ErrorKind.INVALID_VALUE, selector_path, "selector list must not be empty")
        builders = [_check_selector(s, pointer(selector_path, i), collector) for i, s in enumerate(selector)]
        build_selector = lambda: tuple(b() for b in builders if b is not None)  # noqa: E731
    else:
        build_selector = _check_selector(selector, selector_path, collector)

    def build() -> SpecificResourceTarget:
        if build_source is None or build_selector is None:
            raise ValueError("SpecificResource has no usable source or selector")
        return SpecificResourceTarget.model_validate(
            {**obj, "source": build_source(), "selector": build_selector()}
        )

    return build


def validate_target(
    target: Any,
    *,
    path: str = "/target",
    options: ValidationOptions | None = None,
) -> ValidationResult[Target]:
    """Validate an annotation target.

    A target is a bare URI, a resource object with ``id`` and ``type``, or a
    SpecificResource with ``source`` and ``selector``. Spatial sources
    without height/width and non-spatial sources with them are warnings.
    """
    options = options or DEFAULT_OPTIONS
    collector = DiagnosticCollector()
    build: Callable[[], Target] | None = None

    if target is None or target is MISSING:
        collector.error(ErrorKind.MISSING_REQUIRED_FIELD, path, "target is required")
    elif isinstance(target, str):
        _check_uri(target, path, "target", collector)
        build = lambda: target  # noqa: E731
    elif isinstance(target, Mapping):
        if get(target, "type") == SPECIFIC_RESOURCE_TYPE:
            build = _check_specific_resource(target, path, collector)
        else:
            build = _check_resource(target, path, "target", collector)
    else:
        collector.error(
            ErrorKind.STRUCTURAL_ERROR,
            path,
            f"target must be a URI, a resource object or a SpecificResource, got {json_type(target)}",
        )

    if build is None:
        return collector.result(lambda: None)
    return collector.result(build)
