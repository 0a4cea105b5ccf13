"""JSON Pointer paths and small JSON value predicates shared by the validators."""

import math
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_FORBIDDEN_URI_CHARS = re.compile(r"[\s<>\"{}|\\^`\x00-\x1f\x7f]")
_HIERARCHICAL_SCHEMES = frozenset({"http", "https", "ftp", "ftps", "s3", "gs"})


class _Missing:
    """Marks a property that is absent, as opposed to present with null."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def pointer(base: str, *tokens: str | int) -> str:
    """Append reference tokens to a JSON Pointer (RFC 6901)."""
    parts = [base]
    for token in tokens:
        parts.append("/" + str(token).replace("~", "~0").replace("/", "~1"))
    return "".join(parts)


def get(obj: Mapping[str, Any], key: str) -> Any:
    """Property value, or MISSING when absent. JSON null counts as absent."""
    value = obj.get(key, MISSING)
    return MISSING if value is None else value


def json_type(value: Any) -> str:
    """Name of a value's JSON type, for messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int | float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, list | tuple):
        return "array"
    return type(value).__name__


def is_json_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def is_absolute_uri(value: Any) -> bool:
    """True for a syntactically valid absolute URI (scheme required, no fragment-only refs)."""
    if not isinstance(value, str) or not value or _FORBIDDEN_URI_CHARS.search(value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME.match(parts.scheme):
        return False
    if parts.scheme.lower() in _HIERARCHICAL_SCHEMES:
        return bool(parts.netloc)
    # urn:, data:, tag: and friends only need something after the colon
    return bool(value[len(parts.scheme) + 1 :])
