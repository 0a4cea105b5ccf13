"""Binary vector codec for base64-encoded embeddings."""

import base64
import binascii
import struct
from collections.abc import Sequence

from iiif_embedding.domain.vocabulary import DATA_TYPE_BYTE_WIDTHS

_STRUCT_CODES = {
    "int8": "b",
    "uint8": "B",
    "int16": "h",
    "uint16": "H",
    "int32": "i",
    "uint32": "I",
    "float32": "f",
    "float64": "d",
}


def byte_width(data_type: str) -> int | None:
    """Bytes per element for a recognized data type, None otherwise."""
    return DATA_TYPE_BYTE_WIDTHS.get(data_type)


def expected_byte_length(dimensions: int, data_type: str) -> int | None:
    width = byte_width(data_type)
    if width is None:
        return None
    return dimensions * width


def decode_base64(text: str) -> bytes:
    """Strictly decode standard base64; raises ValueError on any malformed input."""
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64: {e}") from e


def _struct_format(count: int, data_type: str, endianness: str | None) -> str:
    code = _STRUCT_CODES.get(data_type)
    if code is None:
        raise ValueError(f"unsupported dataType '{data_type}'")
    if DATA_TYPE_BYTE_WIDTHS[data_type] > 1:
        if endianness not in ("little", "big"):
            raise ValueError(f"endianness is required for {data_type}")
        order = "<" if endianness == "little" else ">"
    else:
        order = "<"
    return f"{order}{count}{code}"


def decode_base64_vector(text: str, data_type: str, endianness: str | None = None) -> tuple[int | float, ...]:
    """Decode a base64 payload into its numeric elements."""
    raw = decode_base64(text)
    width = byte_width(data_type)
    if width is None:
        raise ValueError(f"unsupported dataType '{data_type}'")
    if len(raw) % width:
        raise ValueError(f"{len(raw)} bytes is not a whole number of {data_type} elements")
    return struct.unpack(_struct_format(len(raw) // width, data_type, endianness), raw)


def encode_base64_vector(
    values: Sequence[int | float],
    data_type: str,
    endianness: str | None = None,
) -> str:
    """Pack numbers as ``data_type`` elements and return the base64 text."""
    try:
        raw = struct.pack(_struct_format(len(values), data_type, endianness), *values)
    except struct.error as e:
        raise ValueError(f"cannot pack values as {data_type}: {e}") from e
    return base64.b64encode(raw).decode("ascii")
