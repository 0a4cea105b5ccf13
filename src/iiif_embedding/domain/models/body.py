"""Embedding vector bodies.

A body is one of three variants, discriminated by the presence of
``vectorReference`` and by ``vectorEncoding``. Each variant declares only
the fields that are legal for it.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from iiif_embedding.domain.codec import decode_base64_vector

from .base import JsonLdModel
from .model import ModelDescriptor


class PayloadKind(str, Enum):
    JSON_ARRAY = "json-array"
    BASE64 = "base64"
    REFERENCE = "reference"


class _EmbeddingVectorBody(JsonLdModel):
    type: Literal["EmbeddingVector"] = "EmbeddingVector"
    model: ModelDescriptor

    @property
    def dimensions(self) -> int | None:
        return self.model.dimensions


class InlineJsonArrayBody(_EmbeddingVectorBody):
    vector: tuple[int | float, ...]
    vector_encoding: Literal["json-array"] = Field(alias="vectorEncoding")

    @property
    def dimensions(self) -> int:
        return len(self.vector)

    def values(self) -> tuple[int | float, ...]:
        return self.vector


class InlineBase64Body(_EmbeddingVectorBody):
    vector: str
    vector_encoding: Literal["base64"] = Field(alias="vectorEncoding")

    def values(self) -> tuple[int | float, ...]:
        """Decode the payload using the model's dataType and endianness."""
        if self.model.data_type is None:
            raise ValueError("model.dataType is required to decode a base64 vector")
        return decode_base64_vector(self.vector, self.model.data_type, self.model.endianness)


class ExternalReferenceBody(_EmbeddingVectorBody):
    vector_reference: str = Field(alias="vectorReference")
    format: str


EmbeddingVectorBody = InlineJsonArrayBody | InlineBase64Body | ExternalReferenceBody


class VectorPayload(BaseModel):
    """What the payload validator learned about a body's vector."""

    model_config = ConfigDict(frozen=True)

    kind: PayloadKind
    dimensions: int | None = Field(None, description="Effective dimensions")
    byte_length: int | None = Field(None, description="Decoded size of a base64 payload")
    data_type: str | None = None
    endianness: str | None = None
    reference: str | None = None
    media_type: str | None = None
    binary: bool = False
