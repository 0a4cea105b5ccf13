"""Embedding model descriptor."""

from typing import Any, Literal

from pydantic import Field

from iiif_embedding.domain.codec import byte_width

from .base import JsonLdModel


class ModelDescriptor(JsonLdModel):
    """The ``model`` object of an embedding body."""

    name: str
    version: str
    dimensions: int | None = Field(default=None, gt=0)
    data_type: str | None = Field(default=None, alias="dataType")
    endianness: Literal["little", "big"] | None = None
    type: str | None = None
    normalization: bool | None = None
    provider: Any = None
    max_tokens: int | None = Field(default=None, alias="maxTokens", gt=0)
    truncation: Any = None

    @property
    def byte_width(self) -> int | None:
        """Element width in bytes; None when dataType is absent or unrecognized."""
        if self.data_type is None:
            return None
        return byte_width(self.data_type)
