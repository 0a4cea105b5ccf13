"""Embedding annotation and its targets."""

from typing import Any, Literal

from pydantic import Field

from .base import JsonLdModel
from .body import EmbeddingVectorBody


class ResourceRef(JsonLdModel):
    """A resource given as an object: a full target or an embedded source."""

    id: str
    type: str
    height: int | None = Field(default=None, gt=0)
    width: int | None = Field(default=None, gt=0)


class Selector(JsonLdModel):
    """A selector; type-specific properties (region, value, ...) are kept as extras."""

    type: str


class SpecificResourceTarget(JsonLdModel):
    id: str | None = None
    type: Literal["SpecificResource"] = "SpecificResource"
    source: str | ResourceRef
    selector: Selector | tuple[Selector, ...]

    @property
    def source_id(self) -> str:
        return self.source if isinstance(self.source, str) else self.source.id


Target = str | ResourceRef | SpecificResourceTarget


class EmbeddingAnnotation(JsonLdModel):
    context: Any = Field(default=None, alias="@context")
    id: str | None = None
    type: Literal["Annotation"] = "Annotation"
    motivation: Literal["embedding"] = "embedding"
    target: Target
    body: EmbeddingVectorBody

    @property
    def target_id(self) -> str:
        """URI of the annotated resource, whatever shape the target takes."""
        if isinstance(self.target, str):
            return self.target
        if isinstance(self.target, SpecificResourceTarget):
            return self.target.source_id
        return self.target.id
