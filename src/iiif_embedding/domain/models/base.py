from typing import Any

from pydantic import BaseModel, ConfigDict


class JsonLdModel(BaseModel):
    """Base class for normalized, immutable views of validated JSON-LD objects.

    Models are only built after the validators have accepted the input, so
    strict mode never has anything to coerce. Fields are read by their JSON
    names only (``dataType``, ``@context``); any other key, Python field
    names included, is kept as an extra and written back out unchanged.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        strict=True,
    )

    def to_jsonld(self) -> dict[str, Any]:
        """Serialize back to the JSON shape the model was read from."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
