"""Typed representation of a loaded content resource."""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

MetadataValue = Union[str, list[str]]


class Document(BaseModel):
    """Metadata block paired with the untouched body of one resource."""

    model_config = ConfigDict(frozen=True)

    metadata: dict[str, MetadataValue] = Field(
        default_factory=dict, description="Key/value pairs from the metadata block."
    )
    body: str = Field(default="", description="Raw body text, opaque to the loader.")
    source_path: Optional[str] = Field(
        default=None, description="Path or label of the resource, if known."
    )

    @property
    def has_metadata(self) -> bool:
        return bool(self.metadata)

    def get(self, key: str, default: Optional[MetadataValue] = None) -> Optional[MetadataValue]:
        return self.metadata.get(key, default)

    def get_list(self, key: str) -> list[str]:
        """Return a metadata value as a list, wrapping scalar values."""
        value = self.metadata.get(key)
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return list(value)
