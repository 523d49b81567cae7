"""
Base Model
==========
Shared configuration and utilities for all ig_gallery models.
"""

from pydantic import BaseModel, ConfigDict
from typing import Any, Dict


class GalleryModel(BaseModel):
    """
    Base model for all gallery data models.

    Features:
        - extra="allow": unknown Graph API fields are preserved, not discarded
        - populate_by_name=True: fields can be set by name or alias
        - Dict-like access: model["key"] works like the raw JSON
        - .to_dict(): convert back to plain dict
        - .to_json(): JSON-safe dict (NaN becomes null)
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        from_attributes=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to plain dict, dropping unset optional fields."""
        return self.model_dump(by_alias=False, exclude_none=True)

    def to_json(self) -> Dict[str, Any]:
        """Convert model to a dict that json.dumps accepts."""
        return self.model_dump(mode="json", by_alias=False, exclude_none=True)

    def __getitem__(self, key: str) -> Any:
        """Dict-like access: model['field_name']."""
        return getattr(self, key)

    def get(self, key: str, default: Any = None) -> Any:
        """Dict-like .get() method."""
        return getattr(self, key, default)
