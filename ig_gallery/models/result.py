"""
Resolve Result
==============
Per-row outcome for error-tolerant batch resolution.
"""

from typing import Optional

from .base import GalleryModel
from .media import MediaItem
from .row import Row


class ResolveResult(GalleryModel):
    """Either an item or the error that stopped this row."""

    index: int
    row: Row
    item: Optional[MediaItem] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.item is not None

    @classmethod
    def success(cls, index: int, row: Row, item: MediaItem) -> "ResolveResult":
        return cls(index=index, row=row, item=item)

    @classmethod
    def failure(cls, index: int, row: Row, exc: Exception) -> "ResolveResult":
        return cls(
            index=index,
            row=row,
            error=str(exc) or type(exc).__name__,
            error_type=type(exc).__name__,
        )
