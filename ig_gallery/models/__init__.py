from .base import GalleryModel
from .row import Row
from .media import GraphMedia, MediaItem, MediaStats
from .result import ResolveResult

__all__ = [
    "GalleryModel",
    "Row",
    "GraphMedia",
    "MediaItem",
    "MediaStats",
    "ResolveResult",
]
