"""
ig_gallery
==========
Instagram video gallery: table → Graph API lookups → gallery items.

    from ig_gallery import Gallery

    async with Gallery.from_env(".env") as gallery:
        items = await gallery.load(open("ads.tsv").read())
"""

from .config import DEFAULT_TABLE
from .credentials import Credentials
from .exceptions import (
    GalleryError,
    ConfigurationError,
    UpstreamError,
    ResolutionError,
    ValidationError,
)
from .gallery import Gallery
from .log_config import LogConfig, DebugLogger
from .models import GraphMedia, MediaItem, MediaStats, ResolveResult, Row
from .parser import TableParser, parse_table
from .resolver import RowResolver
from .sources import GraphMediaSource, MediaSource, SampleMediaSource
from .utils import strip_fragment

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_TABLE",
    "Credentials",
    "GalleryError",
    "ConfigurationError",
    "UpstreamError",
    "ResolutionError",
    "ValidationError",
    "Gallery",
    "LogConfig",
    "DebugLogger",
    "GraphMedia",
    "MediaItem",
    "MediaStats",
    "ResolveResult",
    "Row",
    "TableParser",
    "parse_table",
    "RowResolver",
    "GraphMediaSource",
    "MediaSource",
    "SampleMediaSource",
    "strip_fragment",
]
