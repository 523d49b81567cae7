"""
Media Models
============
Graph API media metadata and the normalized gallery item.

Media fetch response structure (fields requested):
    - id (str): Media ID
    - media_type (str): "IMAGE", "VIDEO" or "CAROUSEL_ALBUM"
    - media_url (str): Video file for VIDEO, image otherwise
    - thumbnail_url (str): Poster frame (VIDEO only)
    - permalink (str): Post URL
    - caption (str)
    - timestamp (str): ISO 8601, e.g. "2025-07-14T18:02:11+0000"
"""

from typing import Any, Dict, Optional
from pydantic import ConfigDict, Field, field_serializer, field_validator

from .base import GalleryModel
from .row import Row, finite_or_none


class GraphMedia(GalleryModel):
    """Metadata returned by GET /{media_id}?fields=..."""

    id: str = ""
    media_type: Optional[str] = None
    media_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    permalink: Optional[str] = None
    caption: Optional[str] = None
    timestamp: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v)

    @property
    def is_video(self) -> bool:
        return self.media_type == "VIDEO"

    @property
    def display_url(self) -> Optional[str]:
        """Image shown before playback: poster frame, else the media itself."""
        return self.thumbnail_url or self.media_url

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "GraphMedia":
        """Create GraphMedia from a media fetch response."""
        return cls(**data)


class MediaStats(GalleryModel):
    """Row statistics carried through to the gallery card."""

    model_config = ConfigDict(frozen=True)

    results: Optional[float] = None
    cpr: Optional[float] = None

    @field_serializer("results", "cpr", when_used="json")
    def serialize_number(self, v: Optional[float]) -> Optional[float]:
        return finite_or_none(v)


class MediaItem(GalleryModel):
    """
    Resolved gallery item.

    Fields:
        id: Media ID, or "row_<index>" when no ID was resolved
        permalink: Post URL without fragment
        label: Row name
        video_url: Playable file, set only for VIDEO media
        thumbnail_url: Poster/image URL
        preview: Same as thumbnail_url (fallback for display)
        stats: Results and CPR from the input row
    """

    model_config = ConfigDict(frozen=True)

    id: str
    permalink: str
    label: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    preview: Optional[str] = None
    stats: MediaStats = Field(default_factory=MediaStats)

    @property
    def is_video(self) -> bool:
        return self.video_url is not None

    @classmethod
    def build(
        cls,
        index: int,
        row: Row,
        permalink: str,
        media_id: str,
        media: GraphMedia,
    ) -> "MediaItem":
        """Normalize one resolved row."""
        display = media.display_url
        return cls(
            id=media_id or f"row_{index}",
            permalink=permalink,
            label=row.name,
            thumbnail_url=display,
            preview=display,
            video_url=media.media_url if media.is_video else None,
            stats=MediaStats(results=row.results, cpr=row.cpr),
        )
