"""
Media Sources
=============
Given a permalink, return the media identifier + display metadata.

    GraphMediaSource  — oEmbed lookup, then Graph media fetch (network)
    SampleMediaSource — fixed sample video for every post (no network)
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from .client import AsyncGraphClient
from .config import SAMPLE_POSTER_URL, SAMPLE_VIDEO_URL
from .credentials import Credentials
from .exceptions import ResolutionError, UpstreamError
from .models.media import GraphMedia

logger = logging.getLogger("ig_gallery.sources")


class MediaSource(ABC):
    """Strategy used by RowResolver for each row."""

    name: str = "base"

    @abstractmethod
    async def lookup(self, permalink: str) -> GraphMedia:
        """
        Resolve a permalink.

        Returns:
            GraphMedia whose `id` is the resolved identifier ("" if none)
        """
        ...

    async def close(self) -> None:
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False


class GraphMediaSource(MediaSource):
    """
    Real Graph API lookup.

    Args:
        credentials: App ID, client token, access token
        client: Pre-built client (tests); created from credentials otherwise
        validate: Check all credentials now instead of per call
    """

    name = "graph"

    def __init__(
        self,
        credentials: Credentials,
        client: Optional[AsyncGraphClient] = None,
        validate: bool = True,
    ):
        if validate:
            credentials.validate()
        self._credentials = credentials
        self._client = client or AsyncGraphClient(credentials)

    async def resolve_media_id(self, permalink: str) -> str:
        """
        Raises:
            ResolutionError: oEmbed response has no media_id
        """
        data = await self._client.oembed(permalink)
        media_id = data.get("media_id")
        if not media_id:
            raise ResolutionError(
                "No media_id returned; ensure the URL is a post/reel and app is configured.",
                response=data,
            )
        return str(media_id)

    async def lookup(self, permalink: str) -> GraphMedia:
        media_id = await self.resolve_media_id(permalink)
        data = await self._client.get_media(media_id)
        try:
            media = GraphMedia.from_api(data)
        except PydanticValidationError as e:
            raise UpstreamError(
                "Media fetch returned unexpected payload", response=data,
            ) from e
        if media.id != media_id:
            media = media.model_copy(update={"id": media_id})
        return media

    async def close(self) -> None:
        await self._client.close()


class SampleMediaSource(MediaSource):
    """
    Same sample video and poster for every permalink.
    Returns no identifier, so items are keyed "row_<index>".
    """

    name = "sample"

    def __init__(
        self,
        video_url: str = SAMPLE_VIDEO_URL,
        poster_url: str = SAMPLE_POSTER_URL,
    ):
        self.video_url = video_url
        self.poster_url = poster_url

    async def lookup(self, permalink: str) -> GraphMedia:
        return GraphMedia(
            media_type="VIDEO",
            media_url=self.video_url,
            thumbnail_url=self.poster_url,
            permalink=permalink,
        )
