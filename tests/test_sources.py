"""
Tests for media sources: Graph two-step lookup and the sample source.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from ig_gallery.credentials import Credentials
from ig_gallery.exceptions import ConfigurationError, ResolutionError, UpstreamError
from ig_gallery.sources import GraphMediaSource, SampleMediaSource
from ig_gallery.config import SAMPLE_POSTER_URL, SAMPLE_VIDEO_URL


@pytest.fixture
def graph_client(raw_oembed, raw_media_video):
    client = MagicMock()
    client.oembed = AsyncMock(return_value=raw_oembed)
    client.get_media = AsyncMock(return_value=raw_media_video)
    client.close = AsyncMock()
    return client


class TestGraphMediaSource:

    def test_validates_credentials_up_front(self):
        with pytest.raises(ConfigurationError) as exc_info:
            GraphMediaSource(Credentials(app_id="1", client_token="c"))
        assert exc_info.value.missing == ["IG_ACCESS_TOKEN"]

    def test_validation_can_be_deferred(self):
        source = GraphMediaSource(Credentials(), client=MagicMock(), validate=False)
        assert source.name == "graph"

    @pytest.mark.asyncio
    async def test_lookup_two_steps(self, credentials, graph_client, raw_oembed):
        source = GraphMediaSource(credentials, client=graph_client)
        media = await source.lookup("https://www.instagram.com/p/DMBhlKcJHK4/")

        graph_client.oembed.assert_awaited_once_with("https://www.instagram.com/p/DMBhlKcJHK4/")
        graph_client.get_media.assert_awaited_once_with(raw_oembed["media_id"])
        assert media.id == raw_oembed["media_id"]
        assert media.is_video

    @pytest.mark.asyncio
    async def test_oembed_id_wins(self, credentials, graph_client, raw_media_image):
        graph_client.get_media = AsyncMock(return_value={**raw_media_image, "id": "other"})
        source = GraphMediaSource(credentials, client=graph_client)
        media = await source.lookup("https://www.instagram.com/p/DMBhlgJMmCN/")
        assert media.id == "3671234567890123456_987654321"

    @pytest.mark.asyncio
    async def test_missing_media_id(self, credentials, graph_client):
        graph_client.oembed = AsyncMock(return_value={"type": "rich", "html": "<blockquote/>"})
        source = GraphMediaSource(credentials, client=graph_client)
        with pytest.raises(ResolutionError, match="No media_id returned"):
            await source.lookup("https://www.instagram.com/nike/")
        graph_client.get_media.assert_not_called()

    @pytest.mark.asyncio
    async def test_oembed_failure_stops_row(self, credentials, graph_client):
        graph_client.oembed = AsyncMock(side_effect=UpstreamError("oEmbed failed 400", status_code=400))
        source = GraphMediaSource(credentials, client=graph_client)
        with pytest.raises(UpstreamError):
            await source.lookup("https://www.instagram.com/p/X/")
        graph_client.get_media.assert_not_called()

    @pytest.mark.asyncio
    async def test_null_media_type(self, credentials, graph_client, raw_media_image):
        graph_client.get_media = AsyncMock(return_value={**raw_media_image, "media_type": None})
        source = GraphMediaSource(credentials, client=graph_client)
        media = await source.lookup("https://www.instagram.com/p/DMBhlgJMmCN/")
        assert media.media_type is None
        assert media.is_video is False
        assert media.display_url == raw_media_image["media_url"]

    @pytest.mark.asyncio
    async def test_malformed_media_payload(self, credentials, graph_client, raw_media_video):
        graph_client.get_media = AsyncMock(return_value={**raw_media_video, "media_url": {"uri": "x"}})
        source = GraphMediaSource(credentials, client=graph_client)
        with pytest.raises(UpstreamError, match="Media fetch returned unexpected payload") as exc_info:
            await source.lookup("https://www.instagram.com/p/DMBhlKcJHK4/")
        assert exc_info.value.response["media_url"] == {"uri": "x"}

    @pytest.mark.asyncio
    async def test_close(self, credentials, graph_client):
        async with GraphMediaSource(credentials, client=graph_client):
            pass
        graph_client.close.assert_awaited_once()


class TestSampleMediaSource:

    @pytest.mark.asyncio
    async def test_lookup(self):
        media = await SampleMediaSource().lookup("https://www.instagram.com/p/A/")
        assert media.id == ""
        assert media.is_video
        assert media.media_url == SAMPLE_VIDEO_URL
        assert media.thumbnail_url == SAMPLE_POSTER_URL
        assert media.permalink == "https://www.instagram.com/p/A/"

    @pytest.mark.asyncio
    async def test_custom_urls(self):
        media = await SampleMediaSource(video_url="https://cdn/v.mp4", poster_url="https://cdn/p.jpg").lookup("x")
        assert media.media_url == "https://cdn/v.mp4"
        assert media.display_url == "https://cdn/p.jpg"
