"""
Pytest fixtures for ig_gallery tests.
"""

import pytest
from unittest.mock import MagicMock

from ig_gallery.credentials import Credentials
from ig_gallery.models.row import Row


# ─── Sample Data ─────────────────────────────────────────────

@pytest.fixture
def sample_tsv():
    """Two-row table as pasted from the ads spreadsheet."""
    return (
        "Name\tResults\tCPR\tVideo Link\n"
        "American Psycho\t2\t0.2\thttps://www.instagram.com/p/DMBhlKcJHK4/#advertiser\n"
        "Jake WOrk\t30\t0.12\thttps://www.instagram.com/p/DMBhlgJMmCN/#advertiser\n"
    )


@pytest.fixture
def row():
    return Row(
        name="American Psycho",
        results=2,
        cpr=0.2,
        link="https://www.instagram.com/p/DMBhlKcJHK4/#advertiser",
    )


@pytest.fixture
def credentials():
    return Credentials(app_id="1234567890", client_token="clienttok", access_token="EAAGtoken")


@pytest.fixture
def raw_oembed():
    """Response from /instagram_oembed."""
    return {
        "version": "1.0",
        "author_name": "someadvertiser",
        "provider_name": "Instagram",
        "provider_url": "https://www.instagram.com/",
        "type": "rich",
        "width": 658,
        "html": "<blockquote class=\"instagram-media\"></blockquote>",
        "media_id": "3671234567890123456_987654321",
    }


@pytest.fixture
def raw_media_video():
    """Media fetch response for a reel."""
    return {
        "id": "3671234567890123456_987654321",
        "media_type": "VIDEO",
        "media_url": "https://scontent.cdninstagram.com/v/reel.mp4",
        "thumbnail_url": "https://scontent.cdninstagram.com/v/reel_thumb.jpg",
        "permalink": "https://www.instagram.com/reel/DMBhlKcJHK4/",
        "caption": "New drop 🎬",
        "timestamp": "2025-07-14T18:02:11+0000",
    }


@pytest.fixture
def raw_media_image():
    """Media fetch response for a photo post."""
    return {
        "id": "3671234567890999999_987654321",
        "media_type": "IMAGE",
        "media_url": "https://scontent.cdninstagram.com/v/photo.jpg",
        "permalink": "https://www.instagram.com/p/DMBhlgJMmCN/",
        "caption": "Still",
        "timestamp": "2025-07-15T09:30:00+0000",
    }


@pytest.fixture
def make_response():
    """Factory for mock curl_cffi responses."""

    def _make(status_code=200, json_data=None, text=""):
        resp = MagicMock()
        resp.status_code = status_code
        resp.text = text
        resp.content = text.encode() if text else b"{}"
        if json_data is not None:
            resp.json.return_value = json_data
        else:
            resp.json.side_effect = ValueError("No JSON")
        return resp

    return _make
