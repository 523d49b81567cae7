"""
Async Graph Client
==================
The two outbound calls per row, over curl_cffi AsyncSession:

    1. GET /instagram_oembed?url=<permalink>&access_token=<app_id>|<client_token>
       → {"media_id": "...", ...}
    2. GET /<media_id>?fields=media_type,...&access_token=<token>
       → {"media_type": "VIDEO", "media_url": "...", ...}

No retry, no caching. Credentials are checked before each call.
"""

import logging
import time
from typing import Any, Dict, Optional

from curl_cffi import CurlError
from curl_cffi.requests import AsyncSession

from .config import (
    BROWSER_IMPERSONATION,
    MEDIA_FIELDS,
    MEDIA_URL,
    OEMBED_URL,
    REQUEST_TIMEOUT,
)
from .credentials import Credentials
from .exceptions import UpstreamError
from .log_config import get_debug_logger
from .response_handler import ResponseHandler

logger = logging.getLogger("ig_gallery.client")


class AsyncGraphClient:
    """
    Async HTTP client for the Graph API endpoints used by the gallery.

    Usage:
        async with AsyncGraphClient(Credentials.from_env()) as client:
            oembed = await client.oembed("https://www.instagram.com/p/DMBhlKcJHK4/")
            media = await client.get_media(oembed["media_id"])
    """

    def __init__(
        self,
        credentials: Credentials,
        timeout: float = REQUEST_TIMEOUT,
        impersonate: str = BROWSER_IMPERSONATION,
    ):
        self._credentials = credentials
        self._timeout = timeout
        self._impersonate = impersonate
        self._response_handler = ResponseHandler()
        self._async_session: Optional[AsyncSession] = None

    def _get_async_session(self) -> AsyncSession:
        """Get or create curl_cffi AsyncSession."""
        if self._async_session is None:
            self._async_session = AsyncSession(impersonate=self._impersonate)
        return self._async_session

    async def _get(self, url: str, params: Dict[str, str], label: str) -> Dict[str, Any]:
        dbg = get_debug_logger()
        dbg.request("GET", url, params=params)

        start_time = time.time()
        try:
            response = await self._get_async_session().get(
                url, params=params, timeout=self._timeout,
            )
        except CurlError as e:
            dbg.error(error_type="NetworkError", endpoint=url, message=str(e))
            raise UpstreamError(f"{label} request error: {e}") from e
        elapsed = time.time() - start_time

        dbg.response(
            status_code=response.status_code,
            elapsed_ms=elapsed * 1000,
            size_bytes=len(response.content or b""),
            url=url,
        )
        return self._response_handler.handle(response, label, endpoint=url)

    # ─── oEmbed ──────────────────────────────────────────────

    async def oembed(self, url: str) -> Dict[str, Any]:
        """
        oEmbed lookup for a post/reel permalink.

        Raises:
            ConfigurationError: IG_APP_ID or IG_CLIENT_TOKEN missing
            UpstreamError: non-success status
        """
        token = self._credentials.require_app_token()
        return await self._get(
            OEMBED_URL,
            {"url": url, "access_token": token},
            label="oEmbed",
        )

    # ─── Media ───────────────────────────────────────────────

    async def get_media(self, media_id: str) -> Dict[str, Any]:
        """
        Media metadata (type, media/thumbnail URL, permalink, caption, timestamp).

        Raises:
            ConfigurationError: IG_ACCESS_TOKEN missing
            UpstreamError: non-success status
        """
        token = self._credentials.require_access_token()
        return await self._get(
            MEDIA_URL.format(media_id=media_id),
            {"fields": ",".join(MEDIA_FIELDS), "access_token": token},
            label="Media fetch",
        )

    async def close(self) -> None:
        """Clean up async resources."""
        if self._async_session:
            try:
                await self._async_session.close()
            except Exception as e:
                logger.debug("Session close failed: %s", e)
            self._async_session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False
