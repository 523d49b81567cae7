"""
Gallery
=======
Main entry point: pasted table text → resolved gallery items.
"""

import logging
from typing import List, Optional, Sequence

from .config import DEFAULT_TABLE
from .credentials import Credentials
from .log_config import LogConfig, DebugLogger, set_debug_logger
from .models.media import MediaItem
from .models.result import ResolveResult
from .models.row import Row
from .parser import TableParser
from .resolver import RowResolver
from .sources import GraphMediaSource, MediaSource, SampleMediaSource

logger = logging.getLogger("ig_gallery")


class Gallery:
    """
    Instagram video gallery builder.

    Basic usage:
        async with Gallery.from_env(".env") as gallery:
            items = await gallery.load(text)

    Without network (sample video for every row):
        gallery = Gallery.sample()
        items = await gallery.load(DEFAULT_TABLE)

    Per-row results instead of failing the whole batch:
        results = await gallery.load(text, partial=True)
    """

    def __init__(
        self,
        source: MediaSource,
        concurrency: int = 1,
        log_level: str = "WARNING",
        log_file: Optional[str] = None,
        debug: bool = False,
        debug_log_file: Optional[str] = None,
    ):
        """
        Args:
            source: Media source strategy
            concurrency: Rows resolved at once (1 = strictly sequential)
            log_level: Logging level (DEBUG/INFO/WARNING/ERROR)
            log_file: Log file path (None = console only)
            debug: Enable structured debug logging (emoji-coded output)
            debug_log_file: Debug log file path
        """
        if debug:
            self._debug = DebugLogger(enabled=True, log_file=debug_log_file)
            set_debug_logger(self._debug)
        else:
            self._debug = DebugLogger(enabled=False)
            LogConfig.configure(level=log_level, filename=log_file)

        self._parser = TableParser()
        self._resolver = RowResolver(source, concurrency=concurrency)

    @classmethod
    def from_env(cls, env_path: str = ".env", **kwargs) -> "Gallery":
        """
        Build a network-backed gallery from IG_APP_ID, IG_CLIENT_TOKEN,
        IG_ACCESS_TOKEN (environment or .env file).

        Raises:
            ConfigurationError: any of the three is missing
        """
        credentials = Credentials.from_env(env_path)
        gallery = cls(GraphMediaSource(credentials), **kwargs)
        gallery._debug.credentials(
            app_id=credentials.app_id,
            client_token=credentials.client_token,
            access_token=credentials.access_token,
        )
        return gallery

    @classmethod
    def sample(cls, **kwargs) -> "Gallery":
        """Gallery backed by SampleMediaSource (no credentials, no network)."""
        return cls(SampleMediaSource(), **kwargs)

    @property
    def source(self) -> MediaSource:
        return self._resolver.source

    def parse(self, text: str) -> List[Row]:
        return self._parser.parse(text)

    async def resolve(self, rows: Sequence[Row]) -> List[MediaItem]:
        return await self._resolver.resolve(rows)

    async def resolve_each(self, rows: Sequence[Row]) -> List[ResolveResult]:
        return await self._resolver.resolve_each(rows)

    async def load(self, text: str = DEFAULT_TABLE, partial: bool = False):
        """
        Parse + resolve.

        Returns:
            List[MediaItem], or List[ResolveResult] when partial=True
        """
        rows = self.parse(text)
        if partial:
            return await self.resolve_each(rows)
        return await self.resolve(rows)

    async def close(self) -> None:
        await self.source.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    def __repr__(self) -> str:
        return f"<Gallery source={self.source.name}>"
