"""
Row Resolver
============
Rows → MediaItems, in input order.

Per row:
    1. strip "#fragment" from the link → permalink
    2. source.lookup(permalink) → media_id + metadata
    3. MediaItem.build(...)

Batch policies:
    resolve()     : fail-fast: first error propagates, nothing is returned
    resolve_each(): every row attempted, one ResolveResult per row

concurrency=1 (default) resolves one row at a time. Higher values
fan out with asyncio.Semaphore; output order always matches input.
In fail-fast mode the first error cancels rows still in flight.
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Sequence, TypeVar

from .models.media import MediaItem
from .models.result import ResolveResult
from .models.row import Row
from .sources import MediaSource
from .utils import extract_shortcode, strip_fragment

logger = logging.getLogger("ig_gallery.resolver")

T = TypeVar("T")


class RowResolver:
    """
    Resolves parsed rows through a MediaSource.

    Usage:
        async with GraphMediaSource(Credentials.from_env()) as source:
            items = await RowResolver(source).resolve(rows)
    """

    def __init__(self, source: MediaSource, concurrency: int = 1):
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self._source = source
        self._concurrency = concurrency

    @property
    def source(self) -> MediaSource:
        return self._source

    async def resolve_row(self, index: int, row: Row) -> MediaItem:
        """Resolve one row. Any error propagates."""
        permalink = strip_fragment(row.link)
        logger.debug(
            "[Resolve] row %d %s via %s",
            index, extract_shortcode(permalink) or permalink, self._source.name,
        )
        media = await self._source.lookup(permalink)
        return MediaItem.build(index, row, permalink, media.id, media)

    async def _run(
        self,
        rows: Sequence[Row],
        fn: Callable[[int, Row], Awaitable[T]],
    ) -> List[T]:
        if self._concurrency == 1:
            out = []
            for i, row in enumerate(rows):
                out.append(await fn(i, row))
            return out

        sem = asyncio.Semaphore(self._concurrency)

        async def task(i: int, row: Row) -> T:
            async with sem:
                return await fn(i, row)

        tasks = [asyncio.ensure_future(task(i, r)) for i, r in enumerate(rows)]
        try:
            # gather keeps input order
            return list(await asyncio.gather(*tasks))
        except Exception:
            # first failure: stop the remaining rows before re-raising
            pending = [t for t in tasks if not t.done()]
            for t in pending:
                t.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            raise

    async def resolve(self, rows: Sequence[Row]) -> List[MediaItem]:
        """
        Fail-fast batch resolution.

        Raises:
            ConfigurationError, UpstreamError, ResolutionError from the
            first failing row; results for other rows are discarded.
        """
        items = await self._run(rows, self.resolve_row)
        logger.info("Resolved %d row(s)", len(items))
        return items

    async def resolve_each(self, rows: Sequence[Row]) -> List[ResolveResult]:
        """Error-tolerant batch resolution. Never raises for row errors."""

        async def attempt(i: int, row: Row) -> ResolveResult:
            try:
                item = await self.resolve_row(i, row)
            except Exception as e:
                logger.warning(f"[Resolve] row {i} failed: {e}")
                return ResolveResult.failure(i, row, e)
            return ResolveResult.success(i, row, item)

        results = await self._run(rows, attempt)
        failed = sum(1 for r in results if not r.ok)
        logger.info("Resolved %d row(s), %d failed", len(results) - failed, failed)
        return results
