"""
Cache-warming driver.

Fetches each URL of a deduplicated set exactly once, one at a time,
through the persistent disk cache only. The in-memory layer is bypassed:
the point is long-term disk warmth, not immediate reuse.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from feedcache.models.precache import DriverResult, FetchFailure, FetchOutcome, FetchSuccess
from feedcache.services.interfaces import ImageFetcherInterface
from feedcache.services.precache.cancellation import CancellationToken

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, FetchOutcome], None]


class CacheWarmingDriver:
    """Sequentially warms the disk cache for a set of image URLs.

    Parameters
    ----------
    fetcher : ImageFetcherInterface
        Image fetch-and-cache facility.
    """

    def __init__(self, fetcher: ImageFetcherInterface) -> None:
        self._fetcher = fetcher

    async def warm_one(self, url: str) -> FetchOutcome:
        """Fetch a single URL into the disk cache.

        Anything the fetcher raises is folded into a ``FetchFailure``.
        """
        try:
            return await self._fetcher.fetch(url, disk_cache=True, memory_cache=False)
        except Exception as exc:  # noqa: BLE001 - one image never aborts a run
            return FetchFailure(url=url, reason=str(exc) or type(exc).__name__)

    async def run(
        self,
        urls: Iterable[str],
        token: CancellationToken | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> DriverResult:
        """Warm every URL in ``urls`` unless cancelled.

        Cancellation is checked before each fetch; the fetch in flight
        when cancellation is requested completes normally. No URL is
        retried within a run.

        Parameters
        ----------
        urls : Iterable[str]
            Deduplicated image URLs, in any order.
        token : CancellationToken | None
            Cooperative cancellation flag.
        progress_callback : ProgressCallback | None
            Optional ``(url, outcome)`` callback invoked after each fetch. An
            exception it raises is logged and does not stop the run.

        Returns
        -------
        DriverResult
            Attempt, success and failure counts, and whether the run was
            cut short.
        """
        attempted = 0
        success_count = 0
        fail_count = 0
        cancelled = False

        for url in urls:
            if token is not None and token.cancelled:
                cancelled = True
                break

            outcome = await self.warm_one(url)
            attempted += 1
            if isinstance(outcome, FetchSuccess):
                success_count += 1
            else:
                fail_count += 1

            if progress_callback is not None:
                try:
                    progress_callback(url, outcome)
                except Exception:
                    logger.warning(
                        "Progress callback failed for %s; continuing", url, exc_info=True
                    )

        return DriverResult(
            attempted=attempted,
            success_count=success_count,
            fail_count=fail_count,
            cancelled=cancelled,
        )
