"""
Image cache job lifecycle.

``ImageCacheJob`` runs the whole pre-warming pipeline as one cancellable
unit of work: gather direct image URLs, scan article blobs, merge, and
warm the disk cache. It is the single place where a pipeline-level
failure is caught, and it reports timing and counts exactly once per run.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from datetime import datetime, timezone

from feedcache.models.enums import BackgroundJobId, RunStatus
from feedcache.models.precache import (
    AggregatedUrls,
    BlobScanResult,
    FetchOutcome,
    FetchSuccess,
    RunSummary,
)
from feedcache.services.interfaces import (
    ContentIndexInterface,
    ContentStoreInterface,
)
from feedcache.services.precache.blob_scanner import BlobScanner
from feedcache.services.precache.cancellation import CancellationToken
from feedcache.services.precache.driver import CacheWarmingDriver, ProgressCallback
from feedcache.services.precache.reporting import PrecacheReporter
from feedcache.services.precache.url_aggregator import UrlAggregator


class ImageCacheJob:
    """Pre-warms the on-disk image cache for all stored content.

    Parameters
    ----------
    content_store : ContentStoreInterface
        Source of thumbnail and enclosure image URLs.
    content_index : ContentIndexInterface
        Source of the content item ids whose blobs are scanned.
    scanner : BlobScanner
        Article blob scanner.
    driver : CacheWarmingDriver
        Sequential cache-warming driver.
    aggregator : UrlAggregator | None
        URL merger; a default one is used when omitted.
    job_id : int
        Stable job identifier reported in logs and summaries.
    reporter : PrecacheReporter | None
        Log reporter; a default one is used when omitted.
    clock : Callable[[], float]
        Monotonic clock in seconds used for elapsed time.
    """

    def __init__(
        self,
        content_store: ContentStoreInterface,
        content_index: ContentIndexInterface,
        scanner: BlobScanner,
        driver: CacheWarmingDriver,
        aggregator: UrlAggregator | None = None,
        *,
        job_id: int = BackgroundJobId.IMAGE_CACHE,
        reporter: PrecacheReporter | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._content_store = content_store
        self._content_index = content_index
        self._scanner = scanner
        self._driver = driver
        self._aggregator = aggregator or UrlAggregator()
        self._job_id = int(job_id)
        self._reporter = reporter or PrecacheReporter()
        self._clock = clock

    @property
    def job_id(self) -> int:
        return self._job_id

    async def _gather(
        self, token: CancellationToken | None
    ) -> tuple[AggregatedUrls, BlobScanResult]:
        direct = await self._content_store.get_all_item_image_urls()
        self._reporter.direct_urls_found(len(direct))

        item_ids = await self._content_index.get_all_content_item_ids()
        self._reporter.scanning_blobs(len(item_ids))

        scan = await self._scanner.scan(item_ids, token)
        self._reporter.blobs_scanned(scan)

        aggregated = self._aggregator.aggregate(direct, scan.urls)
        self._reporter.aggregated(aggregated)
        return aggregated, scan

    async def discover(self, token: CancellationToken | None = None) -> AggregatedUrls:
        """Run only the gathering stages and return the URLs that would be warmed.

        Raises
        ------
        ContentStoreError
            If stored content cannot be enumerated.
        """
        aggregated, _ = await self._gather(token)
        return aggregated

    async def run(
        self,
        token: CancellationToken | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> RunSummary:
        """Execute one image cache run.

        Never raises for pipeline failures: they end the run with status
        ``failed``. ``asyncio.CancelledError`` is reported as a cancelled
        run and then propagated to the host. Other ``BaseException``
        subclasses (``KeyboardInterrupt``, ``SystemExit``) are reported as a
        failed run and then propagated.

        Parameters
        ----------
        token : CancellationToken | None
            Cooperative cancellation flag shared with the host.
        progress_callback : ProgressCallback | None
            Optional ``(url, outcome)`` callback invoked after each fetch.

        Returns
        -------
        RunSummary
            Timing, counts and terminal status of the run.
        """
        start_time = datetime.now(timezone.utc)
        started = self._clock()
        self._reporter.started(self._job_id)

        total_urls = 0
        success_count = 0
        fail_count = 0
        status = RunStatus.FAILED
        failure: BaseException | None = None

        def on_outcome(url: str, outcome: FetchOutcome) -> None:
            nonlocal success_count, fail_count
            if isinstance(outcome, FetchSuccess):
                success_count += 1
            else:
                fail_count += 1
            self._reporter.url_outcome(url, outcome)
            if progress_callback is not None:
                progress_callback(url, outcome)

        try:
            aggregated, scan = await self._gather(token)
            total_urls = aggregated.unique_count

            result = await self._driver.run(aggregated.urls, token, on_outcome)
            if scan.cancelled or result.cancelled:
                status = RunStatus.CANCELLED
                self._reporter.cancelled()
            else:
                status = RunStatus.COMPLETED
        except asyncio.CancelledError:
            status = RunStatus.CANCELLED
            self._reporter.cancelled()
            raise
        except Exception as exc:
            failure = exc
        except BaseException as exc:
            # KeyboardInterrupt, SystemExit: reported as failed, then propagated
            failure = exc
            raise
        finally:
            summary = RunSummary(
                job_id=self._job_id,
                start_time=start_time,
                status=status,
                total_urls=total_urls,
                success_count=success_count,
                fail_count=fail_count,
                elapsed_ms=int((self._clock() - started) * 1000),
                error=(str(failure) or type(failure).__name__) if failure else None,
            )
            self._reporter.finished(summary, failure)

        return summary
