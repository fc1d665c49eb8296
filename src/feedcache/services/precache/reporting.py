"""
Log reporting for the image cache job.

Translates the structured results returned by the pre-warming stages into
log lines. Nothing here influences what the stages compute.
"""

from __future__ import annotations

import logging

from feedcache.models.enums import RunStatus
from feedcache.models.precache import (
    AggregatedUrls,
    BlobScanResult,
    FetchOutcome,
    FetchSuccess,
    RunSummary,
)

logger = logging.getLogger(__name__)


class PrecacheReporter:
    """Writes stage boundary events of an image cache run to a logger."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def started(self, job_id: int) -> None:
        self._log.info("Starting image pre-caching (job %d)", job_id)

    def direct_urls_found(self, count: int) -> None:
        self._log.info("Found %d thumbnail/enclosure URLs", count)

    def scanning_blobs(self, item_count: int) -> None:
        self._log.info("Scanning %d article blobs for images", item_count)

    def blobs_scanned(self, result: BlobScanResult) -> None:
        self._log.info(
            "Scanned %d article blobs: %d without blob, %d unreadable, %d image URLs",
            result.scanned,
            result.missing,
            result.failed,
            len(result.urls),
        )

    def aggregated(self, aggregated: AggregatedUrls) -> None:
        self._log.info(
            "Found %d thumbnails, %d from blobs = %d unique",
            aggregated.direct_count,
            aggregated.blob_count,
            aggregated.unique_count,
        )

    def url_outcome(self, url: str, outcome: FetchOutcome) -> None:
        if isinstance(outcome, FetchSuccess):
            self._log.debug("Cached: %s (source: %s)", url, outcome.source.value)
        else:
            self._log.warning("Failed: %s %s", url, outcome.reason)

    def cancelled(self) -> None:
        self._log.info("Image cache job cancelled")

    def finished(
        self, summary: RunSummary, error: BaseException | None = None
    ) -> None:
        """Log the run summary; called exactly once per run."""
        if summary.status is RunStatus.FAILED:
            self._log.error(
                "Error during image pre-caching after %dms: %s "
                "(%d ok, %d failed, %d unique URLs)",
                summary.elapsed_ms,
                summary.error,
                summary.success_count,
                summary.fail_count,
                summary.total_urls,
                exc_info=error,
            )
            return
        self._log.info(
            "%s: %d ok, %d failed of %d unique URLs, %dms elapsed",
            "Completed" if summary.status is RunStatus.COMPLETED else "Cancelled",
            summary.success_count,
            summary.fail_count,
            summary.total_urls,
            summary.elapsed_ms,
        )
