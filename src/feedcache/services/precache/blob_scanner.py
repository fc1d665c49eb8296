"""
Article blob scanning for embedded images.

Loads the stored markup of each feed item and collects the image URLs it
references. A missing or unreadable blob only costs that item its URLs;
it never stops the scan.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import List

from feedcache.models.enums import BlobScanStatus
from feedcache.models.precache import BlobScanOutcome, BlobScanResult, ContentItemId
from feedcache.services.interfaces import BlobStoreInterface
from feedcache.services.precache.cancellation import CancellationToken
from feedcache.services.precache.url_extractor import find_all_image_urls_in_html

logger = logging.getLogger(__name__)

UrlExtractor = Callable[[str], List[str]]


class BlobScanner:
    """Collects image URLs from stored article blobs.

    Parameters
    ----------
    blob_store : BlobStoreInterface
        Read-only access to article blobs.
    extractor : UrlExtractor
        Markup-to-URLs function (defaults to ``find_all_image_urls_in_html``).
    """

    def __init__(
        self,
        blob_store: BlobStoreInterface,
        extractor: UrlExtractor = find_all_image_urls_in_html,
    ) -> None:
        self._blob_store = blob_store
        self._extractor = extractor

    async def scan_item(self, item_id: ContentItemId) -> BlobScanOutcome:
        """Scan the blob of a single item.

        Any failure to locate, read, decode or parse the blob is returned
        as a ``failed`` outcome; no exception escapes.
        """
        try:
            if not await asyncio.to_thread(self._blob_store.exists, item_id):
                return BlobScanOutcome(item_id=item_id, status=BlobScanStatus.MISSING)
            html = await asyncio.to_thread(self._blob_store.read_text, item_id)
            urls = frozenset(self._extractor(html))
        except Exception as exc:  # noqa: BLE001 - per-item failures are skipped
            return BlobScanOutcome(
                item_id=item_id,
                status=BlobScanStatus.FAILED,
                reason=str(exc) or type(exc).__name__,
            )
        return BlobScanOutcome(item_id=item_id, status=BlobScanStatus.READ, urls=urls)

    async def scan(
        self,
        item_ids: Iterable[ContentItemId],
        token: CancellationToken | None = None,
    ) -> BlobScanResult:
        """Scan the blobs of ``item_ids`` and union their image URLs.

        Cancellation is checked before each blob read; when cancelled the
        URLs gathered so far are returned with ``cancelled=True``.
        """
        urls: set[str] = set()
        scanned = 0
        missing = 0
        failed = 0
        cancelled = False

        for item_id in item_ids:
            if token is not None and token.cancelled:
                cancelled = True
                break

            outcome = await self.scan_item(item_id)
            scanned += 1
            if outcome.status is BlobScanStatus.MISSING:
                missing += 1
            elif outcome.status is BlobScanStatus.FAILED:
                failed += 1
                logger.debug(
                    "Skipping blob for item %s: %s", outcome.item_id, outcome.reason
                )
            else:
                urls.update(outcome.urls)

        return BlobScanResult(
            urls=frozenset(urls),
            scanned=scanned,
            missing=missing,
            failed=failed,
            cancelled=cancelled,
        )
