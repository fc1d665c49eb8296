"""
Merging of direct and blob-discovered image URLs.
"""

from __future__ import annotations

from collections.abc import Iterable

from feedcache.models.precache import AggregatedUrls


class UrlAggregator:
    """Builds the deduplicated set of URLs to warm.

    URLs compare by exact string value; nothing is normalized.
    """

    def aggregate(
        self,
        direct: Iterable[str],
        from_blobs: Iterable[str],
    ) -> AggregatedUrls:
        """Union ``direct`` and ``from_blobs``, keeping the input counts."""
        direct_set = frozenset(direct)
        blob_set = frozenset(from_blobs)
        return AggregatedUrls(
            urls=direct_set | blob_set,
            direct_count=len(direct_set),
            blob_count=len(blob_set),
        )
