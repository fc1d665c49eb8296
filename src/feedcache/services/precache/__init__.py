"""
Image cache pre-warming pipeline.

Stages, leaf first: URL extraction from article markup, article blob
scanning, URL aggregation, and the cache-warming driver, tied together by
``ImageCacheJob``.
"""

from __future__ import annotations

from feedcache.services.precache.blob_scanner import BlobScanner
from feedcache.services.precache.cancellation import CancellationToken
from feedcache.services.precache.driver import CacheWarmingDriver
from feedcache.services.precache.job import ImageCacheJob
from feedcache.services.precache.reporting import PrecacheReporter
from feedcache.services.precache.scheduling import (
    build_image_cache_job_request,
    schedule_image_cache_job,
)
from feedcache.services.precache.url_aggregator import UrlAggregator
from feedcache.services.precache.url_extractor import find_all_image_urls_in_html

__all__ = [
    "BlobScanner",
    "CacheWarmingDriver",
    "CancellationToken",
    "ImageCacheJob",
    "PrecacheReporter",
    "UrlAggregator",
    "build_image_cache_job_request",
    "find_all_image_urls_in_html",
    "schedule_image_cache_job",
]
