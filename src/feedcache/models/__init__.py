"""
Data models module for feedcache.

Defines Pydantic models for stored feed items and for the results of the
image cache pre-warming pipeline.
"""

from __future__ import annotations

from .enums import BackgroundJobId, BlobScanStatus, DataSource, NetworkType, RunStatus
from .feed_item import FeedItemBase, FeedItemCreate
from .precache import (
    AggregatedUrls,
    BlobScanOutcome,
    BlobScanResult,
    ContentItemId,
    DriverResult,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    JobRequest,
    RunSummary,
)

__all__ = [
    # Enums
    "BackgroundJobId",
    "BlobScanStatus",
    "DataSource",
    "NetworkType",
    "RunStatus",
    # Feed items
    "FeedItemBase",
    "FeedItemCreate",
    # Pre-warming results
    "AggregatedUrls",
    "BlobScanOutcome",
    "BlobScanResult",
    "ContentItemId",
    "DriverResult",
    "FetchFailure",
    "FetchOutcome",
    "FetchSuccess",
    "JobRequest",
    "RunSummary",
]
