"""
Result models for image cache pre-warming.

Every stage of the pre-warming pipeline returns one of these models
instead of logging directly, so the stages stay independently testable
and the reporting layer decides how outcomes are presented.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import BackgroundJobId, BlobScanStatus, DataSource, NetworkType, RunStatus

ContentItemId = Union[int, str]


class FetchSuccess(BaseModel):
    """An image that is now present in the requested cache layers."""

    kind: Literal["success"] = "success"
    url: str
    source: DataSource = Field(..., description="Layer the image was served from")
    size_bytes: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class FetchFailure(BaseModel):
    """An image that could not be fetched or cached."""

    kind: Literal["failure"] = "failure"
    url: str
    reason: str = Field(..., description="Human-readable failure reason")

    model_config = ConfigDict(frozen=True)


FetchOutcome = Union[FetchSuccess, FetchFailure]


class BlobScanOutcome(BaseModel):
    """Result of scanning one feed item's article blob."""

    item_id: ContentItemId
    status: BlobScanStatus
    urls: frozenset[str] = Field(default_factory=frozenset)
    reason: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class BlobScanResult(BaseModel):
    """Union of image URLs found across all scanned article blobs."""

    urls: frozenset[str] = Field(default_factory=frozenset)
    scanned: int = 0
    missing: int = 0
    failed: int = 0
    cancelled: bool = False


class AggregatedUrls(BaseModel):
    """Deduplicated image URL set with the counts it was built from."""

    urls: frozenset[str] = Field(default_factory=frozenset)
    direct_count: int = Field(default=0, ge=0)
    blob_count: int = Field(default=0, ge=0)

    @property
    def unique_count(self) -> int:
        """Number of distinct URLs after merging."""
        return len(self.urls)


class DriverResult(BaseModel):
    """Tally of a cache-warming pass over a URL set."""

    attempted: int = 0
    success_count: int = 0
    fail_count: int = 0
    cancelled: bool = False


class RunSummary(BaseModel):
    """Outcome of one image cache job execution.

    Built once per run and only used for reporting; never persisted.
    """

    job_id: int
    start_time: datetime
    status: RunStatus
    total_urls: int = 0
    success_count: int = 0
    fail_count: int = 0
    elapsed_ms: int = 0
    error: Optional[str] = None


class JobRequest(BaseModel):
    """Request handed to a job scheduler to run a background job."""

    job_id: BackgroundJobId
    network_type: NetworkType

    model_config = ConfigDict(frozen=True)
