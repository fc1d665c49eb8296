"""
Enums for feedcache models.

Defines enumeration types used across the application for consistent
type safety and validation.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class DataSource(str, Enum):
    """Where a successfully fetched image came from."""

    MEMORY = "memory"
    DISK = "disk"
    NETWORK = "network"


class BlobScanStatus(str, Enum):
    """Outcome of scanning a single feed item's article blob."""

    READ = "read"
    MISSING = "missing"
    FAILED = "failed"


class RunStatus(str, Enum):
    """Terminal state of an image cache run."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class NetworkType(str, Enum):
    """Network constraint a background job is scheduled under."""

    ANY = "any"
    UNMETERED = "unmetered"


class BackgroundJobId(IntEnum):
    """Stable identifiers for background jobs."""

    IMAGE_CACHE = 6
