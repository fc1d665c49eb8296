"""
Services module for feedcache.

Contains the image cache, article blob storage, content store adapters
and the image cache pre-warming pipeline.
"""

from __future__ import annotations

from feedcache.services.blob_store import FileBlobStore
from feedcache.services.content_store import DatabaseContentStore
from feedcache.services.image_cache import (
    CacheStats,
    ImageCacheConfig,
    ImageCacheService,
)

__all__: list[str] = [
    "CacheStats",
    "DatabaseContentStore",
    "FileBlobStore",
    "ImageCacheConfig",
    "ImageCacheService",
]
