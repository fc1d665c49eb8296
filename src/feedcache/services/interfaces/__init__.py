"""
Service interfaces (ABCs) for the feedcache application.

These abstract base classes define contracts for service implementations,
enabling dependency injection, testing with mocks, and swappable implementations.
"""

from .blob_store_interface import BlobStoreInterface
from .content_store_interface import ContentIndexInterface, ContentStoreInterface
from .image_fetcher_interface import ImageFetcherInterface
from .job_scheduler_interface import JobSchedulerInterface

__all__ = [
    "BlobStoreInterface",
    "ContentIndexInterface",
    "ContentStoreInterface",
    "ImageFetcherInterface",
    "JobSchedulerInterface",
]
