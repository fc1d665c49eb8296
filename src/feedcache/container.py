"""
Dependency Injection Container for feedcache.

This module wires the production collaborators of the image cache job.
Every component of the pre-warming pipeline takes its collaborators as
constructor arguments; the container is the one place that knows which
concrete implementations are used outside of tests.

Usage
-----
    >>> from feedcache.container import container
    >>> job = container.create_image_cache_job()
    >>> summary = await job.run(token)

Design Principles
-----------------
- Repository and pipeline factories return new instances each call (transient)
- Shared services are cached via @cached_property (lazy initialization)
- Container can be reset for testing isolation
"""

from __future__ import annotations

from functools import cached_property

from feedcache.config.database import DatabaseManager, db_manager
from feedcache.config.settings import Settings, settings
from feedcache.repositories import FeedItemRepository
from feedcache.services.blob_store import FileBlobStore
from feedcache.services.content_store import DatabaseContentStore
from feedcache.services.image_cache import ImageCacheConfig, ImageCacheService
from feedcache.services.precache import (
    BlobScanner,
    CacheWarmingDriver,
    ImageCacheJob,
    UrlAggregator,
)


class Container:
    """
    Dependency injection container for feedcache.

    Parameters
    ----------
    app_settings : Settings | None
        Settings to build from; the global settings when omitted.
    database : DatabaseManager | None
        Database manager to use; the global one when omitted.

    Examples
    --------
        >>> container = Container()
        >>> job1 = container.create_image_cache_job()
        >>> job2 = container.create_image_cache_job()
        >>> job1 is job2
        False
        >>> container.image_cache_service is container.image_cache_service
        True
    """

    def __init__(
        self,
        app_settings: Settings | None = None,
        database: DatabaseManager | None = None,
    ) -> None:
        self._settings = app_settings or settings
        self._database = database or db_manager

    @property
    def settings(self) -> Settings:
        return self._settings

    # -------------------------------------------------------------------------
    # Transient factories
    # -------------------------------------------------------------------------

    def create_feed_item_repository(self) -> FeedItemRepository:
        """Create a new FeedItemRepository instance."""
        return FeedItemRepository()

    def create_content_store(self) -> DatabaseContentStore:
        """Create a content store reading from the configured database."""
        return DatabaseContentStore(
            session_factory=self._database.get_session_factory(),
            repository=self.create_feed_item_repository(),
        )

    def create_blob_store(self) -> FileBlobStore:
        """Create a blob store over the configured articles directory."""
        return FileBlobStore(self._settings.articles_dir)

    def create_image_cache_job(self) -> ImageCacheJob:
        """
        Create a fully wired ImageCacheJob.

        The same database content store serves as both the content store
        and the content index.

        Returns
        -------
        ImageCacheJob
            A new job instance ready to run.
        """
        content_store = self.create_content_store()
        return ImageCacheJob(
            content_store=content_store,
            content_index=content_store,
            scanner=BlobScanner(self.create_blob_store()),
            driver=CacheWarmingDriver(self.image_cache_service),
            aggregator=UrlAggregator(),
        )

    # -------------------------------------------------------------------------
    # Singleton services
    # -------------------------------------------------------------------------

    @cached_property
    def image_cache_service(self) -> ImageCacheService:
        """
        Get the shared ImageCacheService.

        Cached so that every consumer shares one memory layer and one
        fetch semaphore.
        """
        config = ImageCacheConfig(
            images_dir=self._settings.images_dir,
            timeout=self._settings.fetch_timeout,
            max_image_bytes=self._settings.max_image_bytes,
            memory_cache_entries=self._settings.memory_cache_entries,
            max_concurrent_fetches=self._settings.max_concurrent_fetches,
            user_agent=self._settings.user_agent,
        )
        return ImageCacheService(config=config)

    def reset(self) -> None:
        """
        Reset the container by clearing all cached singleton instances.

        This method is primarily for testing purposes, allowing tests to
        inject mocks and then restore the container to a clean state.
        """
        for prop in ["image_cache_service"]:
            self.__dict__.pop(prop, None)


# Global container instance
container = Container()
