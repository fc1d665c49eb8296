"""
Database-backed content store for the image cache job.

Adapts ``FeedItemRepository`` (which works per session) to the
session-less content interfaces the pre-warming pipeline consumes.
"""

from __future__ import annotations

import logging
from typing import List, Set

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from feedcache.exceptions import ContentStoreError
from feedcache.models.precache import ContentItemId
from feedcache.repositories.feed_item_repository import FeedItemRepository
from feedcache.services.interfaces import (
    ContentIndexInterface,
    ContentStoreInterface,
)

logger = logging.getLogger(__name__)


class DatabaseContentStore(ContentStoreInterface, ContentIndexInterface):
    """Reads image URLs and item ids from the feed database.

    Each call opens its own short-lived, read-only session.

    Parameters
    ----------
    session_factory : async_sessionmaker[AsyncSession]
        Factory producing database sessions.
    repository : FeedItemRepository | None
        Repository to query; a new one is created when omitted.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        repository: FeedItemRepository | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._repository = repository or FeedItemRepository()

    async def get_all_item_image_urls(self) -> Set[str]:
        try:
            async with self._session_factory() as session:
                return await self._repository.get_all_item_image_urls(session)
        except SQLAlchemyError as exc:
            raise ContentStoreError(
                f"Failed to load item image URLs: {exc}",
                operation="get_all_item_image_urls",
                original_error=exc,
            ) from exc

    async def get_all_content_item_ids(self) -> List[ContentItemId]:
        try:
            async with self._session_factory() as session:
                ids = await self._repository.get_all_feed_item_ids(session)
        except SQLAlchemyError as exc:
            raise ContentStoreError(
                f"Failed to list feed item ids: {exc}",
                operation="get_all_content_item_ids",
                original_error=exc,
            ) from exc
        return list(ids)
