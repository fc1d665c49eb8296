"""
Feed item repository.

Read-only queries the image cache job runs over stored feed items, plus
item creation for the code that stores fetched feeds.
"""

from __future__ import annotations

from typing import List, Set

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from feedcache.db.models import FeedItem as FeedItemDB
from feedcache.models.feed_item import FeedItemCreate

# Enclosures with this MIME prefix are treated as images
IMAGE_ENCLOSURE_PREFIX = "image/"


class FeedItemRepository:
    """Repository for stored feed items."""

    def __init__(self) -> None:
        self.model = FeedItemDB

    async def create(
        self, session: AsyncSession, *, obj_in: FeedItemCreate
    ) -> FeedItemDB:
        """Create a new feed item in the database."""
        db_obj = self.model(**obj_in.model_dump())
        session.add(db_obj)
        await session.flush()
        await session.refresh(db_obj)
        return db_obj

    async def get_all_feed_item_ids(self, session: AsyncSession) -> List[int]:
        """
        List the ids of every stored feed item.

        Parameters
        ----------
        session : AsyncSession
            Database session

        Returns
        -------
        List[int]
            Feed item ids in ascending order
        """
        result = await session.execute(
            select(FeedItemDB.id).order_by(FeedItemDB.id)
        )
        return list(result.scalars().all())

    async def get_all_item_image_urls(self, session: AsyncSession) -> Set[str]:
        """
        Collect every image URL referenced directly by a feed item.

        Direct references are the item thumbnail and, when its MIME type
        is an image type (compared case-insensitively), the item enclosure.

        Parameters
        ----------
        session : AsyncSession
            Database session

        Returns
        -------
        Set[str]
            Distinct thumbnail and image enclosure URLs
        """
        thumbnails = await session.execute(
            select(FeedItemDB.thumbnail_url)
            .where(FeedItemDB.thumbnail_url.is_not(None))
            .distinct()
        )
        enclosures = await session.execute(
            select(FeedItemDB.enclosure_link)
            .where(
                FeedItemDB.enclosure_link.is_not(None),
                func.lower(FeedItemDB.enclosure_type).startswith(
                    IMAGE_ENCLOSURE_PREFIX
                ),
            )
            .distinct()
        )

        urls: Set[str] = set()
        for url in [*thumbnails.scalars().all(), *enclosures.scalars().all()]:
            if url:
                urls.add(url)
        return urls
