"""
Repository layer for data access patterns.

Repositories take an ``AsyncSession`` per call and keep SQL out of the
services that consume stored content.
"""

from .feed_item_repository import FeedItemRepository

__all__ = [
    "FeedItemRepository",
]
