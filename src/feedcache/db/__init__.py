"""
Database layer for feedcache.
"""

from __future__ import annotations

from feedcache.db.models import Base, Feed, FeedItem

__all__ = ["Base", "Feed", "FeedItem"]
