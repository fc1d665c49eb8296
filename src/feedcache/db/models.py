"""
Database models for feedcache.

This module contains the SQLAlchemy models for subscribed feeds and the
items they publish. Only the columns the image cache needs to read are
modelled in detail.
"""

from __future__ import annotations

import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class Feed(Base):
    """A subscribed RSS/Atom/JSON feed."""

    __tablename__ = "feeds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    url: Mapped[str] = mapped_column(String(2048), nullable=False, unique=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(2048))

    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    items: Mapped[list["FeedItem"]] = relationship(
        "FeedItem", back_populates="feed", cascade="all, delete-orphan"
    )


class FeedItem(Base):
    """A single article published by a feed.

    The article body itself is not stored here; it lives in a blob file
    named after the item id (see ``feedcache.services.blob_store``).
    """

    __tablename__ = "feed_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    feed_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("feeds.id", ondelete="CASCADE"), nullable=False
    )

    guid: Mapped[str] = mapped_column(String(2048), nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    link: Mapped[Optional[str]] = mapped_column(String(2048))

    # Direct image references
    thumbnail_url: Mapped[Optional[str]] = mapped_column(String(2048))
    enclosure_link: Mapped[Optional[str]] = mapped_column(String(2048))
    enclosure_type: Mapped[Optional[str]] = mapped_column(String(255))

    published_at: Mapped[Optional[datetime.datetime]] = mapped_column(
        DateTime(timezone=True)
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    feed: Mapped["Feed"] = relationship("Feed", back_populates="items")
