"""
Feed item models.

Defines Pydantic models for creating stored feed items.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FeedItemBase(BaseModel):
    """Base model for feed item data."""

    feed_id: int = Field(..., ge=1, description="Owning feed id")
    guid: str = Field(..., min_length=1, max_length=2048, description="Item GUID")
    title: str = Field(default="", description="Item title")
    link: Optional[str] = Field(default=None, max_length=2048)
    thumbnail_url: Optional[str] = Field(
        default=None, max_length=2048, description="Thumbnail image URL"
    )
    enclosure_link: Optional[str] = Field(
        default=None, max_length=2048, description="Enclosure URL"
    )
    enclosure_type: Optional[str] = Field(
        default=None, max_length=255, description="Enclosure MIME type"
    )
    published_at: Optional[datetime] = Field(default=None)

    @field_validator("enclosure_type")
    @classmethod
    def normalize_enclosure_type(cls, v: Optional[str]) -> Optional[str]:
        """Lower-case MIME types so prefix matching is reliable."""
        if v is None:
            return v
        return v.strip().lower() or None

    model_config = ConfigDict(
        validate_assignment=True,
    )


class FeedItemCreate(FeedItemBase):
    """Model for creating feed items."""

    pass
