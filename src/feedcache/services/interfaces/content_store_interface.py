"""
Abstract Base Classes for reading stored feed content.

These interfaces define what the image cache job needs from the content
database, enabling:
- Testability via in-memory fakes
- Alternative storage backends
- Clear API boundaries for type checking
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Set

from ...models.precache import ContentItemId


class ContentStoreInterface(ABC):
    """
    Source of image URLs referenced directly by stored items.

    Examples
    --------
    >>> class FakeContentStore(ContentStoreInterface):
    ...     async def get_all_item_image_urls(self) -> Set[str]:
    ...         return {"https://example.com/1.jpg"}
    """

    @abstractmethod
    async def get_all_item_image_urls(self) -> Set[str]:
        """
        Collect thumbnail and enclosure image URLs across all stored items.

        Returns
        -------
        Set[str]
            Distinct image URLs.

        Raises
        ------
        ContentStoreError
            If the store cannot be read.
        """
        pass


class ContentIndexInterface(ABC):
    """Index of stored content items whose article blobs may hold images."""

    @abstractmethod
    async def get_all_content_item_ids(self) -> List[ContentItemId]:
        """
        List the identifiers of every stored content item.

        Returns
        -------
        List[ContentItemId]
            Item identifiers; each may or may not have an article blob.

        Raises
        ------
        ContentStoreError
            If the index cannot be read.
        """
        pass
