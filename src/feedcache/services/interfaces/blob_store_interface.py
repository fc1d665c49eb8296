"""
Abstract Base Class for article blob storage.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ...models.precache import ContentItemId


class BlobStoreInterface(ABC):
    """
    Read access to the article markup stored for each content item.

    Blobs are owned by the store; consumers only read them.
    """

    @abstractmethod
    def exists(self, item_id: ContentItemId) -> bool:
        """Return whether a blob is stored for ``item_id``."""
        pass

    @abstractmethod
    def read_text(self, item_id: ContentItemId) -> str:
        """
        Read the blob stored for ``item_id`` as text.

        Raises
        ------
        BlobReadError
            If the blob is absent, unreadable or cannot be decoded.
        """
        pass
