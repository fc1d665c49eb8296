"""
Filesystem storage for article markup blobs.

Each feed item's article HTML is stored gzip-compressed as
``{articles_dir}/{item_id}.txt.gz``.
"""

from __future__ import annotations

import gzip
import logging
import zlib
from pathlib import Path
from uuid import uuid4

from feedcache.exceptions import BlobReadError
from feedcache.models.precache import ContentItemId
from feedcache.services.interfaces import BlobStoreInterface

logger = logging.getLogger(__name__)

_BLOB_SUFFIX = ".txt.gz"


class FileBlobStore(BlobStoreInterface):
    """Gzip-compressed text blobs keyed by feed item id.

    Parameters
    ----------
    articles_dir : Path
        Directory holding one blob file per feed item.
    """

    def __init__(self, articles_dir: Path) -> None:
        self._articles_dir = articles_dir

    @property
    def articles_dir(self) -> Path:
        return self._articles_dir

    def blob_file(self, item_id: ContentItemId) -> Path:
        """Path of the blob for ``item_id`` (whether or not it exists)."""
        return self._articles_dir / f"{item_id}{_BLOB_SUFFIX}"

    def exists(self, item_id: ContentItemId) -> bool:
        return self.blob_file(item_id).is_file()

    def read_text(self, item_id: ContentItemId) -> str:
        """Decompress and decode the blob for ``item_id``.

        Raises
        ------
        BlobReadError
            If the file is missing, unreadable, not valid gzip, or not
            valid UTF-8.
        """
        path = self.blob_file(item_id)
        try:
            with gzip.open(path, "rt", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError as exc:
            raise BlobReadError(
                f"No blob stored for item {item_id}",
                item_id=item_id,
                original_error=exc,
            ) from exc
        except (OSError, EOFError, zlib.error, UnicodeDecodeError) as exc:
            raise BlobReadError(
                f"Failed to read blob for item {item_id}: {exc}",
                item_id=item_id,
                original_error=exc,
            ) from exc

    def write_text(self, item_id: ContentItemId, text: str) -> Path:
        """Store ``text`` as the blob for ``item_id``, replacing any previous one.

        The blob is written to a temporary file and renamed into place so
        readers never observe a partial blob.
        """
        path = self.blob_file(item_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f".{path.name}.tmp.{uuid4()}")
        try:
            with gzip.open(tmp_path, "wt", encoding="utf-8") as f:
                f.write(text)
            tmp_path.replace(path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug("Stored article blob for item %s at %s", item_id, path)
        return path
