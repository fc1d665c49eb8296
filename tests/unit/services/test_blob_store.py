"""
Tests for FileBlobStore.
"""

from __future__ import annotations

import gzip

import pytest

from feedcache.exceptions import BlobReadError
from feedcache.services.blob_store import FileBlobStore


class TestFileBlobStore:
    def test_blob_file_naming(self, blob_store: FileBlobStore) -> None:
        assert blob_store.blob_file(12).name == "12.txt.gz"
        assert blob_store.blob_file(12).parent == blob_store.articles_dir

    def test_write_then_read(self, blob_store: FileBlobStore) -> None:
        html = "<p>Café <img src='https://a/1.png'></p>"

        path = blob_store.write_text(3, html)

        assert path == blob_store.blob_file(3)
        assert blob_store.exists(3)
        assert blob_store.read_text(3) == html
        assert gzip.decompress(path.read_bytes()).decode("utf-8") == html

    def test_write_replaces_previous_blob(self, blob_store: FileBlobStore) -> None:
        blob_store.write_text(3, "old")
        blob_store.write_text(3, "new")

        assert blob_store.read_text(3) == "new"
        assert [p.name for p in blob_store.articles_dir.iterdir()] == ["3.txt.gz"]

    def test_missing_blob(self, blob_store: FileBlobStore) -> None:
        assert blob_store.exists(99) is False

        with pytest.raises(BlobReadError) as exc_info:
            blob_store.read_text(99)

        assert exc_info.value.item_id == 99
        assert isinstance(exc_info.value.original_error, FileNotFoundError)

    def test_corrupt_blob(self, blob_store: FileBlobStore) -> None:
        blob_store.articles_dir.mkdir(parents=True)
        blob_store.blob_file(5).write_bytes(b"\x1f\x8b truncated")

        with pytest.raises(BlobReadError) as exc_info:
            blob_store.read_text(5)

        assert exc_info.value.item_id == 5
        assert exc_info.value.original_error is not None

    def test_invalid_utf8(self, blob_store: FileBlobStore) -> None:
        blob_store.articles_dir.mkdir(parents=True)
        blob_store.blob_file(6).write_bytes(gzip.compress(b"\xc3\x28"))

        with pytest.raises(BlobReadError) as exc_info:
            blob_store.read_text(6)

        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)
