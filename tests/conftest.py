"""
Pytest configuration and fixtures for feedcache tests.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Iterable

import pytest

from feedcache.config.database import DatabaseManager
from feedcache.config.settings import Settings
from feedcache.models.enums import DataSource
from feedcache.models.precache import FetchFailure, FetchOutcome, FetchSuccess
from feedcache.services.blob_store import FileBlobStore
from feedcache.services.interfaces import ImageFetcherInterface


class FakeImageFetcher(ImageFetcherInterface):
    """Records every fetch and fails the URLs it was told to fail."""

    def __init__(
        self,
        failing: Iterable[str] = (),
        cached: Iterable[str] = (),
    ) -> None:
        self.failing = set(failing)
        self.cached = set(cached)
        self.calls: list[tuple[str, bool, bool]] = []

    async def fetch(
        self,
        url: str,
        *,
        disk_cache: bool = True,
        memory_cache: bool = True,
    ) -> FetchOutcome:
        self.calls.append((url, disk_cache, memory_cache))
        if url in self.failing:
            return FetchFailure(url=url, reason="status_404")
        source = DataSource.DISK if url in self.cached else DataSource.NETWORK
        return FetchSuccess(url=url, source=source, size_bytes=100)

    @property
    def fetched_urls(self) -> list[str]:
        return [url for url, _, _ in self.calls]


@pytest.fixture
def mock_settings(tmp_path: Path) -> Settings:
    """Settings pointing every directory into a temporary location."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        cache_dir=tmp_path / "cache",
        articles_dir=tmp_path / "data" / "articles",
        logs_dir=tmp_path / "logs",
        fetch_timeout=2.0,
    )


@pytest.fixture
def blob_store(tmp_path: Path) -> FileBlobStore:
    """Blob store over an empty temporary articles directory."""
    return FileBlobStore(tmp_path / "articles")


@pytest.fixture
def fake_fetcher() -> FakeImageFetcher:
    return FakeImageFetcher()


@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[DatabaseManager, None]:
    """File-backed SQLite database with all tables created."""
    manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'feeds.db'}")
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
def fetcher_factory() -> type[FakeImageFetcher]:
    """Build a ``FakeImageFetcher`` with chosen failing or cached URLs."""
    return FakeImageFetcher
