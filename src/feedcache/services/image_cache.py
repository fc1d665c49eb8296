"""
Image fetch-and-cache service for feed images.

Provides a layered image cache: an optional in-memory LRU layer in front
of a persistent on-disk cache, with images fetched over HTTP on a miss.
Disk entries are written atomically and image payloads are validated
via magic bytes before they are cached.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from collections import OrderedDict
from datetime import datetime
from pathlib import Path
from uuid import uuid4

import httpx
from pydantic import BaseModel

from feedcache.models.enums import DataSource
from feedcache.models.precache import FetchFailure, FetchOutcome, FetchSuccess
from feedcache.services.interfaces import ImageFetcherInterface

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# On-disk layout: {images_dir}/{sha256[:2]}/{sha256}.img
# ---------------------------------------------------------------------------
_CACHE_SUFFIX = ".img"


# ╔══════════════════════════════════════════════════════════════════════╗
# ║  Pydantic V2 models                                                ║
# ╚══════════════════════════════════════════════════════════════════════╝


class ImageCacheConfig(BaseModel):
    """Configuration for the image cache.

    Attributes
    ----------
    images_dir : Path
        Root directory of the persistent image cache.
    timeout : float
        HTTP timeout in seconds for a single image fetch.
    max_image_bytes : int
        Largest image body that will be cached.
    memory_cache_entries : int
        Capacity of the in-memory LRU layer.
    max_concurrent_fetches : int
        Maximum concurrent HTTP fetches (semaphore limit).
    user_agent : str
        ``User-Agent`` header sent with image requests.
    """

    images_dir: Path
    timeout: float = 30.0
    max_image_bytes: int = 10 * 1024 * 1024
    memory_cache_entries: int = 64
    max_concurrent_fetches: int = 4
    user_agent: str = "feedcache"


class CacheStats(BaseModel):
    """Statistics about the image cache contents.

    Attributes
    ----------
    image_count : int
        Number of cached images on disk.
    total_size_bytes : int
        Total disk usage for all cached images.
    oldest_file : datetime | None
        Modification time of the oldest cached file.
    newest_file : datetime | None
        Modification time of the newest cached file.
    """

    image_count: int
    total_size_bytes: int
    oldest_file: datetime | None
    newest_file: datetime | None


# ╔══════════════════════════════════════════════════════════════════════╗
# ║  ImageCacheService                                                  ║
# ╚══════════════════════════════════════════════════════════════════════╝


class ImageCacheService(ImageFetcherInterface):
    """Fetches feed images through memory and disk cache layers.

    Disk writes are atomic (temp file + rename), so concurrent writers
    for the same URL never leave a half-written entry behind.

    Parameters
    ----------
    config : ImageCacheConfig
        Cache configuration including directory path and limits.
    """

    def __init__(self, config: ImageCacheConfig) -> None:
        self._config = config
        self._semaphore = asyncio.Semaphore(config.max_concurrent_fetches)
        self._memory: OrderedDict[str, bytes] = OrderedDict()
        self._disk_available = True
        self.ensure_directories()

    @property
    def config(self) -> ImageCacheConfig:
        return self._config

    # ------------------------------------------------------------------
    # Directory management
    # ------------------------------------------------------------------

    def ensure_directories(self) -> None:
        """Create the cache directory if it does not exist.

        If directory creation fails the disk layer is disabled and every
        disk-cached fetch fails with ``disk_cache_unavailable``.
        """
        try:
            self._config.images_dir.mkdir(parents=True, exist_ok=True)
            logger.debug("Image cache directory ready: %s", self._config.images_dir)
        except OSError:
            logger.error(
                "Failed to create image cache directory %s; disk cache disabled",
                self._config.images_dir,
                exc_info=True,
            )
            self._disk_available = False

    # ------------------------------------------------------------------
    # Image type detection via magic bytes
    # ------------------------------------------------------------------

    @staticmethod
    def _detect_image_type(data: bytes) -> str | None:
        """Detect an image MIME type from the leading bytes of ``data``.

        Returns
        -------
        str | None
            MIME type, or ``None`` when the payload is not a recognised
            image format.
        """
        header = data[:32]
        if header[:3] == b"\xff\xd8\xff":
            return "image/jpeg"
        if header[:8] == b"\x89PNG\r\n\x1a\n":
            return "image/png"
        if header[:6] in (b"GIF87a", b"GIF89a"):
            return "image/gif"
        if header[:4] == b"RIFF" and header[8:12] == b"WEBP":
            return "image/webp"
        if header[:2] == b"BM":
            return "image/bmp"
        if header[:4] == b"\x00\x00\x01\x00":
            return "image/x-icon"
        if header[4:8] == b"ftyp" and header[8:12] in (b"avif", b"avis"):
            return "image/avif"
        if header[4:8] == b"ftyp" and header[8:12] in (b"heic", b"heix", b"mif1"):
            return "image/heic"
        text = data[:512].lstrip().lower()
        if text.startswith(b"<svg") or (
            text.startswith(b"<?xml") and b"<svg" in text
        ):
            return "image/svg+xml"
        return None

    # ------------------------------------------------------------------
    # Cache state management
    # ------------------------------------------------------------------

    def cache_path_for(self, url: str) -> Path:
        """Compute the on-disk cache path for ``url``.

        Paths use two-character prefix sharding of the SHA-256 of the URL:
        ``{images_dir}/{digest[:2]}/{digest}.img``.
        """
        digest = hashlib.sha256(url.encode("utf-8")).hexdigest()
        return self._config.images_dir / digest[:2] / f"{digest}{_CACHE_SUFFIX}"

    def is_cached(self, url: str) -> bool:
        """Return whether a valid disk cache entry exists for ``url``."""
        return self._read_disk(self.cache_path_for(url)) is not None

    @staticmethod
    def _read_disk(cache_path: Path) -> bytes | None:
        """Read a disk cache entry.

        Empty entries are considered corrupted and are deleted.
        """
        if not cache_path.is_file():
            return None
        try:
            body = cache_path.read_bytes()
        except OSError:
            logger.warning("Unreadable cache file: %s", cache_path, exc_info=True)
            return None
        if not body:
            logger.warning("Corrupted cache file (empty), deleting: %s", cache_path)
            cache_path.unlink(missing_ok=True)
            return None
        return body

    @staticmethod
    def _write_disk(cache_path: Path, body: bytes) -> bool:
        """Write ``body`` to ``cache_path`` atomically."""
        tmp_path = cache_path.with_name(f".{cache_path.stem}.tmp.{uuid4()}")
        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(body)
            tmp_path.replace(cache_path)
        except OSError:
            logger.error(
                "Disk error writing cached image to %s", cache_path, exc_info=True
            )
            tmp_path.unlink(missing_ok=True)
            return False
        return True

    def _remember(self, url: str, body: bytes) -> None:
        """Store ``body`` in the in-memory LRU layer."""
        if self._config.memory_cache_entries <= 0:
            return
        self._memory[url] = body
        self._memory.move_to_end(url)
        while len(self._memory) > self._config.memory_cache_entries:
            self._memory.popitem(last=False)

    def _recall(self, url: str) -> bytes | None:
        body = self._memory.get(url)
        if body is not None:
            self._memory.move_to_end(url)
        return body

    # ------------------------------------------------------------------
    # Network fetch
    # ------------------------------------------------------------------

    async def _download(self, url: str) -> tuple[bytes | None, str | None]:
        """Fetch and validate an image from ``url``.

        Returns
        -------
        tuple[bytes | None, str | None]
            ``(body, None)`` on success, or ``(None, reason)`` on failure.
        """
        async with self._semaphore:
            try:
                async with httpx.AsyncClient(
                    follow_redirects=True,
                    timeout=self._config.timeout,
                    headers={"User-Agent": self._config.user_agent},
                ) as client:
                    response = await client.get(url)
            except httpx.TimeoutException:
                return None, "timeout"
            except httpx.InvalidURL as exc:
                return None, f"invalid_url: {exc}"
            except httpx.HTTPError as exc:
                return None, f"http_error: {exc}"

        status_code = response.status_code
        if status_code != 200:
            return None, f"status_{status_code}"

        body = response.content
        if not body:
            return None, "empty_body"

        if len(body) > self._config.max_image_bytes:
            return None, f"too_large_{len(body)}"

        content_type = response.headers.get("content-type", "")
        if self._detect_image_type(body) is None:
            if content_type and "image/" not in content_type:
                return None, f"invalid_content_type: {content_type}"
            return None, "decode_error"

        return body, None

    # ------------------------------------------------------------------
    # Public API: fetch
    # ------------------------------------------------------------------

    async def fetch(
        self,
        url: str,
        *,
        disk_cache: bool = True,
        memory_cache: bool = True,
    ) -> FetchOutcome:
        """Fetch ``url`` through the enabled cache layers.

        Flow:
        1. Memory layer (if enabled) -> success from ``memory``.
        2. Disk layer (if enabled) -> success from ``disk``.
        3. Network fetch and validation.
        4. Write through to disk (if enabled); a write failure is a
           failure of the whole fetch.
        5. Populate the memory layer (if enabled).

        Parameters
        ----------
        url : str
            Remote image URL.
        disk_cache : bool
            Read from and write through to the persistent disk cache.
        memory_cache : bool
            Read from and populate the in-memory cache.

        Returns
        -------
        FetchOutcome
            ``FetchSuccess`` or ``FetchFailure``; never raises for
            per-image problems.
        """
        if not url or not url.strip():
            return FetchFailure(url=url, reason="invalid_url: empty")

        # 1. Memory HIT
        if memory_cache:
            body = self._recall(url)
            if body is not None:
                return FetchSuccess(
                    url=url, source=DataSource.MEMORY, size_bytes=len(body)
                )

        # 2. Disk HIT
        cache_path: Path | None = None
        if disk_cache:
            if not self._disk_available:
                return FetchFailure(url=url, reason="disk_cache_unavailable")
            cache_path = self.cache_path_for(url)
            body = self._read_disk(cache_path)
            if body is not None:
                if memory_cache:
                    self._remember(url, body)
                return FetchSuccess(
                    url=url, source=DataSource.DISK, size_bytes=len(body)
                )

        # 3. Network
        body, reason = await self._download(url)
        if body is None:
            return FetchFailure(url=url, reason=reason or "unknown_error")

        # 4. Write-through
        if cache_path is not None:
            if not self._write_disk(cache_path, body):
                return FetchFailure(url=url, reason="disk_error")
            logger.debug("Cached image: %s -> %s (%d bytes)", url, cache_path, len(body))

        # 5. Memory
        if memory_cache:
            self._remember(url, body)

        return FetchSuccess(url=url, source=DataSource.NETWORK, size_bytes=len(body))

    # ------------------------------------------------------------------
    # Public API: get_stats
    # ------------------------------------------------------------------

    async def get_stats(self) -> CacheStats:
        """Compute statistics about the disk cache contents.

        Returns
        -------
        CacheStats
            Aggregated cache statistics including count, total size, and
            oldest/newest file modification times.
        """
        image_count = 0
        total_size_bytes = 0
        oldest_mtime: float | None = None
        newest_mtime: float | None = None

        images_dir = self._config.images_dir
        if images_dir.is_dir():
            for path in images_dir.rglob(f"*{_CACHE_SUFFIX}"):
                if not path.is_file():
                    continue
                stat = path.stat()
                image_count += 1
                total_size_bytes += stat.st_size
                if oldest_mtime is None or stat.st_mtime < oldest_mtime:
                    oldest_mtime = stat.st_mtime
                if newest_mtime is None or stat.st_mtime > newest_mtime:
                    newest_mtime = stat.st_mtime

        oldest_file = (
            datetime.fromtimestamp(oldest_mtime) if oldest_mtime is not None else None
        )
        newest_file = (
            datetime.fromtimestamp(newest_mtime) if newest_mtime is not None else None
        )

        logger.info(
            "Cache stats: images=%d, total_size=%d bytes",
            image_count,
            total_size_bytes,
        )

        return CacheStats(
            image_count=image_count,
            total_size_bytes=total_size_bytes,
            oldest_file=oldest_file,
            newest_file=newest_file,
        )

    # ------------------------------------------------------------------
    # Public API: purge
    # ------------------------------------------------------------------

    async def purge(self) -> int:
        """Delete every cached image and clear the memory layer.

        The cache directory itself is preserved.

        Returns
        -------
        int
            Total bytes freed (sum of deleted file sizes).
        """
        bytes_freed = 0
        self._memory.clear()

        images_dir = self._config.images_dir
        if images_dir.is_dir():
            for path in images_dir.rglob(f"*{_CACHE_SUFFIX}"):
                if not path.is_file():
                    continue
                try:
                    size = path.stat().st_size
                    path.unlink()
                    bytes_freed += size
                except OSError:
                    logger.warning(
                        "Failed to delete cached file: %s", path, exc_info=True
                    )

        logger.info("Purge complete: freed %d bytes", bytes_freed)
        return bytes_freed
