"""
Abstract Base Class for the image fetch-and-cache facility.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ...models.precache import FetchOutcome


class ImageFetcherInterface(ABC):
    """
    Fetches images through a layered cache.

    Implementations never raise for per-image problems; network, decode
    and cache-write errors are all returned as ``FetchFailure``.
    """

    @abstractmethod
    async def fetch(
        self,
        url: str,
        *,
        disk_cache: bool = True,
        memory_cache: bool = True,
    ) -> FetchOutcome:
        """
        Fetch ``url``, reading from and writing to the enabled cache layers.

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
            ``FetchSuccess`` with the serving layer, or ``FetchFailure``
            with a human-readable reason.
        """
        pass
