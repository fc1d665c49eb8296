"""
Abstract Base Class for the background job scheduling facility.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ...models.precache import JobRequest


class JobSchedulerInterface(ABC):
    """Accepts requests to run background jobs under network constraints."""

    @abstractmethod
    def schedule(self, request: JobRequest) -> None:
        """Enqueue ``request``; replaces any pending request with the same id."""
        pass
