"""
Cooperative cancellation for the image cache job.

A ``CancellationToken`` is shared by reference between whoever may stop
the job (a signal handler, a job host) and the loops that do the work.
Loops check it only at their iteration boundaries, so an in-flight fetch
or blob read always runs to completion.
"""

from __future__ import annotations

import threading
from typing import Optional


class CancellationToken:
    """Thread-safe, one-way cancellation flag.

    Examples
    --------
    >>> token = CancellationToken()
    >>> token.cancelled
    False
    >>> token.cancel("SIGTERM")
    >>> token.cancelled, token.reason
    (True, 'SIGTERM')
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation. Only the first reason given is kept."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def __repr__(self) -> str:
        state = f"cancelled, reason={self._reason!r}" if self.cancelled else "active"
        return f"CancellationToken({state})"
