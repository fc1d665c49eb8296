"""
Graceful shutdown handler for the image cache job.

This module provides signal handling for SIGINT (Ctrl+C) and SIGTERM so
that a running job stops at its next safe point: the fetch in flight is
allowed to finish, and no further images are requested.
"""

from __future__ import annotations

import logging
import signal
from types import FrameType
from typing import Any, Callable, Optional, Union

from feedcache.exceptions import GracefulShutdownException
from feedcache.services.precache.cancellation import CancellationToken

# Type for signal handlers as returned by signal.getsignal()
SignalHandlerType = Union[Callable[[int, Optional[FrameType]], Any], int, None]

logger = logging.getLogger(__name__)


class ShutdownHandler:
    """
    Handler translating SIGINT/SIGTERM into job cancellation.

    Attributes
    ----------
    token : CancellationToken
        Token cancelled when a shutdown signal arrives.
    shutdown_requested : bool
        True if a shutdown signal has been received.
    signal_received : str | None
        The name of the signal received (e.g., "SIGINT", "SIGTERM").

    Examples
    --------
    >>> handler = ShutdownHandler()
    >>> handler.install()
    >>> try:
    ...     summary = await job.run(handler.token)
    ... finally:
    ...     handler.uninstall()
    """

    def __init__(self, token: CancellationToken | None = None) -> None:
        """Initialize ShutdownHandler."""
        self._token = token or CancellationToken()
        self._signal_received: Optional[str] = None
        self._original_sigint: SignalHandlerType = None
        self._original_sigterm: SignalHandlerType = None
        self._installed = False

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def shutdown_requested(self) -> bool:
        """Check if shutdown has been requested."""
        return self._token.cancelled

    @property
    def signal_received(self) -> str | None:
        """Get the name of the signal that triggered shutdown."""
        return self._signal_received

    def install(self) -> None:
        """
        Install signal handlers for SIGINT and SIGTERM.

        Saves original handlers so they can be restored on uninstall.
        """
        if self._installed:
            return

        self._original_sigint = signal.getsignal(signal.SIGINT)
        self._original_sigterm = signal.getsignal(signal.SIGTERM)

        signal.signal(signal.SIGINT, self._handle_signal)
        signal.signal(signal.SIGTERM, self._handle_signal)

        self._installed = True
        logger.debug("Shutdown handlers installed for SIGINT and SIGTERM")

    def uninstall(self) -> None:
        """
        Uninstall signal handlers and restore original handlers.
        """
        if not self._installed:
            return

        if self._original_sigint is not None:
            signal.signal(signal.SIGINT, self._original_sigint)
        if self._original_sigterm is not None:
            signal.signal(signal.SIGTERM, self._original_sigterm)

        self._installed = False
        logger.debug("Shutdown handlers uninstalled, original handlers restored")

    def _handle_signal(self, signum: int, frame: object) -> None:
        """
        Handle incoming shutdown signal.

        Parameters
        ----------
        signum : int
            Signal number (e.g., signal.SIGINT, signal.SIGTERM).
        frame : object
            Current stack frame (unused but required by signal API).
        """
        signal_name = signal.Signals(signum).name
        if self._signal_received is None:
            self._signal_received = signal_name
        self._token.cancel(signal_name)

        logger.warning(
            "Received %s - stopping image cache job after the current fetch",
            signal_name,
        )

    def check_shutdown(self) -> None:
        """
        Raise if shutdown has been requested.

        Raises
        ------
        GracefulShutdownException
            If a shutdown signal has been received.
        """
        if self._token.cancelled:
            raise GracefulShutdownException(
                message=f"Graceful shutdown requested via {self._signal_received}",
                signal_received=self._signal_received or "SIGINT",
            )
