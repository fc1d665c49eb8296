"""
Custom exceptions for the feedcache application.

This module defines domain-specific exceptions for error handling
throughout the application, including blob store failures, content
store failures and graceful shutdown.
"""

from __future__ import annotations


class FeedcacheError(Exception):
    """Base exception for all feedcache errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize FeedcacheError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        """
        self.message = message
        super().__init__(message)


class BlobReadError(FeedcacheError):
    """
    Exception raised when a stored article blob cannot be read.

    Covers a missing blob file, an I/O failure while reading it, and
    content that cannot be decompressed or decoded. Blob scanning treats
    all of these the same way: the item contributes no image URLs.

    Attributes
    ----------
    message : str
        Human-readable error message.
    item_id : int | str | None
        Identifier of the feed item whose blob failed to load.
    original_error : Exception | None
        The underlying exception, if any.

    Examples
    --------
    >>> try:
    ...     html = blob_store.read_text(item_id)
    ... except BlobReadError as e:
    ...     print(f"Skipping {e.item_id}: {e.message}")
    """

    def __init__(
        self,
        message: str = "Failed to read article blob",
        item_id: int | str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """
        Initialize BlobReadError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Failed to read article blob").
        item_id : int | str | None, optional
            Identifier of the feed item (default: None).
        original_error : Exception | None, optional
            The underlying exception (default: None).
        """
        self.item_id = item_id
        self.original_error = original_error
        super().__init__(message)


class ContentStoreError(FeedcacheError):
    """
    Exception raised when stored content cannot be enumerated.

    This wraps database failures while listing feed item ids or image
    URLs. It is fatal to an image cache run and is caught once by the
    job lifecycle boundary.

    Attributes
    ----------
    message : str
        Human-readable error message.
    operation : str | None
        The content store operation that failed.
    original_error : Exception | None
        The original database exception that caused this error.
    """

    def __init__(
        self,
        message: str = "Content store operation failed",
        operation: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """
        Initialize ContentStoreError.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Content store operation failed").
        operation : str | None, optional
            The operation that failed (default: None).
        original_error : Exception | None, optional
            The original database exception (default: None).
        """
        self.operation: str | None = operation
        self.original_error: Exception | None = original_error
        super().__init__(message)


class GracefulShutdownException(FeedcacheError):
    """
    Exception raised when graceful shutdown is requested.

    This exception is raised when the application receives SIGINT (Ctrl+C)
    or SIGTERM signal. It allows in-flight operations to complete gracefully
    before exiting.

    Attributes
    ----------
    message : str
        Human-readable error message.
    signal_received : str
        The signal that triggered the shutdown (e.g., "SIGINT", "SIGTERM").
    """

    def __init__(
        self,
        message: str = "Graceful shutdown requested",
        signal_received: str = "SIGINT",
    ) -> None:
        """
        Initialize GracefulShutdownException.

        Parameters
        ----------
        message : str, optional
            Human-readable error message (default: "Graceful shutdown requested").
        signal_received : str, optional
            The signal that triggered the shutdown (default: "SIGINT").
        """
        self.signal_received = signal_received
        super().__init__(message)


# Exit codes for CLI integration
EXIT_CODE_SUCCESS = 0
EXIT_CODE_PARTIAL_FAILURE = 1  # Run completed but some images failed
EXIT_CODE_JOB_FAILED = 2
EXIT_CODE_INTERRUPTED = 130  # Standard Unix signal interrupt exit code
