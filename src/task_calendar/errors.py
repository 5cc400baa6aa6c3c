"""Errors raised by the task store client."""


class TaskStoreError(Exception):
    """Base class for failed task store operations."""

    def __init__(self, message: str) -> None:
        """Initialize with a user-visible message."""
        super().__init__(message)
        self.message = message


class NetworkError(TaskStoreError):
    """Request never completed, or failed without a response body."""


class FetchError(NetworkError):
    """Listing tasks failed."""


class ValidationError(TaskStoreError):
    """Server rejected the request with its own message."""


class UnknownError(TaskStoreError):
    """Request failed and the server gave no usable message."""


class CreationError(UnknownError):
    """Creating a task failed without a server message."""


class DeletionError(UnknownError):
    """Deleting a task failed without a server message."""
