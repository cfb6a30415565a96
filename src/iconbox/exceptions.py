"""Centralized exception classes for iconbox.

Every library command either returns normally or raises one of these. The
bridge and the CLI translate them into user-facing errors.
"""


class IconboxError(Exception):
    """Base exception for all iconbox errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(self, message: str, details: str | None = None):
        """Initialize the exception.

        Args:
            message: User-friendly error message.
            details: Additional technical details for debugging.
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\n  Details: {self.details}"
        return self.message


class NotFoundError(IconboxError, LookupError):
    """Raised when a referenced id does not exist."""

    pass


class CollectionNotFoundError(NotFoundError):
    """Raised when a collection doesn't exist."""

    pass


class IconNotFoundError(NotFoundError):
    """Raised when an icon doesn't exist."""

    pass


class InvalidArgumentError(IconboxError, ValueError):
    """Raised for empty names, unknown settings keys and would-be cycles."""

    pass


class LibraryIOError(IconboxError, OSError):
    """Raised when the filesystem fails during an import."""

    pass


class StorageError(LibraryIOError):
    """Raised when the library cannot be persisted."""

    pass


class ImportCancelledError(IconboxError):
    """Raised when an import is cancelled before it commits."""

    pass
