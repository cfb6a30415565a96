"""Shared types for the bridge layer."""

from dataclasses import asdict, dataclass
from typing import Any

from iconbox.exceptions import (
    IconboxError,
    ImportCancelledError,
    InvalidArgumentError,
    LibraryIOError,
    NotFoundError,
)

__all__ = [
    "BridgeResponse",
    "bridge_ok",
    "bridge_error",
    "error_code",
    "to_payload",
]

NOT_FOUND = "not_found"
INVALID_ARGUMENT = "invalid_argument"
IO_ERROR = "io_error"
CANCELLED = "cancelled"
INTERNAL = "internal"

_CODES: tuple[tuple[type[IconboxError], str], ...] = (
    (NotFoundError, NOT_FOUND),
    (InvalidArgumentError, INVALID_ARGUMENT),
    (LibraryIOError, IO_ERROR),
    (ImportCancelledError, CANCELLED),
)


@dataclass
class BridgeResponse:
    """Standard response format for bridge methods."""

    success: bool
    data: Any = None
    error: str | None = None
    code: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


# Helper functions for common response patterns
def bridge_ok(data: Any = None) -> dict:
    """Return a success response."""
    return BridgeResponse(success=True, data=data).to_dict()


def bridge_error(error: str, code: str = INTERNAL) -> dict:
    """Return an error response."""
    return BridgeResponse(success=False, error=error, code=code).to_dict()


def error_code(exc: BaseException) -> str:
    """Map an exception to its envelope code."""
    for cls, code in _CODES:
        if isinstance(exc, cls):
            return code
    return INTERNAL


def to_payload(value: Any) -> Any:
    """Convert models (and lists of them) to JSON-ready data."""
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [to_payload(v) for v in value]
    return value
