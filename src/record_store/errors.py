"""Exception hierarchy for the record store."""
from __future__ import annotations

from pathlib import Path


class RecordStoreError(Exception):
    """Base exception for all record store failures"""


class InvalidArgument(RecordStoreError, ValueError):
    """Raised when a root directory argument is not a path"""


class MissingKey(RecordStoreError, ValueError):
    """Raised when no key is supplied"""


class InvalidKey(RecordStoreError, ValueError):
    """Raised when a key is not a non-blank string"""


class SerializationError(RecordStoreError):
    """Raised when a value cannot be encoded as JSON"""


class StoreIOError(RecordStoreError, OSError):
    """Raised when the filesystem rejects a read, write, stat, list or delete.

    The underlying ``OSError`` is kept as ``__cause__`` and its ``errno`` is
    copied so callers can still branch on it.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        operation: str | None = None,
        errno: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.operation = operation
        self.errno = errno

    def __str__(self) -> str:
        return self.message

    @classmethod
    def wrap(cls, exc: OSError, *, path: Path, operation: str) -> "StoreIOError":
        reason = exc.strerror or str(exc) or type(exc).__name__
        return cls(
            f"Failed to {operation} {path}: {reason}",
            path=path,
            operation=operation,
            errno=exc.errno,
        )


class CorruptRecord(StoreIOError):
    """Raised when a record file does not contain valid JSON"""


__all__ = [
    "RecordStoreError",
    "InvalidArgument",
    "MissingKey",
    "InvalidKey",
    "SerializationError",
    "StoreIOError",
    "CorruptRecord",
]
