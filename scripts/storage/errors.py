"""Error kinds reported by storage backends.

Backends never raise these. They are returned inside a failed StorageResult
so the caller can decide how to degrade.
"""

from __future__ import annotations

from pathlib import Path


class StorageError(Exception):
    """Base class for all storage backend failures.

    Attributes:
        path: The storage file involved, or None if it was never resolved.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class StorageUnavailable(StorageError):
    """The storage location cannot be resolved or created."""


class StorageReadFailure(StorageError):
    """An existing storage file is unreadable or holds malformed content."""


class StorageWriteFailure(StorageError):
    """Writing the collection to storage failed."""
