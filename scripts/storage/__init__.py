"""Storage backend factory and exports for the todo app.

This module provides a factory function to get the appropriate storage backend
based on the TODO_STORAGE_BACKEND environment variable.

Supported backends:
    - "json" (default): JSON file-based storage
    - "memory": in-memory storage, lost when the process exits

Environment Variables:
    TODO_STORAGE_BACKEND: "json" (default) or "memory"
    TODO_LOG_PATH: Custom path for JSON backend (relative or absolute,
                   "~" is expanded). Default: ~/Documents/todos.json

Example:
    from storage import get_storage_backend

    backend = get_storage_backend()
    result = backend.retrieve()
    if result.ok:
        backend.persist(result.todos)
"""

from __future__ import annotations

import os
from pathlib import Path

from storage.errors import (
    StorageError,
    StorageReadFailure,
    StorageUnavailable,
    StorageWriteFailure,
)
from storage.json_backend import JSONStorageBackend
from storage.memory_backend import InMemoryStorageBackend
from storage.protocol import StorageBackend, StorageResult, Todo, TodoRecord

__all__ = [
    "StorageBackend",
    "StorageResult",
    "Todo",
    "TodoRecord",
    "StorageError",
    "StorageUnavailable",
    "StorageReadFailure",
    "StorageWriteFailure",
    "JSONStorageBackend",
    "InMemoryStorageBackend",
    "get_storage_backend",
]


def _get_json_path() -> Path | None:
    """Get the JSON file path from the environment.

    The path is returned as given. JSONStorageBackend expands "~" and makes it
    absolute on first use, so an unknown home directory is reported as a
    storage failure rather than a configuration error.

    Returns:
        Path from TODO_LOG_PATH, or None to use the default location.

    Raises:
        ValueError: If TODO_LOG_PATH contains a null byte.
    """
    custom_path = os.environ.get("TODO_LOG_PATH", "").strip()

    if not custom_path:
        return None

    if "\x00" in custom_path:
        raise ValueError("TODO_LOG_PATH contains a null byte")

    return Path(custom_path)


def get_storage_backend() -> StorageBackend:
    """Get the configured storage backend for todo storage.

    Reads the TODO_STORAGE_BACKEND environment variable to determine which
    backend to use. Defaults to JSON if not set or blank.

    Returns:
        An instance of the configured StorageBackend.

    Raises:
        ValueError: If the storage backend or path configuration is invalid.
    """
    backend_type = os.environ.get("TODO_STORAGE_BACKEND", "").strip().lower() or "json"

    if backend_type == "json":
        return JSONStorageBackend(_get_json_path())
    elif backend_type == "memory":
        return InMemoryStorageBackend()
    else:
        raise ValueError(
            f"Unknown storage backend: {backend_type!r}. "
            f"Expected 'json' or 'memory'."
        )
