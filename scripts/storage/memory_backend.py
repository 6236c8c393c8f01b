"""In-memory storage backend for the todo app.

Holds the last persisted collection for the lifetime of the backend instance
only. Useful for tests and for environments without durable storage.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from storage.protocol import StorageResult, Todo


class InMemoryStorageBackend:
    """Ephemeral storage backend for todos.

    Attributes:
        todos: The last persisted collection (initially empty unless seeded).
    """

    def __init__(self, todos: Iterable[Todo] | None = None) -> None:
        self.todos: list[Todo] = list(todos or [])

    def persist(self, todos: Sequence[Todo]) -> StorageResult:
        """Replace the held collection. Never fails."""
        self.todos = list(todos)
        return StorageResult.success(self.todos)

    def retrieve(self) -> StorageResult:
        """Return the held collection. Never fails and is never absent."""
        return StorageResult.success(self.todos)
