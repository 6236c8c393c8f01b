"""Todo collection manager.

TodoManager owns the live, ordered todo collection and pushes the whole
collection to its storage backend after every mutation. Storage faults never
propagate: a failed load starts with no todos, and a failed save keeps the
in-memory change and leaves the stored copy stale.
"""

from __future__ import annotations

import os
import sys
from dataclasses import replace
from typing import Iterator

from storage.protocol import StorageBackend, StorageResult, Todo


class InvalidInputError(ValueError):
    """Raised when a todo title is empty."""


class IndexOutOfRangeError(IndexError):
    """Raised when a position does not refer to an existing todo."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"index {index} out of range for {length} todos")
        self.index = index
        self.length = length


def _debug(message: str) -> None:
    if os.environ.get("DEBUG"):
        print(message, file=sys.stderr)


class TodoView:
    """Restartable iterable of (position, todo) pairs over a manager's todos."""

    def __init__(self, todos: list[Todo]) -> None:
        self._todos = todos

    def __iter__(self) -> Iterator[tuple[int, Todo]]:
        return enumerate(self._todos)

    def __len__(self) -> int:
        return len(self._todos)


class TodoManager:
    """Owns the todo collection and mediates every change through a backend.

    Attributes:
        backend: The storage backend, fixed at construction.

    Example:
        manager = TodoManager(InMemoryStorageBackend())
        manager.add("buy milk")
        manager.toggle_completion(0)
        for index, todo in manager.list_todos():
            print(index, todo.title, todo.is_completed)
    """

    def __init__(self, backend: StorageBackend) -> None:
        """Load the initial collection from backend.

        Args:
            backend: Storage backend to load from and save to.
        """
        self.backend = backend
        self._todos: list[Todo] = []

        result = backend.retrieve()
        if result.ok:
            self._todos = list(result.todos)
            _debug(f"Loaded {len(self._todos)} todos")
        else:
            print(f"Warning: failed to load todos: {result.error}", file=sys.stderr)

    def __len__(self) -> int:
        return len(self._todos)

    @property
    def todos(self) -> tuple[Todo, ...]:
        """Snapshot of the current collection."""
        return tuple(self._todos)

    def list_todos(self) -> TodoView:
        """Return the current todos as (position, todo) pairs, in order."""
        return TodoView(self._todos)

    def add(self, title: str) -> StorageResult:
        """Append a new todo and save the collection.

        Args:
            title: The todo text. Surrounding whitespace is stripped.

        Returns:
            The backend's result for the save.

        Raises:
            InvalidInputError: If the title is empty or only whitespace.
        """
        title = title.strip()
        if not title:
            raise InvalidInputError("todo title must not be empty")

        self._todos.append(Todo.create(title))
        return self._save()

    def toggle_completion(self, index: int) -> StorageResult:
        """Flip the completion flag of the todo at index and save.

        Args:
            index: Zero-based position in the current collection.

        Returns:
            The backend's result for the save.

        Raises:
            IndexOutOfRangeError: If index is negative or past the end.
        """
        self._check_index(index)
        todo = self._todos[index]
        self._todos[index] = replace(todo, is_completed=not todo.is_completed)
        return self._save()

    def delete(self, index: int) -> StorageResult:
        """Remove the todo at index and save.

        Later todos shift down by one position.

        Raises:
            IndexOutOfRangeError: If index is negative or past the end.
        """
        self._check_index(index)
        del self._todos[index]
        return self._save()

    def _check_index(self, index: int) -> None:
        # Negative indexes are rejected rather than counted from the end
        if index < 0 or index >= len(self._todos):
            raise IndexOutOfRangeError(index, len(self._todos))

    def _save(self) -> StorageResult:
        result = self.backend.persist(self._todos)
        if result.ok:
            _debug(f"Saved {len(self._todos)} todos")
        else:
            print(f"Warning: failed to save todos: {result.error}", file=sys.stderr)
        return result
