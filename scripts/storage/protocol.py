"""Protocols and type definitions for storage backends.

This module defines the todo entity, its on-disk record shape, the result
type returned by every backend operation, and the StorageBackend protocol.
All backends must implement the StorageBackend protocol.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence, TypedDict

from storage.errors import StorageError


class TodoRecord(TypedDict):
    """Serialized structure for a single todo item.

    Attributes:
        id: Upper-case UUID string (e.g., "E621E1F8-C36C-495A-93FC-0C247A3E6E5F").
        title: The task description.
        isCompleted: Whether the task has been completed.
    """

    id: str
    title: str
    isCompleted: bool


@dataclass(frozen=True)
class Todo:
    """A single todo item.

    Identity and title never change after creation. Completion is flipped by
    replacing the item (see dataclasses.replace).
    """

    id: str
    title: str
    is_completed: bool = False

    @classmethod
    def create(cls, title: str) -> Todo:
        """Create a new, not yet completed todo with a fresh identifier."""
        return cls(id=str(uuid.uuid4()).upper(), title=title)

    def to_dict(self) -> TodoRecord:
        return {
            "id": self.id,
            "title": self.title,
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_dict(cls, record: Any) -> Todo:
        """Build a Todo from a decoded record.

        Args:
            record: A decoded JSON value expected to match TodoRecord.

        Returns:
            The corresponding Todo.

        Raises:
            ValueError: If the record is not an object or a field is missing
                or has the wrong type.
        """
        if not isinstance(record, dict):
            raise ValueError(f"todo record must be an object, got {type(record).__name__}")

        todo_id = record.get("id")
        title = record.get("title")
        is_completed = record.get("isCompleted")

        if not isinstance(todo_id, str) or not todo_id:
            raise ValueError(f"invalid todo id: {todo_id!r}")
        if not isinstance(title, str) or not title:
            raise ValueError(f"invalid todo title: {title!r}")
        if not isinstance(is_completed, bool):
            raise ValueError(f"invalid isCompleted flag: {is_completed!r}")

        return cls(id=todo_id, title=title, is_completed=is_completed)


@dataclass(frozen=True)
class StorageResult:
    """Outcome of a storage backend operation.

    Attributes:
        todos: The collection read or written. Always a fresh list; empty on failure.
        error: The failure, or None on success.
    """

    todos: list[Todo] = field(default_factory=list)
    error: StorageError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, todos: Sequence[Todo]) -> StorageResult:
        return cls(todos=list(todos))

    @classmethod
    def failure(cls, error: StorageError) -> StorageResult:
        return cls(todos=[], error=error)


class StorageBackend(Protocol):
    """Protocol for todo storage backends.

    All storage backends must implement these methods to be usable by
    TodoManager. Neither method raises for storage faults; failures are
    reported through StorageResult.error.
    """

    def persist(self, todos: Sequence[Todo]) -> StorageResult:
        """Replace the stored collection with the given todos.

        Args:
            todos: The complete collection, in order.

        Returns:
            On success, a result holding a copy of the persisted collection.
            On failure, a result with a StorageWriteFailure or
            StorageUnavailable error.
        """
        ...

    def retrieve(self) -> StorageResult:
        """Load the stored collection.

        Returns:
            On success, a result holding the todos in stored order (empty if
            nothing has been stored yet). On failure, a result with a
            StorageReadFailure or StorageUnavailable error.
        """
        ...
