"""JSON file-based storage backend for the todo app.

This module provides a storage backend that persists the todo collection to a
single JSON file. It uses atomic writes (temp file + os.replace) so a reader
never observes a partially written file.
"""

from __future__ import annotations

import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Sequence

from storage.errors import (
    StorageError,
    StorageReadFailure,
    StorageUnavailable,
    StorageWriteFailure,
)
from storage.protocol import StorageResult, Todo

DEFAULT_FILE_NAME = "todos.json"


def default_data_file() -> Path:
    """Return the default JSON file location in the user's documents folder.

    Raises:
        RuntimeError: If the home directory cannot be determined.
        KeyError: If the home directory cannot be determined on some platforms.
    """
    return Path.home() / "Documents" / DEFAULT_FILE_NAME


class JSONStorageBackend:
    """JSON file-based storage backend for todos.

    Stores the whole collection as a JSON array of TodoRecord objects. Every
    persist overwrites the file with the full collection.

    Attributes:
        data_file: The Path to the JSON file. Absolute once resolved; None until
            the default location has been resolved.

    Example:
        backend = JSONStorageBackend(Path("/home/user/Documents/todos.json"))
        result = backend.retrieve()
        if result.ok:
            backend.persist(result.todos + [Todo.create("buy milk")])
    """

    def __init__(self, data_file: Path | None = None) -> None:
        """Initialize the JSON storage backend.

        Args:
            data_file: The path to the JSON file. "~" is expanded and relative
                paths are made absolute on first use. When None, the default
                location is resolved on first use. Either way the result is
                reused afterwards.
        """
        self.data_file = data_file
        self._resolved = False

    def _resolve_data_file(self) -> Path:
        """Return the storage path, resolving it on the first successful call.

        Raises:
            StorageUnavailable: If the home directory needed for the default
                location or for a "~" path cannot be determined.
        """
        if self._resolved:
            return self.data_file

        try:
            if self.data_file is None:
                data_file = default_data_file()
            else:
                data_file = self.data_file.expanduser().absolute()
        except (RuntimeError, KeyError) as e:
            raise StorageUnavailable(f"cannot resolve storage path: {e}") from e

        self.data_file = data_file
        self._resolved = True
        if os.environ.get("DEBUG"):
            print(f"Using todo file {data_file}", file=sys.stderr)
        return data_file

    def retrieve(self) -> StorageResult:
        """Load all todos from the JSON file.

        A missing file is created as an empty placeholder and yields an empty
        collection. An empty or whitespace-only file also yields an empty
        collection.

        Returns:
            A successful result with the stored todos, or a failed result
            carrying StorageUnavailable or StorageReadFailure.
        """
        try:
            return StorageResult.success(self._read())
        except StorageError as e:
            return StorageResult.failure(e)

    def _read(self) -> list[Todo]:
        data_file = self._resolve_data_file()

        try:
            exists = data_file.exists()
        except OSError as e:
            raise StorageReadFailure(f"cannot access {data_file}: {e}", data_file) from e

        if not exists:
            try:
                data_file.parent.mkdir(parents=True, exist_ok=True)
                data_file.touch()
            except OSError as e:
                raise StorageUnavailable(
                    f"cannot create {data_file}: {e}", data_file
                ) from e
            return []

        try:
            with open(data_file, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadFailure(f"cannot read {data_file}: {e}", data_file) from e

        if not text.strip():
            return []

        try:
            records = json.loads(text)
        # ValueError covers JSONDecodeError and integers over the digit limit
        except (ValueError, RecursionError) as e:
            raise StorageReadFailure(f"malformed JSON in {data_file}: {e}", data_file) from e

        if not isinstance(records, list):
            raise StorageReadFailure(
                f"expected a JSON array in {data_file}, got {type(records).__name__}",
                data_file,
            )

        todos: list[Todo] = []
        seen_ids: set[str] = set()
        for position, record in enumerate(records):
            try:
                todo = Todo.from_dict(record)
            except ValueError as e:
                raise StorageReadFailure(
                    f"invalid todo at position {position} in {data_file}: {e}",
                    data_file,
                ) from e
            if todo.id in seen_ids:
                raise StorageReadFailure(
                    f"duplicate todo id {todo.id} in {data_file}", data_file
                )
            seen_ids.add(todo.id)
            todos.append(todo)
        return todos

    def persist(self, todos: Sequence[Todo]) -> StorageResult:
        """Atomically overwrite the JSON file with the given todos.

        Creates the parent directory if needed, writes to a temporary file in
        the same directory and then moves it over the target with os.replace.
        The temporary file is removed if anything fails.

        Args:
            todos: The complete collection to store.

        Returns:
            A successful result holding a copy of todos, or a failed result
            carrying StorageUnavailable or StorageWriteFailure.
        """
        try:
            data_file = self._resolve_data_file()
        except StorageUnavailable as e:
            return StorageResult.failure(e)

        records = [todo.to_dict() for todo in todos]
        try:
            self._write(data_file, records)
        except (OSError, TypeError, ValueError) as e:
            error = StorageWriteFailure(f"cannot write {data_file}: {e}", data_file)
            error.__cause__ = e
            return StorageResult.failure(error)
        return StorageResult.success(todos)

    def _write(self, data_file: Path, records: list) -> None:
        # Ensure parent directory exists
        data_file.parent.mkdir(parents=True, exist_ok=True)

        # Write to temp file first, then atomically rename
        temp_fd, temp_path = tempfile.mkstemp(dir=data_file.parent, suffix=".tmp")
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            os.replace(temp_path, data_file)  # Atomic on POSIX
        except (OSError, TypeError, ValueError):
            # Clean up temp file on failure
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise
