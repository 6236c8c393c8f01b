"""Shared fixtures and utilities for storage backend tests.

This module provides common test fixtures used across all storage backend tests,
including sample todos, temporary directories, and parameterized backend instances.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from storage.json_backend import JSONStorageBackend
from storage.memory_backend import InMemoryStorageBackend
from storage.protocol import StorageBackend, Todo, TodoRecord


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Create a temporary data directory for testing.

    Returns:
        Path to a clean temporary directory.
    """
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def sample_record() -> TodoRecord:
    """Create a sample serialized todo for testing.

    Returns:
        A valid TodoRecord with all required fields.
    """
    return {
        "id": "E621E1F8-C36C-495A-93FC-0C247A3E6E5F",
        "title": "Sample task",
        "isCompleted": False,
    }


@pytest.fixture
def sample_todos() -> list[Todo]:
    """Create a list of sample todos for testing.

    Returns:
        Three todos with fixed ids and mixed completion.
    """
    return [
        Todo(id="00000000-0000-4000-8000-000000000001", title="Task 1"),
        Todo(
            id="00000000-0000-4000-8000-000000000002",
            title="Task 2",
            is_completed=True,
        ),
        Todo(id="00000000-0000-4000-8000-000000000003", title="Task 3"),
    ]


@pytest.fixture(params=["json", "memory"])
def storage_backend(request, tmp_dir: Path) -> StorageBackend:
    """Parameterized fixture providing both storage backend types.

    This fixture enables cross-backend compliance testing by running
    the same tests against both JSON and in-memory implementations.

    Args:
        request: Pytest request object with param.
        tmp_dir: Temporary data directory.

    Returns:
        An instance of either JSONStorageBackend or InMemoryStorageBackend.
    """
    if request.param == "json":
        return JSONStorageBackend(tmp_dir / "todos.json")
    else:
        return InMemoryStorageBackend()


@pytest.fixture
def json_backend(tmp_dir: Path) -> JSONStorageBackend:
    """Create a JSON storage backend for JSON-specific tests.

    Args:
        tmp_dir: Temporary data directory.

    Returns:
        An instance of JSONStorageBackend.
    """
    return JSONStorageBackend(tmp_dir / "todos.json")


@pytest.fixture
def memory_backend() -> InMemoryStorageBackend:
    """Create an in-memory storage backend for memory-specific tests."""
    return InMemoryStorageBackend()
