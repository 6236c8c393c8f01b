"""Tests for the get_storage_backend factory."""

from __future__ import annotations

from pathlib import Path

import pytest

from storage import (
    InMemoryStorageBackend,
    JSONStorageBackend,
    StorageUnavailable,
    get_storage_backend,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove storage configuration inherited from the environment."""
    monkeypatch.delenv("TODO_STORAGE_BACKEND", raising=False)
    monkeypatch.delenv("TODO_LOG_PATH", raising=False)


class TestGetStorageBackend:
    """Tests for backend selection and path configuration."""

    def test_should_default_to_json_with_deferred_path(self) -> None:
        backend = get_storage_backend()
        assert isinstance(backend, JSONStorageBackend)
        assert backend.data_file is None

    @pytest.mark.parametrize("value", ["json", "JSON", "  json  ", ""])
    def test_should_select_json_backend(
        self, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        monkeypatch.setenv("TODO_STORAGE_BACKEND", value)
        assert isinstance(get_storage_backend(), JSONStorageBackend)

    @pytest.mark.parametrize("value", ["memory", "Memory"])
    def test_should_select_memory_backend(
        self, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        monkeypatch.setenv("TODO_STORAGE_BACKEND", value)
        assert isinstance(get_storage_backend(), InMemoryStorageBackend)

    def test_should_reject_unknown_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TODO_STORAGE_BACKEND", "sqlite")
        with pytest.raises(ValueError, match="Unknown storage backend"):
            get_storage_backend()

    def test_should_use_absolute_custom_path(
        self, monkeypatch: pytest.MonkeyPatch, tmp_dir: Path
    ) -> None:
        target = tmp_dir / "custom.json"
        monkeypatch.setenv("TODO_LOG_PATH", str(target))

        backend = get_storage_backend()
        assert backend.data_file == target

    def test_should_resolve_relative_custom_path_against_cwd(
        self, monkeypatch: pytest.MonkeyPatch, tmp_dir: Path
    ) -> None:
        monkeypatch.chdir(tmp_dir)
        monkeypatch.setenv("TODO_LOG_PATH", "data/todos.json")

        backend = get_storage_backend()
        assert backend.data_file == Path("data/todos.json")

        assert backend.retrieve().ok
        assert backend.data_file == tmp_dir / "data" / "todos.json"

    def test_should_expand_home_in_custom_path(
        self, monkeypatch: pytest.MonkeyPatch, tmp_dir: Path
    ) -> None:
        monkeypatch.setenv("HOME", str(tmp_dir))
        monkeypatch.setenv("TODO_LOG_PATH", "~/todos.json")

        backend = get_storage_backend()
        assert backend.retrieve().ok
        assert backend.data_file == tmp_dir / "todos.json"

    def test_unknown_user_in_custom_path_is_storage_failure(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TODO_LOG_PATH", "~no_such_user_xyz/todos.json")

        backend = get_storage_backend()
        result = backend.retrieve()

        assert isinstance(result.error, StorageUnavailable)
        assert backend.persist([]).error is not None

    def test_whitespace_custom_path_uses_default(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TODO_LOG_PATH", "   ")
        assert get_storage_backend().data_file is None

    def test_should_reject_null_byte_in_custom_path(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("os.environ", {"TODO_LOG_PATH": "bad\x00path"})
        with pytest.raises(ValueError, match="null byte"):
            get_storage_backend()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
