"""Tests for the key-value stores."""

from pathlib import Path
from unittest.mock import patch

import pytest

from catalog_tool.storage.store import JsonFileStore, MemoryStore, StorageReadError, StorageWriteError


class TestJsonFileStore:
    """Tests for the file-backed store."""

    def test_missing_slot_reads_as_none(self, tmp_path: Path) -> None:
        assert JsonFileStore(tmp_path).get("books") is None

    def test_set_then_get(self, tmp_path: Path) -> None:
        """Each slot lands in <dir>/<slot>.json."""
        store = JsonFileStore(tmp_path / "data")
        store.set("books", '{"a": 1}')
        assert store.get("books") == '{"a": 1}'
        assert (tmp_path / "data" / "books.json").read_text(encoding="utf-8") == '{"a": 1}'

    def test_set_replaces_previous_content(self, tmp_path: Path) -> None:
        store = JsonFileStore(tmp_path)
        store.set("movies", "old")
        store.set("movies", "new")
        assert store.get("movies") == "new"

    def test_no_temporary_files_left_behind(self, tmp_path: Path) -> None:
        store = JsonFileStore(tmp_path)
        store.set("authors", "{}")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["authors.json"]

    def test_unicode_round_trip(self, tmp_path: Path) -> None:
        store = JsonFileStore(tmp_path)
        store.set("books", "Gödel, Escher, Bach")
        assert store.get("books") == "Gödel, Escher, Bach"

    def test_failed_write_keeps_previous_content(self, tmp_path: Path) -> None:
        """If the final rename fails the old file stays and the temp file is removed."""
        store = JsonFileStore(tmp_path)
        store.set("books", "before")
        with patch("catalog_tool.storage.store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageWriteError, match="books"):
                store.set("books", "after")
        assert store.get("books") == "before"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["books.json"]

    def test_unreadable_slot_raises_read_error(self, tmp_path: Path) -> None:
        """A directory where the file should be cannot be read."""
        (tmp_path / "books.json").mkdir()
        with pytest.raises(StorageReadError) as exc_info:
            JsonFileStore(tmp_path).get("books")
        assert exc_info.value.slot == "books"

    def test_remove(self, tmp_path: Path) -> None:
        store = JsonFileStore(tmp_path)
        store.set("books", "{}")
        store.remove("books")
        store.remove("books")
        assert store.get("books") is None

    @pytest.mark.parametrize("slot", ["", "../etc", "Books", "a/b"])
    def test_invalid_slot_names(self, tmp_path: Path, slot: str) -> None:
        with pytest.raises(ValueError, match="Invalid storage slot name"):
            JsonFileStore(tmp_path).path_for(slot)


class TestMemoryStore:
    """Tests for the in-memory store."""

    def test_get_set_remove(self) -> None:
        store = MemoryStore({"books": "{}"})
        assert store.get("books") == "{}"
        assert store.get("movies") is None
        store.set("movies", "[]")
        assert store.slots == {"books": "{}", "movies": "[]"}
        store.remove("books")
        store.remove("books")
        assert store.get("books") is None
