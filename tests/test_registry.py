"""Tests for the entity registries.

Registries are built over a MemoryStore unless the test is about files.
"""

import json
import logging
from pathlib import Path

import pytest

from catalog_tool.storage.registry import (
    AuthorRegistry,
    BookRegistry,
    MovieRegistry,
    PublisherRegistry,
    RegistryCorruptedError,
    RegistryError,
)
from catalog_tool.storage.store import JsonFileStore, KeyValueStore, MemoryStore, StorageReadError, StorageWriteError
from catalog_tool.violations import ViolationKind

GEB = {"isbn": "0465026567", "title": "Gödel, Escher, Bach", "year": 1999}


class FailingStore(KeyValueStore):
    """Store whose reads and writes always fail."""

    def get(self, slot: str) -> str | None:
        raise StorageReadError(slot, OSError("permission denied"))

    def set(self, slot: str, value: str) -> None:
        raise StorageWriteError(slot, OSError("disk full"))

    def remove(self, slot: str) -> None:
        pass


class ReadOnlyMemoryStore(MemoryStore):
    """MemoryStore that keeps its initial slots and rejects every write."""

    def set(self, slot: str, value: str) -> None:
        raise StorageWriteError(slot, OSError("read-only file system"))


@pytest.fixture
def books() -> BookRegistry:
    registry = BookRegistry(MemoryStore())
    registry.retrieve_all()
    return registry


class TestAdd:
    """Tests for BaseRegistry.add."""

    def test_add_inserts_under_primary_key(self, books: BookRegistry) -> None:
        result = books.add(GEB)
        assert result.ok
        assert list(books.instances) == ["0465026567"]
        assert books.instances["0465026567"] is result.value

    def test_add_with_violation_inserts_nothing(self, books: BookRegistry) -> None:
        result = books.add({"isbn": "0465026567", "year": 1999})
        assert result.violation is not None
        assert result.violation.kind is ViolationKind.MANDATORY_VALUE
        assert books.instances == {}

    def test_add_duplicate_is_rejected(self, books: BookRegistry) -> None:
        """add is not an upsert: the existing entry is kept."""
        books.add(GEB)
        result = books.add({**GEB, "title": "Another title"})
        assert result.violation is not None
        assert result.violation.kind is ViolationKind.UNIQUENESS
        assert books.instances["0465026567"].title == "Gödel, Escher, Bach"

    def test_add_logs_created(self, books: BookRegistry, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="catalog_tool.storage.registry"):
            books.add(GEB)
        assert "Book{ isbn: 0465026567" in caplog.text
        assert "created" in caplog.text


class TestRetrieveAndSave:
    """Tests for loading and persisting."""

    def test_round_trip_through_store(self) -> None:
        store = MemoryStore()
        writer = BookRegistry(store)
        writer.add(GEB)
        assert writer.save_all() is True

        reader = BookRegistry(store)
        assert reader.retrieve_all() == 1
        book = reader.instances["0465026567"]
        assert book.title == "Gödel, Escher, Bach"
        assert book.year == 1999

    def test_round_trip_through_files(self, tmp_path: Path) -> None:
        """Every field of every entity survives a save and a fresh load."""
        writer = MovieRegistry(JsonFileStore(tmp_path))
        writer.add({"movie_id": "1", "title": "Metropolis", "release_date": "1927-01-10", "rating": 1, "genres": [5, 10]})
        writer.add({"movie_id": "2", "title": "Gattaca", "rating": 3, "genres": [5]})
        writer.save_all()

        reader = MovieRegistry(JsonFileStore(tmp_path))
        reader.retrieve_all()
        assert reader.instances == writer.instances
        stored = json.loads((tmp_path / "movies.json").read_text(encoding="utf-8"))
        assert set(stored) == {"1", "2"}
        assert "release_date" not in stored["2"]

    @pytest.mark.parametrize(
        ("registry_class", "records"),
        [
            (
                BookRegistry,
                [
                    {**GEB, "edition": 20, "author_ids": [1, 2], "publisher_id": "Basic Books"},
                    {"isbn": "006251587X", "title": "Weaving the Web", "year": 2000, "edition": 1, "author_ids": [3]},
                ],
            ),
            (
                MovieRegistry,
                [{"movie_id": "7", "title": "Metropolis", "release_date": "1927-01-10", "rating": 1, "genres": [5, 10]}],
            ),
            (AuthorRegistry, [{"author_id": 1, "name": "Douglas Hofstadter"}, {"author_id": 12, "name": "Tim Berners-Lee"}]),
            (PublisherRegistry, [{"name": "Basic Books", "address": "New York, USA"}]),
        ],
    )
    def test_every_registry_round_trips_all_fields(
        self, tmp_path: Path, registry_class: type, records: list[dict[str, object]]
    ) -> None:
        writer = registry_class(JsonFileStore(tmp_path))
        for record in records:
            assert writer.add(record).ok
        assert writer.save_all() is True

        reader = registry_class(JsonFileStore(tmp_path))
        assert reader.retrieve_all() == len(records)
        assert reader.instances == writer.instances

    def test_non_ascii_is_written_verbatim(self, tmp_path: Path) -> None:
        registry = BookRegistry(JsonFileStore(tmp_path))
        registry.add(GEB)
        registry.save_all()
        assert "Gödel" in (tmp_path / "books.json").read_text(encoding="utf-8")

    def test_save_all_is_idempotent(self) -> None:
        store = MemoryStore()
        registry = BookRegistry(store)
        registry.add(GEB)
        registry.save_all()
        first = store.get("books")
        registry.save_all()
        assert store.get("books") == first

    def test_missing_and_empty_slot_give_empty_registry(self) -> None:
        assert BookRegistry(MemoryStore()).retrieve_all() == 0
        assert BookRegistry(MemoryStore({"books": "  "})).retrieve_all() == 0

    def test_retrieve_replaces_in_memory_state(self) -> None:
        store = MemoryStore({"books": json.dumps({"0465026567": GEB})})
        registry = BookRegistry(store)
        registry.add({"isbn": "006251587X", "title": "Weaving the Web", "year": 2000})
        registry.retrieve_all()
        assert list(registry.instances) == ["0465026567"]

    def test_invalid_records_are_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Bad records are logged and skipped; good ones still load."""
        records = {
            "0465026567": GEB,
            "0000000000": {"isbn": "0000000000", "title": "Too early", "year": 1200},
            "1111111111": "not an object",
        }
        registry = BookRegistry(MemoryStore({"books": json.dumps(records)}))
        with caplog.at_level(logging.WARNING, logger="catalog_tool.storage.registry"):
            assert registry.retrieve_all() == 1
        assert list(registry.instances) == ["0465026567"]
        assert "INTERVAL" in caplog.text
        assert "1111111111" in caplog.text

    def test_duplicate_keys_in_storage_keep_the_first(self) -> None:
        records = {"7": {"author_id": 7, "name": "First"}, "07": {"author_id": "07", "name": "Second"}}
        registry = AuthorRegistry(MemoryStore({"authors": json.dumps(records)}))
        assert registry.retrieve_all() == 1
        assert registry.instances["7"].name == "First"

    def test_unparseable_json_raises(self) -> None:
        registry = BookRegistry(MemoryStore({"books": "{not json"}))
        with pytest.raises(RegistryCorruptedError, match="books"):
            registry.retrieve_all()

    def test_non_object_json_raises(self) -> None:
        registry = BookRegistry(MemoryStore({"books": "[1, 2]"}))
        with pytest.raises(RegistryCorruptedError, match="expected a JSON object"):
            registry.retrieve_all()

    def test_read_failure_leaves_registry_empty(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = BookRegistry(FailingStore())
        with caplog.at_level(logging.ERROR, logger="catalog_tool.storage.registry"):
            assert registry.retrieve_all() == 0
        assert registry.instances == {}
        assert "permission denied" in caplog.text

    def test_write_failure_returns_false_and_keeps_registry(self) -> None:
        registry = BookRegistry(FailingStore())
        registry.add(GEB)
        assert registry.save_all() is False
        assert list(registry.instances) == ["0465026567"]


class TestUpdate:
    """Tests for BaseRegistry.update."""

    def test_update_changes_given_fields_only(self, books: BookRegistry) -> None:
        books.add({**GEB, "edition": 1})
        result = books.update({"isbn": "0465026567", "edition": 2})
        assert result.ok
        assert result.updated == ["edition"]
        book = books.instances["0465026567"]
        assert book.edition == 2
        assert book.title == "Gödel, Escher, Bach"

    def test_update_with_identical_values_changes_nothing(self, books: BookRegistry) -> None:
        books.add(GEB)
        before = books.instances["0465026567"].model_copy(deep=True)
        result = books.update(dict(GEB))
        assert result.ok
        assert result.updated == []
        assert result.changed is False
        assert books.instances["0465026567"] == before

    def test_update_violation_restores_snapshot(self, books: BookRegistry) -> None:
        """A later invalid field undoes the earlier valid ones."""
        books.add(GEB)
        before = books.instances["0465026567"].model_copy(deep=True)
        result = books.update({"isbn": "0465026567", "title": "GEB", "year": 1000})
        assert result.violation is not None
        assert result.violation.kind is ViolationKind.INTERVAL
        assert result.ok is False
        assert books.instances["0465026567"] == before

    def test_update_unsets_optional_field(self, books: BookRegistry) -> None:
        books.add({**GEB, "publisher_id": "Basic Books"})
        result = books.update({"isbn": "0465026567", "publisher_id": ""})
        assert result.updated == ["publisher_id"]
        assert books.instances["0465026567"].publisher_id is None

    def test_update_unknown_key(self, books: BookRegistry, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="catalog_tool.storage.registry"):
            result = books.update({"isbn": "006251587X", "title": "Weaving the Web"})
        assert result.found is False
        assert result.ok is False
        assert books.instances == {}
        assert "006251587X" in caplog.text

    def test_update_movie_with_unnormalized_key(self) -> None:
        movies = MovieRegistry(MemoryStore())
        movies.add({"movie_id": "3", "title": "Alien", "rating": 4, "genres": [13]})
        result = movies.update({"movie_id": "003", "genres": [13, 5]})
        assert result.updated == ["genres"]
        assert movies.instances["3"].genres == [13, 5]


class TestDestroyAndQueries:
    """Tests for destroy and the query helpers."""

    def test_destroy_present_key(self, books: BookRegistry) -> None:
        books.add(GEB)
        books.add({"isbn": "006251587X", "title": "Weaving the Web", "year": 2000})
        assert books.destroy("0465026567") is True
        assert list(books.instances) == ["006251587X"]

    def test_destroy_absent_key(self, books: BookRegistry) -> None:
        books.add(GEB)
        assert books.destroy("006251587X") is False
        assert list(books.instances) == ["0465026567"]

    def test_get_exists_count(self) -> None:
        authors = AuthorRegistry(MemoryStore())
        authors.add({"author_id": 1, "name": "Douglas Hofstadter"})
        assert authors.get(" 01 ") is authors.instances["1"]
        assert authors.get(2) is None
        assert authors.exists(1) is True
        assert authors.count() == 1

    def test_list_entries_sorts_numeric_keys_numerically(self) -> None:
        authors = AuthorRegistry(MemoryStore())
        for author_id in (10, 2, 1):
            authors.add({"author_id": author_id, "name": f"Author {author_id}"})
        assert [a.author_id for a in authors.list_entries()] == [1, 2, 10]

    def test_clear_persists_empty_registry(self) -> None:
        store = MemoryStore()
        publishers = PublisherRegistry(store)
        publishers.add({"name": "Basic Books", "address": "New York"})
        publishers.save_all()
        assert publishers.clear() == 1
        assert publishers.instances == {}
        assert json.loads(store.get("publishers") or "") == {}

    def test_clear_failure_raises_and_keeps_entries(self) -> None:
        """When the empty registry cannot be written, nothing is cleared."""
        stored = json.dumps({"Basic Books": {"name": "Basic Books", "address": "New York"}})
        store = ReadOnlyMemoryStore({"publishers": stored})
        publishers = PublisherRegistry(store)
        assert publishers.retrieve_all() == 1
        with pytest.raises(RegistryError, match="still stored") as excinfo:
            publishers.clear()
        assert excinfo.value.entity_type == "publisher"
        assert list(publishers.instances) == ["Basic Books"]
        assert store.slots == {"publishers": stored}

    def test_books_by_author_and_publisher(self, books: BookRegistry) -> None:
        books.add({**GEB, "author_ids": [1], "publisher_id": "Basic Books"})
        books.add({"isbn": "006251587X", "title": "Weaving the Web", "year": 2000, "author_ids": [2]})
        assert [b.isbn for b in books.books_by_author(1)] == ["0465026567"]
        assert [b.isbn for b in books.books_by_publisher("Basic Books")] == ["0465026567"]
        assert books.books_by_author(3) == []


class TestRegistrySlots:
    """Each registry persists into its own slot."""

    @pytest.mark.parametrize(
        ("registry_class", "slot"),
        [
            (BookRegistry, "books"),
            (MovieRegistry, "movies"),
            (AuthorRegistry, "authors"),
            (PublisherRegistry, "publishers"),
        ],
    )
    def test_storage_key(self, registry_class: type, slot: str) -> None:
        store = MemoryStore()
        registry_class(store).save_all()
        assert store.slots == {slot: "{}"}
