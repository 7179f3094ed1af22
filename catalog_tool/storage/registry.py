"""Registries for catalog-tool entities.

A registry is the in-memory collection of one entity kind, keyed by primary
key, plus the bulk load/save that mirrors it into a KeyValueStore slot. All
registries share their behaviour through BaseRegistry; subclasses only name
the model class, the entity and the storage slot.

Registries are plain objects that receive their store on construction, so a
caller (the CLI, a test) owns each registry and decides where it persists.

Classes:
    BaseRegistry: Generic registry over an Entity subclass.
    BookRegistry: Books, slot "books".
    MovieRegistry: Movies, slot "movies".
    AuthorRegistry: Authors, slot "authors".
    PublisherRegistry: Publishers, slot "publishers".

Exceptions:
    RegistryError: Base exception for registry operations.
    RegistryCorruptedError: The persisted blob is not a JSON object.
"""

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from catalog_tool.logging_config import get_logger
from catalog_tool.models import Author, Book, Entity, Movie, Publisher
from catalog_tool.storage.store import KeyValueStore, StorageError
from catalog_tool.violations import Result, UpdateResult

logger = get_logger(__name__)


class RegistryError(Exception):
    """Base exception for registry operations.

    Attributes:
        entity_type: Entity kind involved (book/movie/...).
    """

    def __init__(self, message: str, entity_type: str = "entry") -> None:
        self.entity_type = entity_type
        super().__init__(message)


class RegistryCorruptedError(RegistryError):
    """Raised when the persisted registry cannot be parsed.

    Example:
        >>> raise RegistryCorruptedError("book", "books", parse_error)
    """

    def __init__(self, entity_type: str, slot: str, original_error: Exception) -> None:
        message = (
            f"{entity_type.capitalize()} registry in storage slot '{slot}' is corrupted. "
            f"Error: {original_error}. "
            f"Recovery options: "
            f"1) Manually fix the JSON syntax error in the slot's file. "
            f"2) Run '{entity_type} clear' to start over with an empty registry."
        )
        super().__init__(message, entity_type)


class BaseRegistry[T: Entity](ABC):
    """Generic in-memory registry mirrored into one storage slot.

    Subclasses provide model_class, entity_name and storage_key.

    Attributes:
        store: Where the registry is persisted.
        instances: Primary key to entity. Populated by retrieve_all(); read
            it directly for rendering.

    Methods:
        retrieve_all: Rebuild instances from the store.
        add: Validate slots and insert the new entity.
        update: Apply changed fields, rolling back on a violation.
        destroy: Remove an entity by key.
        save_all: Persist instances wholesale.
        get, exists, count, list_entries, clear: Conveniences.

    Example:
        >>> registry = BookRegistry(MemoryStore())
        >>> registry.retrieve_all()
        0
        >>> registry.add({"isbn": "0465026567", "title": "Gödel, Escher, Bach", "year": 1999}).ok
        True
        >>> registry.save_all()
        True
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self.instances: dict[str, T] = {}

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """The Entity subclass held by this registry."""
        ...

    @property
    @abstractmethod
    def entity_name(self) -> str:
        """Lowercase entity name for messages (book/movie/...)."""
        ...

    @property
    @abstractmethod
    def storage_key(self) -> str:
        """Name of the store slot (books/movies/...)."""
        ...

    # =========================================================================
    # Load / Save
    # =========================================================================

    def retrieve_all(self) -> int:
        """Rebuild the registry from its storage slot.

        Every record goes through full construction validation. Records that
        fail are logged and skipped; the others load. A missing or empty
        slot, or a slot that cannot be read, leaves the registry empty.

        Returns:
            Number of entities loaded.

        Raises:
            RegistryCorruptedError: If the slot holds something other than a
                JSON object.
        """
        self.instances.clear()
        try:
            blob = self.store.get(self.storage_key)
        except StorageError as e:
            logger.error("Error when reading the %s registry: %s", self.entity_name, e)
            return 0
        if not blob or not blob.strip():
            logger.debug("No stored %s records", self.entity_name)
            return 0

        try:
            records = json.loads(blob)
        except json.JSONDecodeError as e:
            logger.error("Failed to parse %s registry: %s", self.entity_name, e)
            raise RegistryCorruptedError(self.entity_name, self.storage_key, e) from e
        if not isinstance(records, dict):
            raise RegistryCorruptedError(
                self.entity_name,
                self.storage_key,
                TypeError(f"expected a JSON object, got {type(records).__name__}"),
            )

        for key, record in records.items():
            entity = self._convert_record(key, record)
            if entity is not None:
                self.instances[entity.key] = entity
        logger.info("%d %s records loaded", len(self.instances), self.entity_name)
        return len(self.instances)

    def _convert_record(self, key: str, record: Any) -> T | None:
        if not isinstance(record, dict):
            logger.warning(
                "Skipping %s record '%s': expected an object, got %s",
                self.entity_name,
                key,
                type(record).__name__,
            )
            return None
        result = self.model_class.create(record, self.instances)
        if result.violation is not None:
            logger.warning(
                "%s while deserializing %s record '%s': %s",
                result.violation.kind.name,
                self.entity_name,
                key,
                result.violation,
            )
            return None
        entity = result.value
        if entity is not None and entity.key != key:
            logger.warning(
                "%s record stored under '%s' has key '%s'; using '%s'",
                self.entity_name.capitalize(),
                key,
                entity.key,
                entity.key,
            )
        return entity

    def save_all(self) -> bool:
        """Write the whole registry to its storage slot.

        Safe to call repeatedly: it always serializes current state. The
        in-memory registry is never modified.

        Returns:
            True on success, False if the store rejected the write.
        """
        data = {key: entity.to_record() for key, entity in self.instances.items()}
        blob = json.dumps(data, indent=2, ensure_ascii=False)
        try:
            self.store.set(self.storage_key, blob)
        except StorageError as e:
            logger.error("Error when writing the %s registry: %s", self.entity_name, e)
            return False
        logger.info("%d %s records saved", len(data), self.entity_name)
        return True

    # =========================================================================
    # Create / Update / Destroy
    # =========================================================================

    def add(self, slots: Mapping[str, Any]) -> Result[T]:
        """Validate slots and insert the resulting entity.

        The primary key must not already be registered; a duplicate is
        reported as a uniqueness violation and nothing changes.

        Args:
            slots: Field name to raw value.

        Returns:
            Result with the new entity or the violation that rejected it.
        """
        result = self.model_class.create(slots, self.instances)
        if result.violation is not None:
            logger.warning(
                "%s: %s not added: %s",
                result.violation.kind.name,
                self.entity_name.capitalize(),
                result.violation,
            )
            return result
        entity = result.unwrap()
        self.instances[entity.key] = entity
        logger.info("%s created", entity)
        return result

    def update(self, slots: Mapping[str, Any]) -> UpdateResult:
        """Apply the changed fields of slots to an existing entity.

        slots must carry the primary key. Every other field present in slots
        is assigned through its setter; fields absent from slots are left
        alone, and None or "" unsets an optional field. On the first
        violation the entity is restored from a snapshot taken beforehand.

        Returns:
            UpdateResult listing the fields that changed (possibly none),
            or the violation, or found=False for an unknown key.
        """
        key_field = self.model_class.key_field
        key = self.model_class.normalize_key(slots.get(key_field, ""))
        entity = self.instances.get(key)
        if entity is None:
            logger.warning("There is no %s with %s '%s' in the registry", self.entity_name, key_field, key)
            return UpdateResult(key, found=False)

        snapshot = entity.model_copy(deep=True)
        fields = [name for name in self.model_class.updatable_fields() if name in slots]
        for name in fields:
            violation = entity.assign(name, slots[name])
            if violation is not None:
                self.instances[key] = snapshot
                logger.warning(
                    "%s: %s '%s' not updated: %s",
                    violation.kind.name,
                    self.entity_name.capitalize(),
                    key,
                    violation,
                )
                return UpdateResult(key, violation=violation)

        updated = [name for name in fields if getattr(entity, name) != getattr(snapshot, name)]
        if updated:
            logger.info(
                "Properties %s modified for %s '%s'",
                ", ".join(updated),
                self.entity_name,
                key,
            )
        else:
            logger.info("No property value changed for %s '%s'", self.entity_name, key)
        return UpdateResult(key, updated=updated)

    def destroy(self, key: Any) -> bool:
        """Remove the entity stored under key.

        Returns:
            True if it was removed, False if there was no such entity.
        """
        normalized = self.model_class.normalize_key(key)
        entity = self.instances.pop(normalized, None)
        if entity is None:
            logger.warning("There is no %s with key '%s' in the registry", self.entity_name, normalized)
            return False
        logger.info("%s deleted", entity)
        return True

    # =========================================================================
    # Queries
    # =========================================================================

    def get(self, key: Any) -> T | None:
        """Return the entity for key, or None."""
        return self.instances.get(self.model_class.normalize_key(key))

    def exists(self, key: Any) -> bool:
        return self.model_class.normalize_key(key) in self.instances

    def count(self) -> int:
        return len(self.instances)

    def list_entries(self) -> list[T]:
        """All entities sorted by key (numeric keys in numeric order)."""
        return [self.instances[key] for key in sorted(self.instances, key=_sort_key)]

    def clear(self) -> int:
        """Remove every entity and persist the empty registry.

        Returns:
            Number of entities removed.

        Raises:
            RegistryError: If the empty registry could not be saved. The
                entities are kept in memory, matching what is still stored.
        """
        removed = dict(self.instances)
        self.instances.clear()
        if not self.save_all():
            self.instances.update(removed)
            raise RegistryError(
                f"Could not clear the {self.entity_name} registry: saving the empty registry "
                f"to storage slot '{self.storage_key}' failed, so all {len(removed)} "
                f"{self.entity_name} records are still stored. "
                f"Check free disk space and permissions on the data directory, then retry.",
                self.entity_name,
            )
        logger.info("Cleared %d %s records", len(removed), self.entity_name)
        return len(removed)


def _sort_key(key: str) -> tuple[int, int, str]:
    if key.isdigit():
        return (0, int(key), key)
    return (1, 0, key)


class BookRegistry(BaseRegistry[Book]):
    """Registry of books keyed by ISBN (slot "books")."""

    @property
    def model_class(self) -> type[Book]:
        return Book

    @property
    def entity_name(self) -> str:
        return "book"

    @property
    def storage_key(self) -> str:
        return "books"

    def books_by_author(self, author_id: int) -> list[Book]:
        """Books that list author_id among their authors, sorted by ISBN."""
        return [book for book in self.list_entries() if author_id in book.author_ids]

    def books_by_publisher(self, publisher_name: str) -> list[Book]:
        """Books published by publisher_name, sorted by ISBN."""
        return [book for book in self.list_entries() if book.publisher_id == publisher_name]


class MovieRegistry(BaseRegistry[Movie]):
    """Registry of movies keyed by movie id (slot "movies")."""

    @property
    def model_class(self) -> type[Movie]:
        return Movie

    @property
    def entity_name(self) -> str:
        return "movie"

    @property
    def storage_key(self) -> str:
        return "movies"


class AuthorRegistry(BaseRegistry[Author]):
    """Registry of authors keyed by author id (slot "authors")."""

    @property
    def model_class(self) -> type[Author]:
        return Author

    @property
    def entity_name(self) -> str:
        return "author"

    @property
    def storage_key(self) -> str:
        return "authors"


class PublisherRegistry(BaseRegistry[Publisher]):
    """Registry of publishers keyed by name (slot "publishers")."""

    @property
    def model_class(self) -> type[Publisher]:
        return Publisher

    @property
    def entity_name(self) -> str:
        return "publisher"

    @property
    def storage_key(self) -> str:
        return "publishers"
