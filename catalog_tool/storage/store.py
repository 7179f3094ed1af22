"""Key-value stores that hold the serialized registries.

A store maps a slot name ("books", "movies", ...) to one string, the JSON
dump of a whole registry. Stores only move strings around; they know
nothing about entities.

Classes:
    KeyValueStore: Abstract interface.
    JsonFileStore: One <slot>.json file per slot, written atomically.
    MemoryStore: Dict-backed store for tests and throwaway sessions.

Exceptions:
    StorageError: Base for store failures.
    StorageReadError: A slot could not be read.
    StorageWriteError: A slot could not be written.
"""

import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from catalog_tool.logging_config import get_logger

logger = get_logger(__name__)

_SLOT_PATTERN = re.compile(r"^[a-z][a-z0-9_-]*$")


class StorageError(Exception):
    """Base exception for store failures.

    Attributes:
        slot: Name of the slot involved.
    """

    def __init__(self, message: str, slot: str) -> None:
        self.slot = slot
        super().__init__(message)


class StorageReadError(StorageError):
    """Raised when a slot exists but cannot be read."""

    def __init__(self, slot: str, original_error: Exception) -> None:
        super().__init__(
            f"Could not read storage slot '{slot}': {original_error}. "
            f"Check that the data directory exists and is readable.",
            slot,
        )


class StorageWriteError(StorageError):
    """Raised when a slot cannot be written. The previous content is kept."""

    def __init__(self, slot: str, original_error: Exception) -> None:
        super().__init__(
            f"Could not write storage slot '{slot}': {original_error}. "
            f"The previously saved data was left in place. "
            f"Check free disk space and permissions on the data directory.",
            slot,
        )


class KeyValueStore(ABC):
    """String-keyed slots holding string values."""

    @abstractmethod
    def get(self, slot: str) -> str | None:
        """Return the slot's content, or None if the slot was never written.

        Raises:
            StorageReadError: If the slot exists but cannot be read.
        """
        ...

    @abstractmethod
    def set(self, slot: str, value: str) -> None:
        """Replace the slot's content.

        Raises:
            StorageWriteError: If the content could not be stored.
        """
        ...

    @abstractmethod
    def remove(self, slot: str) -> None:
        """Delete a slot; missing slots are ignored."""
        ...


class JsonFileStore(KeyValueStore):
    """Stores each slot as <directory>/<slot>.json.

    Writes go to a temporary file in the same directory which then replaces
    the target with os.replace, so a crash mid-write never leaves a
    half-written registry behind.

    Example:
        >>> store = JsonFileStore(Path("/tmp/catalog"))
        >>> store.set("books", "{}")
        >>> store.get("books")
        '{}'
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def path_for(self, slot: str) -> Path:
        if not _SLOT_PATTERN.match(slot):
            raise ValueError(
                f"Invalid storage slot name: '{slot}'. "
                f"Use lowercase letters, digits, '-' or '_', starting with a letter."
            )
        return self.directory / f"{slot}.json"

    def get(self, slot: str) -> str | None:
        path = self.path_for(slot)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Storage slot '%s' not found at %s", slot, path)
            return None
        except OSError as e:
            raise StorageReadError(slot, e) from e

    def set(self, slot: str, value: str) -> None:
        path = self.path_for(slot)
        tmp_name: str | None = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self.directory,
                prefix=f".{slot}-",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(value)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageWriteError(slot, e) from e
        logger.debug("Wrote %d characters to %s", len(value), path)

    def remove(self, slot: str) -> None:
        self.path_for(slot).unlink(missing_ok=True)

    def __repr__(self) -> str:
        return f"JsonFileStore({str(self.directory)!r})"


class MemoryStore(KeyValueStore):
    """In-process store; contents vanish with the object."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.slots: dict[str, str] = dict(initial or {})

    def get(self, slot: str) -> str | None:
        return self.slots.get(slot)

    def set(self, slot: str, value: str) -> None:
        self.slots[slot] = value

    def remove(self, slot: str) -> None:
        self.slots.pop(slot, None)
