"""Storage module for catalog-tool.

Registries for books, movies, authors and publishers, the key-value stores
they persist into, and path management utilities.

Classes:
    BaseRegistry: Abstract base class for registry implementations.
    BookRegistry: Registry for books (slot "books").
    MovieRegistry: Registry for movies (slot "movies").
    AuthorRegistry: Registry for authors (slot "authors").
    PublisherRegistry: Registry for publishers (slot "publishers").
    KeyValueStore: Abstract store interface.
    JsonFileStore: One JSON file per slot.
    MemoryStore: Dict-backed store.

Exceptions:
    RegistryError: Base exception for registry operations.
    RegistryCorruptedError: Raised when a persisted registry is corrupted.
    StorageError: Base exception for store failures.
    StorageReadError: Raised when a slot cannot be read.
    StorageWriteError: Raised when a slot cannot be written.

Functions:
    get_config_dir: Get the main configuration directory.
    get_settings_path: Get the path to settings.json.
    get_default_data_dir: Get the default registry directory.
    ensure_dir: Create a directory and its parents.
"""

from catalog_tool.storage.paths import (
    ensure_dir,
    get_config_dir,
    get_default_data_dir,
    get_settings_path,
)
from catalog_tool.storage.registry import (
    AuthorRegistry,
    BaseRegistry,
    BookRegistry,
    MovieRegistry,
    PublisherRegistry,
    RegistryCorruptedError,
    RegistryError,
)
from catalog_tool.storage.store import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    # Registries
    "AuthorRegistry",
    "BaseRegistry",
    "BookRegistry",
    "MovieRegistry",
    "PublisherRegistry",
    # Stores
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    # Exceptions
    "RegistryCorruptedError",
    "RegistryError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Path functions
    "ensure_dir",
    "get_config_dir",
    "get_default_data_dir",
    "get_settings_path",
]
