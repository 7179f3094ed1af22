"""Settings management for catalog-tool.

Global settings persist across CLI sessions in settings.json inside the
configuration directory.

Functions:
    load_settings: Load settings from disk.
    save_settings: Save settings to disk.
    get_data_dir: Directory holding the registry files.
    set_data_dir: Point the registries at another directory.
    clear_data_dir: Go back to the default data directory.
    get_store: JsonFileStore over the current data directory.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from catalog_tool.logging_config import get_logger
from catalog_tool.models import Settings
from catalog_tool.storage.paths import get_default_data_dir, get_settings_path
from catalog_tool.storage.store import JsonFileStore

logger = get_logger(__name__)


def load_settings() -> Settings:
    """Load settings from disk.

    Returns:
        Settings object. Defaults when the file is missing or unreadable.

    Example:
        >>> settings = load_settings()
        >>> print(settings.data_dir)
    """
    settings_path = get_settings_path()

    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, encoding="utf-8") as f:
            data = json.load(f)
        return Settings.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.warning("Failed to load settings from %s: %s", settings_path, e)
        return Settings()


def save_settings(settings: Settings) -> None:
    """Save settings to disk.

    Args:
        settings: Settings object to save.
    """
    settings_path = get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    with open(settings_path, "w", encoding="utf-8") as f:
        json.dump(settings.model_dump(), f, indent=2)

    logger.debug("Saved settings to %s", settings_path)


def get_data_dir() -> Path:
    """Directory holding the registry files.

    Returns:
        The configured data_dir, or the configuration directory if unset.
    """
    settings = load_settings()
    if settings.data_dir:
        return Path(settings.data_dir).expanduser()
    return get_default_data_dir()


def set_data_dir(data_dir: str | Path) -> Path:
    """Store data_dir (made absolute) in the settings and return it.

    Example:
        >>> set_data_dir("~/catalog")
    """
    path = Path(data_dir).expanduser().resolve()
    settings = load_settings()
    settings.data_dir = str(path)
    save_settings(settings)
    logger.info("Set data directory to '%s'", path)
    return path


def clear_data_dir() -> None:
    """Remove the data_dir setting."""
    settings = load_settings()
    settings.data_dir = None
    save_settings(settings)
    logger.info("Cleared data directory setting")


def get_store() -> JsonFileStore:
    """File store over the current data directory."""
    return JsonFileStore(get_data_dir())
