"""Path management for catalog-tool.

All persistent state lives under one configuration directory, by default
~/.config/catalog-tool/. Set CATALOG_TOOL_HOME to move it (tests and
sandboxes do this).

Functions:
    get_config_dir: The configuration directory.
    get_settings_path: Path to settings.json.
    get_default_data_dir: Where registry files go when no data_dir is set.
    ensure_dir: Create a directory and its parents.
"""

import os
from pathlib import Path

CONFIG_DIR_ENV_VAR = "CATALOG_TOOL_HOME"


def get_config_dir() -> Path:
    """Get the configuration directory.

    Returns:
        $CATALOG_TOOL_HOME if set, else ~/.config/catalog-tool/

    Example:
        >>> get_config_dir().name
        'catalog-tool'
    """
    override = os.environ.get(CONFIG_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "catalog-tool"


def get_settings_path() -> Path:
    """Get the path to the settings file (settings.json in the config dir)."""
    return get_config_dir() / "settings.json"


def get_default_data_dir() -> Path:
    """Registry files live next to settings.json unless data_dir is configured."""
    return get_config_dir()


def ensure_dir(path: Path) -> Path:
    """Create path (and parents) if missing and return it. Idempotent."""
    path.mkdir(parents=True, exist_ok=True)
    return path
