"""Configuration management for Cukai.

settings.json holds machine-specific settings:
   - organization: business name printed on SST-02 exports
   - categories_file: path to a categories.yaml overriding the bundled rules
   - data_dir: where relative record file paths are looked up when they are
     not found in the current directory

Config directory resolution:
1. CUKAI_CONFIG_PATH environment variable (if set)
2. ~/.config/cukai/ (XDG_CONFIG_HOME fallback)

Data path follows XDG spec unless data_dir is set:
- Data: XDG_DATA_HOME/cukai/ or ~/.local/share/cukai/
"""

import json
import os
from pathlib import Path
from typing import Any, Optional


APP_NAME = "cukai"
SETTINGS_FILENAME = "settings.json"
CATEGORIES_FILENAME = "categories.yaml"

KNOWN_SETTINGS = ("organization", "categories_file", "data_dir")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. CUKAI_CONFIG_PATH environment variable
    2. ~/.config/cukai/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("CUKAI_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Raises:
        KeyError: If key is not a known setting
    """
    if key not in KNOWN_SETTINGS:
        raise KeyError(f"Unknown setting '{key}'. Known settings: {', '.join(KNOWN_SETTINGS)}")

    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def get_categories_override_path() -> Optional[Path]:
    """Get the user's category rules override file, if one exists.

    Uses the categories_file setting, else categories.yaml in the config dir.
    """
    configured = get_setting("categories_file")
    if configured:
        return Path(configured).expanduser()

    default = get_config_dir() / CATEGORIES_FILENAME
    return default if default.exists() else None


def get_data_path() -> Path:
    """Get the data directory path.

    Returns:
        data_dir setting if set, else XDG_DATA_HOME/cukai/ (created if doesn't exist)
    """
    configured = get_setting("data_dir")
    if configured:
        data_path = Path(configured).expanduser()
    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
        data_path = Path(xdg_data_home) / APP_NAME
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path
