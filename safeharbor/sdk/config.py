"""Configuration management for Safe Harbor.

Two kinds of state live on disk, both outside the calculation core:

1. settings.json - Machine-specific settings in the config directory
   - tax_year: default tax year for calculations
   - data_dir: custom data directory
   - default_output_format: text or json

2. inputs.json - The last raw input strings, in the data directory
   - Keys are namespaced with KEY_PREFIX so clear() leaves other
     entries in a shared file alone

Config directory resolution:
1. SAFE_HARBOR_CONFIG_PATH environment variable (if set)
2. ~/.config/safe-harbor-tax/ (XDG_CONFIG_HOME fallback)

Data directory resolution:
1. settings.json "data_dir" key (if set via CLI)
2. XDG_DATA_HOME/safe-harbor-tax/ or ~/.local/share/safe-harbor-tax/
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

APP_NAME = "safe-harbor-tax"
SETTINGS_FILENAME = "settings.json"
INPUTS_FILENAME = "inputs.json"
KEY_PREFIX = "safe-harbor-tax-"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. SAFE_HARBOR_CONFIG_PATH environment variable
    2. ~/.config/safe-harbor-tax/ (XDG_CONFIG_HOME)
    """
    env_path = os.environ.get("SAFE_HARBOR_CONFIG_PATH")
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
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json."""
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def get_data_path() -> Path:
    """Get the data directory path.

    Returns:
        Path to the data directory (created if doesn't exist)
    """
    custom = get_setting("data_dir")
    if custom:
        data_path = Path(custom).expanduser()
    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
        data_path = Path(xdg_data_home) / APP_NAME
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path


class InputStore:
    """Key-value store for raw input strings, backed by a JSON file.

    Keys passed in are short names ("filing-status"); they are stored
    under KEY_PREFIX so clear() only removes this tool's entries. A
    missing or unreadable file behaves like an empty store.
    """

    def __init__(self, path: Optional[Path] = None, prefix: str = KEY_PREFIX):
        self._path = path
        self.prefix = prefix

    @property
    def path(self) -> Path:
        if self._path is None:
            self._path = get_data_path() / INPUTS_FILENAME
        return self._path

    def _full_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Error reading stored inputs {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring stored inputs {self.path}: expected a JSON object")
            return {}
        return data

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2)

    def load(self, key: str) -> Optional[Any]:
        """Get a stored value, or None if never saved."""
        return self._read().get(self._full_key(key))

    def save(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value."""
        data = self._read()
        data[self._full_key(key)] = value
        self._write(data)

    def load_all(self) -> dict:
        """All stored values under this prefix, keyed by short name."""
        return {
            k[len(self.prefix):]: v
            for k, v in self._read().items()
            if k.startswith(self.prefix)
        }

    def clear(self, prefix: Optional[str] = None) -> int:
        """Remove every key starting with prefix (default: this store's prefix).

        Returns:
            Number of keys removed
        """
        prefix = self.prefix if prefix is None else prefix
        data = self._read()
        keep = {k: v for k, v in data.items() if not k.startswith(prefix)}
        removed = len(data) - len(keep)
        if removed:
            self._write(keep)
        return removed
