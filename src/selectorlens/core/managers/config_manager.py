# src/selectorlens/core/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Optional

from selectorlens.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0"}


def _cast_like(original: Any, value: Any) -> Any:
    """
    Casts 'value' to the type of 'original'.
    Booleans are parsed from words because bool("false") is True.
    """
    if isinstance(original, bool):
        if isinstance(value, bool):
            return value
        word = str(value).strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"'{value}' is not a boolean")
    if isinstance(original, list) and isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return type(original)(value)


def set_nested_value(config: Dict[str, Any], key_path: str, value: Any) -> bool:
    """
    Sets a dotted key in a nested dictionary, casting the value to the type
    of the value it replaces.
    """
    keys = key_path.split('.')
    d = config
    # Navigate to the second-to-last dictionary
    for key in keys[:-1]:
        d = d.setdefault(key, {})
        if not isinstance(d, dict):
            logger.error("Cannot set value: '%s' is not a dictionary.", key)
            return False

    # Get the original value to determine the type
    original_value = d.get(keys[-1])
    if original_value is not None:
        try:
            value = _cast_like(original_value, value)
        except (ValueError, TypeError):
            logger.error(
                "Could not cast new value for '%s' to type %s.",
                key_path, type(original_value).__name__
            )
            return False

    d[keys[-1]] = value
    return True


class ConfigManager:
    """
    A singleton class to manage the application's configuration.
    It loads settings from settings.json and allows for in-memory modifications.
    Nothing is ever written back to disk.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Loads the configuration from the file."""
        self._config: Dict[str, Any] = {}
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_all(self) -> Dict[str, Any]:
        """Returns the entire current configuration dictionary."""
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value from the configuration.
        e.g., 'scan.naming.enforceBEM'.
        """
        keys = key_path.split('.')
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Sets a nested value in the in-memory configuration.
        e.g., 'scan.naming.enforceBEM', 'true'
        """
        if not set_nested_value(self._config, key_path, value):
            return False
        logger.info("Configuration updated: %s = %s", key_path, self.get_nested(key_path))
        return True

    def reset(self):
        """Resets the in-memory configuration from the settings.json file."""
        try:
            config_path = PathUtils.get_settings_file()
            if not config_path.exists():
                logger.warning("settings.json not found at %s. Using empty config.", config_path)
                self._config = {}
                return
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = json.load(f)
            logger.info("Configuration has been (re)loaded from settings.json.")
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            self._config = {}


# The global singleton instance that the entire application will use.
config_manager = ConfigManager()
