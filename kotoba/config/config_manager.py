"""Persistent settings manager with JSON storage and environment fallback."""

import copy
import json
import logging
import os
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional

from .settings import Config

logger = logging.getLogger(__name__)


class SettingsManager:
    """
    Manages user settings with JSON persistence.

    Settings are loaded from a JSON file with fallback to environment variables.
    Changes are immediately persisted to disk.

    Usage:
        settings = SettingsManager()
        collection = settings.get("ACTIVE_COLLECTION", "All")
        settings.set("ACTIVE_COLLECTION", "JLPT N5")
    """

    _instance: Optional["SettingsManager"] = None
    _lock: Lock = Lock()

    # Default values for all settings
    DEFAULTS: Dict[str, Any] = {
        # Collections
        "DEFAULT_COLLECTION": Config.DEFAULT_COLLECTION,
        "ACTIVE_COLLECTION": Config.ALL_FILTER,
        "ACTIVE_GROUP": Config.ALL_FILTER,

        # Import behaviour
        "IMPORT_GROUP": Config.IMPORT_GROUP,

        # Storage
        "STORE_BACKEND": Config.STORE_BACKEND,
        "STORE_FILE": Config.STORE_FILE,

        # Logging
        "LOG_LEVEL": Config.LOG_LEVEL,
        "LOG_TO_FILE": False,
    }

    def __new__(cls, settings_file: Optional[str] = None) -> "SettingsManager":
        """Singleton pattern to ensure only one instance exists."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    instance = super().__new__(cls)
                    instance._initialized = False
                    cls._instance = instance
        return cls._instance

    def __init__(self, settings_file: Optional[str] = None) -> None:
        """
        Initialize the settings manager.

        Args:
            settings_file: Path to the settings JSON file.
                          Defaults to Config.SETTINGS_FILE.
        """
        if getattr(self, "_initialized", False):
            return

        self._settings_file: Path = Path(settings_file or Config.SETTINGS_FILE)
        self._settings: Dict[str, Any] = {}
        self._file_lock: Lock = Lock()

        self._load_settings()
        self._initialized = True

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _load_settings(self) -> None:
        """Load settings from JSON file with environment variable fallback."""
        # Start with defaults
        self._settings = copy.deepcopy(self.DEFAULTS)

        # Load from file if exists
        if self._settings_file.exists():
            try:
                with open(self._settings_file, "r", encoding="utf-8") as f:
                    file_settings = json.load(f)
                if isinstance(file_settings, dict):
                    self._settings.update(file_settings)
                else:
                    logger.warning("Ignoring settings file %s: not a JSON object", self._settings_file)
            except (json.JSONDecodeError, IOError) as e:
                # Continue with defaults
                logger.warning("Could not load settings file: %s", e)

        # Override with environment variables (highest priority)
        for key in self.DEFAULTS:
            env_value = os.environ.get(f"KOTOBA_{key}")
            if env_value is not None:
                self._settings[key] = self._parse_env_value(env_value, key)

        # Ensure file exists with current settings
        self._save_settings()

    def _parse_env_value(self, value: str, key: str) -> Any:
        """
        Parse environment variable value to appropriate type.

        Args:
            value: The string value from environment
            key: The setting key (used to infer expected type)

        Returns:
            Parsed value in appropriate type
        """
        default = self.DEFAULTS.get(key)

        if isinstance(default, bool):
            return value.lower() in ("true", "1", "yes", "on")
        elif isinstance(default, int):
            try:
                return int(value)
            except ValueError:
                return default
        elif isinstance(default, float):
            try:
                return float(value)
            except ValueError:
                return default
        else:
            return value

    def _save_settings(self) -> None:
        """Save current settings to JSON file."""
        with self._file_lock:
            try:
                self._settings_file.parent.mkdir(parents=True, exist_ok=True)

                with open(self._settings_file, "w", encoding="utf-8") as f:
                    json.dump(self._settings, f, indent=2, ensure_ascii=False)
            except IOError as e:
                logger.warning("Could not save settings file: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value.

        Returns a deep copy for mutable objects (dict, list) to prevent
        accidental modification of internal state.

        Args:
            key: The setting key
            default: Default value if key not found

        Returns:
            The setting value (copy for mutable types), or default if not found
        """
        value = self._settings.get(key, default)
        if isinstance(value, (dict, list)):
            return copy.deepcopy(value)
        return value

    def set(self, key: str, value: Any, persist: bool = True) -> None:
        """
        Set a setting value and immediately persist to disk.

        Args:
            key: The setting key
            value: The value to set
            persist: Write the settings file right away
        """
        self._settings[key] = value
        if persist:
            self._save_settings()

    def get_all(self) -> Dict[str, Any]:
        """Get a copy of all current settings."""
        return copy.deepcopy(self._settings)

    def reset(self, key: Optional[str] = None) -> None:
        """
        Reset settings to defaults.

        Args:
            key: Specific key to reset. If None, resets all settings.
        """
        if key is not None:
            if key in self.DEFAULTS:
                self._settings[key] = self.DEFAULTS[key]
        else:
            self._settings = copy.deepcopy(self.DEFAULTS)

        self._save_settings()

    def reload(self) -> None:
        """Reload settings from disk."""
        self._load_settings()

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance. Useful for testing."""
        with cls._lock:
            cls._instance = None
