# report_export/config/manager.py
"""
Configuration manager - handles loading, saving, validation, and access.
Supports runtime updates and persistence.
"""

import json
import os
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional

from report_export.config.schema import (
    BrandingSettings,
    ExportSettings,
    CacheSettings,
    ServerSettings,
    PathSettings,
)


class ConfigurationManager:
    """
    Centralized configuration manager.
    - Loads from file or uses defaults
    - Validates changes
    - Persists updates
    - Thread-safe access
    """

    _instance = None
    _lock = Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._config_file: Optional[Path] = None
        self._settings: Dict[str, Any] = {}
        self._change_callbacks: Dict[str, list] = {}
        self._lock = Lock()

        self._init_defaults()
        self._initialized = True

    def _init_defaults(self):
        """Initialize all settings with default values."""
        self._settings = {
            'branding': BrandingSettings(),
            'export': ExportSettings(),
            'cache': CacheSettings(),
            'server': ServerSettings(),
            'paths': PathSettings(),
        }

    def initialize(self, config_file: Optional[str] = None, base_dir: Optional[str] = None):
        """
        Initialize configuration from file, environment and defaults.

        Args:
            config_file: Path to JSON config file
            base_dir: Base directory for relative paths
        """
        with self._lock:
            if base_dir:
                self._settings['paths'].base_dir = base_dir
            else:
                self._settings['paths'].base_dir = str(Path(__file__).parent.parent.parent)

            if config_file:
                self._config_file = Path(config_file)
                if not self._config_file.is_absolute():
                    self._config_file = Path(self._settings['paths'].base_dir) / self._config_file
                if self._config_file.exists():
                    self._load_from_file()

            self._apply_environment()
            self._resolve_paths()

    def _apply_environment(self):
        """Environment variables override file values."""
        if os.getenv("LOG_LEVEL"):
            self._settings['server'].log_level = os.environ["LOG_LEVEL"].upper()
        if os.getenv("REPORT_CACHE_TTL"):
            self._settings['cache'].ttl_seconds = int(os.environ["REPORT_CACHE_TTL"])
        if os.getenv("REPORT_OUTPUTS_DIR"):
            self._settings['paths'].outputs_dir = os.environ["REPORT_OUTPUTS_DIR"]

    def _resolve_paths(self):
        """Resolve relative paths against the base directory."""
        base = Path(self._settings['paths'].base_dir)
        paths = self._settings['paths']
        paths.outputs_dir = str(base / paths.outputs_dir)

    def _load_from_file(self):
        """Load configuration from JSON file."""
        try:
            with open(self._config_file, 'r') as f:
                data = json.load(f)

            for key, settings_obj in self._settings.items():
                if key in data:
                    for field, value in data[key].items():
                        if hasattr(settings_obj, field):
                            setattr(settings_obj, field, value)
        except (OSError, ValueError) as e:
            # Import here to avoid a cycle with the logger's own config lookup
            from report_export.utils.logger import setup_logger
            setup_logger(__name__).warning(
                f"Failed to load config file {self._config_file}: {e}, using defaults"
            )

    def save(self, config_file: Optional[str] = None) -> str:
        """Save current configuration to file."""
        file_path = Path(config_file) if config_file else self._config_file

        if not file_path:
            file_path = Path(self._settings['paths'].base_dir) / "config.json"

        with self._lock:
            with open(file_path, 'w') as f:
                json.dump(self.get_all_values(), f, indent=2, default=str)

            self._config_file = file_path

        return str(file_path)

    # =========================================================================
    # Getters for each settings group
    # =========================================================================

    @property
    def branding(self) -> BrandingSettings:
        return self._settings['branding']

    @property
    def export(self) -> ExportSettings:
        return self._settings['export']

    @property
    def cache(self) -> CacheSettings:
        return self._settings['cache']

    @property
    def server(self) -> ServerSettings:
        return self._settings['server']

    @property
    def paths(self) -> PathSettings:
        return self._settings['paths']

    # =========================================================================
    # Dynamic access and updates
    # =========================================================================

    def get(self, category: str, field: str) -> Any:
        """Get a specific configuration value."""
        with self._lock:
            settings = self._settings.get(category)
            if settings and hasattr(settings, field):
                return getattr(settings, field)
            return None

    def get_section(self, category: str) -> Optional[Dict[str, Any]]:
        """Get an entire configuration section as dictionary."""
        with self._lock:
            settings = self._settings.get(category)
            if settings:
                return settings.to_dict()
            return None

    def set(self, category: str, field: str, value: Any) -> bool:
        """
        Set a configuration value.

        Returns:
            True if successful, False if the field is unknown or the value invalid
        """
        with self._lock:
            settings = self._settings.get(category)
            if not settings or not hasattr(settings, field):
                return False

            if not self._validate_field(category, field, value):
                return False

            old_value = getattr(settings, field)
            setattr(settings, field, value)

        self._trigger_callbacks(category, field, old_value, value)
        return True

    def _validate_field(self, category: str, field: str, value: Any) -> bool:
        """Validate a field value against its metadata."""
        settings = self._settings.get(category)
        metadata_method = getattr(settings.__class__, 'get_field_metadata', None)
        if not metadata_method:
            return True

        for field_meta in metadata_method():
            if field_meta.name != field:
                continue

            if field_meta.field_type == "int" and (
                    not isinstance(value, int) or isinstance(value, bool)):
                return False
            if field_meta.field_type == "float" and not isinstance(value, (int, float)):
                return False
            if field_meta.field_type == "bool" and not isinstance(value, bool):
                return False
            if field_meta.field_type == "str" and not isinstance(value, str):
                return False

            if field_meta.min_value is not None and value < field_meta.min_value:
                return False
            if field_meta.max_value is not None and value > field_meta.max_value:
                return False

            if field_meta.options and value not in field_meta.options:
                return False

            return True

        return True

    def update_batch(self, updates: Dict[str, Dict[str, Any]]) -> Dict[str, bool]:
        """Update multiple settings at once."""
        results = {}
        for category, fields in updates.items():
            for field, value in fields.items():
                results[f"{category}.{field}"] = self.set(category, field, value)
        return results

    # =========================================================================
    # Change callbacks
    # =========================================================================

    def on_change(self, category: str, field: str, callback):
        """Register a callback for when a field changes."""
        key = f"{category}.{field}"
        self._change_callbacks.setdefault(key, []).append(callback)

    def _trigger_callbacks(self, category: str, field: str, old_value: Any, new_value: Any):
        key = f"{category}.{field}"
        for callback in self._change_callbacks.get(key, []):
            callback(old_value, new_value)

    def get_all_values(self) -> Dict[str, Dict[str, Any]]:
        """Get all current configuration values."""
        return {category: settings.to_dict() for category, settings in self._settings.items()}


# Global instance
config_manager = ConfigurationManager()
