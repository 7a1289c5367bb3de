# report_export/config/__init__.py
"""
Centralized configuration system.

Usage:
    from report_export.config import config, BRANDING, EXPORT, CACHE

    org = BRANDING.organization_name
    ttl = CACHE.ttl_seconds

    config.set('cache', 'ttl_seconds', 1800)
"""

from pathlib import Path

from report_export.config.schema import (
    BrandingSettings,
    ExportSettings,
    CacheSettings,
    ServerSettings,
    PathSettings,
    ConfigCategory,
    ConfigField,
)
from report_export.config.manager import config_manager, ConfigurationManager
from report_export.utils.logger import apply_logging_settings

_base_dir = Path(__file__).parent.parent.parent
config_manager.initialize(
    config_file="config.json",
    base_dir=str(_base_dir)
)

# Existing loggers follow runtime changes to the server log settings
config_manager.on_change("server", "log_level", lambda old, new: apply_logging_settings(level=new))
config_manager.on_change("server", "log_format", lambda old, new: apply_logging_settings(log_format=new))

config = config_manager

BRANDING = config_manager.branding
EXPORT = config_manager.export
CACHE = config_manager.cache
SERVER = config_manager.server
PATHS = config_manager.paths

__all__ = [
    "config", "config_manager", "ConfigurationManager",
    "BRANDING", "EXPORT", "CACHE", "SERVER", "PATHS",
    "BrandingSettings", "ExportSettings", "CacheSettings",
    "ServerSettings", "PathSettings", "ConfigCategory", "ConfigField",
]
