# tests/unit/test_config.py
"""
Unit tests for configuration system.
"""

import json

import pytest


class TestConfigurationManager:
    """Tests for ConfigurationManager singleton."""

    @pytest.fixture
    def config_manager(self):
        """Get the global ConfigurationManager instance."""
        from report_export.config.manager import config_manager

        original_ttl = config_manager.get("cache", "ttl_seconds")
        original_policy = config_manager.get("export", "table_selection_policy")
        yield config_manager

        config_manager.set("cache", "ttl_seconds", original_ttl)
        config_manager.set("export", "table_selection_policy", original_policy)

    def test_singleton(self, config_manager):
        from report_export.config.manager import ConfigurationManager

        assert ConfigurationManager() is config_manager

    def test_get_default_value(self, config_manager):
        assert config_manager.get("cache", "ttl_seconds") == 3600
        assert config_manager.get("export", "sheet_name_max_length") == 31

    def test_get_unknown_returns_none(self, config_manager):
        assert config_manager.get("cache", "nonexistent") is None
        assert config_manager.get("nonexistent", "ttl_seconds") is None

    def test_set_and_get_value(self, config_manager):
        assert config_manager.set("cache", "ttl_seconds", 1800) is True
        assert config_manager.get("cache", "ttl_seconds") == 1800

    def test_set_invalid_type_rejected(self, config_manager):
        assert config_manager.set("cache", "ttl_seconds", "an hour") is False
        assert config_manager.get("cache", "ttl_seconds") == 3600

    def test_set_out_of_range_rejected(self, config_manager):
        assert config_manager.set("cache", "ttl_seconds", 0) is False

    def test_set_option_validated(self, config_manager):
        assert config_manager.set("export", "table_selection_policy", "concatenate") is True
        assert config_manager.set("export", "table_selection_policy", "random") is False

    def test_set_unknown_field(self, config_manager):
        assert config_manager.set("cache", "nonexistent", 1) is False

    def test_update_batch(self, config_manager):
        results = config_manager.update_batch({
            "cache": {"ttl_seconds": 600},
            "export": {"table_selection_policy": "bogus"},
        })

        assert results == {"cache.ttl_seconds": True, "export.table_selection_policy": False}

    def test_change_callback(self, config_manager):
        seen = []
        config_manager.on_change("cache", "ttl_seconds", lambda old, new: seen.append((old, new)))

        config_manager.set("cache", "ttl_seconds", 900)

        assert seen[-1] == (3600, 900)

    def test_get_section(self, config_manager):
        branding = config_manager.get_section("branding")

        assert branding["footer_label"] == "Official Document"
        assert branding["primary_color"] == "#1A365D"

    def test_save_config(self, config_manager, tmp_path):
        target = tmp_path / "config.json"
        path = config_manager.save(str(target))

        data = json.loads(target.read_text())
        assert path == str(target)
        for category in ("branding", "export", "cache", "server", "paths"):
            assert category in data


class TestSettingsSchema:
    """Tests for settings dataclasses."""

    def test_branding_color_hex(self):
        from report_export.config.schema import BrandingSettings

        branding = BrandingSettings(primary_color="#1a365d")

        assert branding.color_hex == "1A365D"

    def test_field_metadata(self):
        from report_export.config.schema import CacheSettings, ConfigCategory

        fields = {f.name: f for f in CacheSettings.get_field_metadata()}

        assert fields["ttl_seconds"].category == ConfigCategory.CACHE
        assert fields["ttl_seconds"].min_value == 1
        assert fields["backend"].options == ["memory", "redis"]

    def test_outputs_dir_resolved(self):
        from pathlib import Path
        from report_export.config import PATHS

        assert Path(PATHS.outputs_dir).is_absolute()
