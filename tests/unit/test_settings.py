"""
Unit tests for settings loading and saving.
"""

import json
import logging

import pytest
from pydantic import ValidationError

from disc_inspector.core import InspectorSettings, OutputFormat, load_settings, save_settings
from disc_inspector.core.settings import get_settings_dir
from disc_inspector.hardware import DriverType


class TestInspectorSettings:
    """Test the settings model."""

    def test_defaults(self):
        """Defaults open the default drive and print text."""
        settings = InspectorSettings()
        assert settings.source is None
        assert settings.driver is DriverType.DEVICE
        assert settings.output_format is OutputFormat.TEXT
        assert settings.normalize_cdtext_labels is False
        assert settings.log_level == "WARNING"

    def test_log_level_normalized(self):
        settings = InspectorSettings(log_level="debug")
        assert settings.log_level == "DEBUG"
        assert settings.log_level_value == logging.DEBUG

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            InspectorSettings(log_level="LOUD")

    def test_driver_from_string(self):
        settings = InspectorSettings(driver="bincue")
        assert settings.driver is DriverType.BINCUE

    def test_settings_frozen(self):
        settings = InspectorSettings()
        with pytest.raises(ValidationError):
            settings.source = "/dev/sr1"


class TestSettingsPersistence:
    """Test JSON load/save edge cases."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_settings(tmp_path / "absent.json") == InspectorSettings()

    def test_round_trip(self, tmp_path):
        path = tmp_path / "settings.json"
        settings = InspectorSettings(source="/dev/sr1", output_format="json",
                                     normalize_cdtext_labels=True)

        assert save_settings(settings, path) is True
        assert load_settings(path) == settings

    def test_saved_file_has_version(self, tmp_path):
        path = tmp_path / "nested" / "settings.json"
        save_settings(InspectorSettings(), path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["version"] == 1
        assert data["driver"] == "device"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_settings(path) == InspectorSettings()

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"driver": "scsi"}), encoding="utf-8")
        assert load_settings(path) == InspectorSettings()

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert load_settings(path) == InspectorSettings()

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"color": False, "theme": "dark"}), encoding="utf-8")
        assert load_settings(path).color is False

    def test_settings_dir_uses_xdg(self, tmp_path, monkeypatch):
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_settings_dir() == tmp_path / "disc-inspector"
