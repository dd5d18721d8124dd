"""
Tests for Settings loading and per-drive alert fallback.
"""

import pytest
from pydantic import ValidationError

from diskwatch.config import Settings
from diskwatch.dependencies import get_settings
from diskwatch.models import DriveAlertConfig


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.poll_interval_seconds == 30
        assert settings.default_alert_threshold == 90
        assert settings.alert_cooldown_seconds == 3600
        assert settings.monitored_drives == []
        assert settings.panel_drives == ["/", "/home"]
        assert settings.drive_alerts == {}

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("DISKWATCH_DEFAULT_ALERT_THRESHOLD", "80")
        monkeypatch.setenv("DISKWATCH_MONITORED_DRIVES", '["/", "/mnt/data"]')
        monkeypatch.setenv(
            "DISKWATCH_DRIVE_ALERTS", '{"/mnt/data": {"enabled": false, "threshold": 75}}'
        )

        settings = Settings(_env_file=None)

        assert settings.default_alert_threshold == 80
        assert settings.monitored_drives == ["/", "/mnt/data"]
        assert settings.drive_alerts["/mnt/data"] == DriveAlertConfig(enabled=False, threshold=75)

    def test_env_file(self, tmp_path):
        env_file = tmp_path / "diskwatch.env"
        env_file.write_text("DISKWATCH_ALERT_COOLDOWN_SECONDS=60\n", encoding="utf-8")

        assert Settings(_env_file=env_file).alert_cooldown_seconds == 60

    def test_threshold_out_of_range(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_alert_threshold=150)

    def test_log_directory(self):
        settings = Settings(_env_file=None, log_file_path="/var/log/diskwatch/dw.log")
        assert str(settings.log_directory) == "/var/log/diskwatch"


class TestGetDriveAlert:
    def test_fallback_uses_default_threshold(self):
        settings = Settings(_env_file=None, default_alert_threshold=85)
        assert settings.get_drive_alert("/mnt/x") == DriveAlertConfig(enabled=True, threshold=85)

    def test_configured_entry(self):
        configured = DriveAlertConfig(enabled=False, threshold=70)
        settings = Settings(_env_file=None, drive_alerts={"/": configured})
        assert settings.get_drive_alert("/") == configured


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
