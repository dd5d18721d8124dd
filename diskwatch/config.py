from pathlib import Path
from typing import Dict, List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import DriveAlertConfig


class Settings(BaseSettings):
    # Polling
    poll_interval_seconds: int = Field(default=30, ge=1)

    # Alerts
    default_alert_threshold: int = Field(default=90, ge=0, le=100)
    alert_cooldown_seconds: int = Field(default=3600, ge=0)  # Seconds before re-alerting the same drive
    drive_alerts: Dict[str, DriveAlertConfig] = Field(default_factory=dict)  # Keyed by mount path

    # Drive selection
    monitored_drives: List[str] = Field(default_factory=list)  # Empty = all non-removable drives
    panel_drives: List[str] = Field(default_factory=lambda: ["/", "/home"])

    # UDisks2
    dbus_timeout_seconds: float = 5.0

    # Logging
    log_level: str = "INFO"
    log_file_path: str = "logs/diskwatch.log"
    log_retention_days: int = 14

    # HTTP read API
    api_host: str = "127.0.0.1"
    api_port: int = 8765

    model_config = SettingsConfigDict(
        env_prefix="DISKWATCH_",
        env_file="diskwatch.env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def log_directory(self) -> Path:
        return Path(self.log_file_path).parent

    def get_drive_alert(self, mount_point: str) -> DriveAlertConfig:
        """Alert config for a mount, falling back to the default threshold."""
        config = self.drive_alerts.get(mount_point)
        if config is not None:
            return config
        return DriveAlertConfig(enabled=True, threshold=self.default_alert_threshold)
