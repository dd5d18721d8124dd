from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class DriveInfo(BaseModel):
    """
    One concrete mounted filesystem instance as reported by UDisks2.

    Produced fresh on every refresh cycle. After deduplication the mount path
    is unique within a cycle's result.
    """

    mount_point: str = Field(..., description="Absolute mount path")

    label: Optional[str] = Field(default=None, description="Filesystem label (IdLabel)")

    device: str = Field(..., description="Block device path, e.g. /dev/nvme0n1p2")

    fs_type: str = Field(default="", description="Filesystem type, e.g. ext4 or btrfs")

    model: Optional[str] = Field(default=None, description="Drive model name")

    removable: bool = Field(default=False, description="Whether the backing drive is removable")

    model_config = ConfigDict(frozen=True)

    def display_name(self) -> str:
        """
        Human readable name for surfaces and alert notifications.

        Label wins when present, then "/" for root, "~" for anything under
        /home, then the last path segment, and finally the device path.
        """
        if self.label:
            return self.label

        path = self.mount_point
        if path == "/":
            return "/"
        if path.startswith("/home"):
            return "~"

        segment = path.rstrip("/").rsplit("/", 1)[-1]
        if segment:
            return segment
        return self.device


class SpaceInfo(BaseModel):
    """Capacity figures for one mount path, recomputed every cycle."""

    total: int = Field(..., ge=0, description="Total bytes on the filesystem")

    used: int = Field(..., ge=0, description="Used bytes (total - free)")

    available: int = Field(
        ..., ge=0, description="Bytes available to unprivileged users"
    )

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def percent_used(self) -> int:
        if self.total == 0:
            return 0
        # Half rounds up: 88.5% reports as 89
        percent = (self.used * 200 + self.total) // (2 * self.total)
        return max(0, min(100, percent))


class DriveAlertConfig(BaseModel):
    """Per-mount alert settings. Read-only from the core's point of view."""

    enabled: bool = Field(default=True, description="Whether alerts fire for this mount")

    threshold: int = Field(
        default=90, ge=0, le=100, description="Usage percentage that triggers an alert"
    )

    model_config = ConfigDict(frozen=True)


class DriveStatus(BaseModel):
    """Drive metadata paired with its space figures, ready for display."""

    info: DriveInfo
    space: SpaceInfo
    on_panel: bool = Field(
        default=False, description="Whether the panel surface should show this drive"
    )

    @computed_field
    @property
    def display_name(self) -> str:
        return self.info.display_name()


class AlertEvent(BaseModel):
    """A fired alert, handed to the notifier in enumeration order."""

    display_name: str
    percent: int = Field(..., ge=0, le=100)
    mount_point: str
    threshold: int = Field(..., ge=0, le=100)


class AlertNotification(BaseModel):
    """Payload the external notification mechanism must receive."""

    summary: str
    body: str
    icon: str = "drive-harddisk"
    urgency: str = "critical"


class RefreshResult(BaseModel):
    """Outcome of one refresh cycle."""

    drives: List[DriveStatus] = Field(default_factory=list)
    alerts: List[AlertEvent] = Field(default_factory=list)
    catalog_available: bool = Field(
        default=True, description="False when the cycle kept the previous drive list"
    )


def is_primary_mount(mount_point: str) -> bool:
    return mount_point == "/" or mount_point.startswith("/home")
