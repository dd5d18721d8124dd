"""
Disk monitor: the refresh-cycle orchestrator and its collaborators.

Components:
- DiskMonitorService: runs refresh cycles and owns drive list and alert state
- AlertTracker: threshold crossing and cooldown decisions
- NotificationHandler: builds alert payloads and hands them to a notifier
"""

from .alert_tracker import AlertState, AlertTracker
from .disk_monitor import DiskMonitorService
from .notification_handler import NotificationHandler, build_notification

__all__ = [
    "DiskMonitorService",
    "AlertState",
    "AlertTracker",
    "NotificationHandler",
    "build_notification",
]
