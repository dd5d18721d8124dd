"""
Tests for NotificationHandler delivery and payload construction.
"""

from unittest.mock import MagicMock

from diskwatch.models import AlertEvent
from diskwatch.services.disk_monitor import NotificationHandler, build_notification


def alert(name="data", percent=95, mount_point="/data"):
    return AlertEvent(display_name=name, percent=percent, mount_point=mount_point, threshold=90)


class TestBuildNotification:
    def test_payload(self):
        notification = build_notification(alert(name="~", percent=93))

        assert notification.summary == "Low disk space"
        assert notification.body == "~ is 93% full"
        assert notification.icon == "drive-harddisk"
        assert notification.urgency == "critical"


class TestNotificationHandler:
    def test_delivers_all_in_order(self):
        notifier = MagicMock()
        handler = NotificationHandler(notifier=notifier)

        delivered = handler.deliver([alert(name="a"), alert(name="b")])

        assert delivered == 2
        bodies = [c.args[0].body for c in notifier.call_args_list]
        assert bodies == ["a is 95% full", "b is 95% full"]

    def test_failure_does_not_stop_other_deliveries(self):
        notifier = MagicMock(side_effect=[RuntimeError("bus gone"), None])
        handler = NotificationHandler(notifier=notifier)

        delivered = handler.deliver([alert(name="a"), alert(name="b")])

        assert delivered == 1
        assert notifier.call_count == 2

    def test_default_notifier_logs(self):
        assert NotificationHandler().deliver([alert()]) == 1
