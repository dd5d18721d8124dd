import logging
from typing import Callable, Iterable, Optional

from ...core.exceptions import NotificationDeliveryError
from ...models import AlertEvent, AlertNotification

Notifier = Callable[[AlertNotification], None]

ALERT_SUMMARY = "Low disk space"


def build_notification(alert: AlertEvent) -> AlertNotification:
    return AlertNotification(
        summary=ALERT_SUMMARY,
        body=f"{alert.display_name} is {alert.percent}% full",
    )


def log_notifier(notification: AlertNotification) -> None:
    logging.warning(f"{notification.summary}: {notification.body}")


class NotificationHandler:
    def __init__(self, notifier: Optional[Notifier] = None):
        self._notifier = notifier or log_notifier

    def deliver(self, alerts: Iterable[AlertEvent]) -> int:
        """Hand every alert to the notifier. Failures are logged, never retried."""
        delivered = 0
        for alert in alerts:
            try:
                self._send(alert)
                delivered += 1
            except NotificationDeliveryError as e:
                logging.error(
                    f"Failed to deliver alert for {alert.mount_point}: {e}",
                    extra={
                        "operation": "alert_delivery",
                        "mount_point": alert.mount_point,
                        "percent": alert.percent,
                    },
                )
        return delivered

    def _send(self, alert: AlertEvent) -> None:
        notification = build_notification(alert)
        try:
            self._notifier(notification)
        except Exception as e:
            raise NotificationDeliveryError(str(e)) from e
