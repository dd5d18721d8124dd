import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Tuple

from ...models import AlertEvent, DriveAlertConfig, DriveStatus


@dataclass
class AlertState:
    """Per-mount cooldown memory. Lives only as long as the process."""

    last_alerted: float
    was_over_threshold: bool = False


AlertStates = Dict[str, AlertState]


class AlertTracker:
    """
    Decides which drives should raise a low-space alert on this tick.

    An alert fires when usage is at or over the threshold and either the
    threshold was just crossed or the cooldown since the last alert expired.
    The state map is owned by the caller and mutated in place.

    Disabled drives are skipped without touching their state, so re-enabling
    resumes from whatever was recorded before they were disabled.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock

    def evaluate(
        self,
        states: AlertStates,
        drives: Iterable[Tuple[DriveStatus, DriveAlertConfig]],
        cooldown_seconds: float,
    ) -> List[AlertEvent]:
        now = self._clock()
        alerts: List[AlertEvent] = []

        for drive, alert_config in drives:
            if not alert_config.enabled:
                continue

            mount_point = drive.info.mount_point
            percent = drive.space.percent_used
            over_threshold = percent >= alert_config.threshold

            state = states.get(mount_point)
            if state is None:
                # Already past cooldown so the first over-threshold sighting fires
                state = AlertState(last_alerted=now - cooldown_seconds - 1)
                states[mount_point] = state

            crossed_threshold = over_threshold and not state.was_over_threshold
            cooldown_expired = (now - state.last_alerted) >= cooldown_seconds

            if over_threshold and (crossed_threshold or cooldown_expired):
                alerts.append(
                    AlertEvent(
                        display_name=drive.display_name,
                        percent=percent,
                        mount_point=mount_point,
                        threshold=alert_config.threshold,
                    )
                )
                state.last_alerted = now
                logging.info(
                    f"Alert for {mount_point}: {percent}% used (threshold {alert_config.threshold}%)",
                    extra={
                        "operation": "disk_alert",
                        "mount_point": mount_point,
                        "percent": percent,
                        "threshold": alert_config.threshold,
                        "crossed": crossed_threshold,
                    },
                )

            state.was_over_threshold = over_threshold

        return alerts
