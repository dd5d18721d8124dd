import asyncio
import logging
from typing import List, Optional, Tuple

from ...config import Settings
from ...core.exceptions import CatalogConnectionError, SpaceProbeError
from ...models import DriveAlertConfig, DriveInfo, DriveStatus, RefreshResult
from ...utils.format_utils import format_usage
from ..space_probe import SpaceProbe
from ..udisks import FilesystemEnumerator, PropertyCatalog, deduplicate_by_device
from .alert_tracker import AlertStates, AlertTracker
from .drive_selection import is_on_panel, select_monitored
from .notification_handler import NotificationHandler


class DiskMonitorService:
    def __init__(
        self,
        settings: Settings,
        property_catalog: PropertyCatalog,
        space_probe: Optional[SpaceProbe] = None,
        alert_tracker: Optional[AlertTracker] = None,
        notification_handler: Optional[NotificationHandler] = None,
    ):
        self._settings = settings
        self._property_catalog = property_catalog
        self._enumerator = FilesystemEnumerator()
        self._space_probe = space_probe or SpaceProbe()
        self._alert_tracker = alert_tracker or AlertTracker()
        self._notification_handler = notification_handler or NotificationHandler()

        self._drives: List[DriveStatus] = []
        self._alert_states: AlertStates = {}
        self._catalog_available = False
        self._refresh_count = 0

        self._is_running = False
        self._monitor_task: Optional[asyncio.Task] = None
        self._tick_lock = asyncio.Lock()

        logging.info("DiskMonitorService initialized")

    def update_settings(self, settings: Settings) -> None:
        """Takes effect at the start of the next refresh cycle."""
        self._settings = settings

    def refresh(self) -> RefreshResult:
        """Run one full cycle: discover, deduplicate, probe, evaluate alerts."""
        settings = self._settings.model_copy(deep=True)
        self._refresh_count += 1

        try:
            objects = self._property_catalog.fetch()
        except CatalogConnectionError as e:
            self._catalog_available = False
            logging.error(
                f"Failed to enumerate drives, keeping previous list: {e}",
                extra={"operation": "drive_refresh", "kept_drives": len(self._drives)},
            )
            return RefreshResult(drives=list(self._drives), alerts=[], catalog_available=False)

        self._catalog_available = True
        drives = deduplicate_by_device(self._enumerator.enumerate(objects))
        drives = select_monitored(drives, settings.monitored_drives)

        statuses = self._probe_all(drives, settings)
        self._drives = statuses

        evaluations: List[Tuple[DriveStatus, DriveAlertConfig]] = [
            (status, settings.get_drive_alert(status.info.mount_point))
            for status in statuses
        ]
        alerts = self._alert_tracker.evaluate(
            self._alert_states, evaluations, settings.alert_cooldown_seconds
        )
        self._notification_handler.deliver(alerts)

        logging.debug(
            f"Refresh #{self._refresh_count}: {len(statuses)} drives, {len(alerts)} alerts"
        )
        return RefreshResult(drives=list(statuses), alerts=alerts)

    def _probe_all(self, drives: List[DriveInfo], settings: Settings) -> List[DriveStatus]:
        statuses: List[DriveStatus] = []
        for info in drives:
            try:
                space = self._space_probe.probe(info.mount_point)
            except SpaceProbeError as e:
                logging.warning(f"Failed to get space for {info.mount_point}: {e.reason}")
                continue

            statuses.append(
                DriveStatus(
                    info=info,
                    space=space,
                    on_panel=is_on_panel(info.mount_point, settings.panel_drives),
                )
            )
            logging.debug(
                f"{info.display_name()} ({info.mount_point}): "
                f"{format_usage(space.used, space.total, space.percent_used)}"
            )
        return statuses

    async def refresh_async(self) -> RefreshResult:
        # Ticks never overlap, whether triggered by the loop or on demand
        async with self._tick_lock:
            return await asyncio.to_thread(self.refresh)

    async def start_monitoring(self) -> None:
        if self._is_running:
            logging.warning("Disk monitoring already running")
            return

        self._is_running = True
        self._monitor_task = asyncio.create_task(self._monitoring_loop())
        logging.info("Disk monitoring started")

    async def stop_monitoring(self) -> None:
        if not self._is_running:
            return

        self._is_running = False

        if self._monitor_task:
            self._monitor_task.cancel()
            try:
                await self._monitor_task
            except asyncio.CancelledError:
                pass
            self._monitor_task = None

        logging.info("Disk monitoring stopped")

    async def _monitoring_loop(self) -> None:
        logging.info(
            f"Disk monitoring loop starting - checking every {self._settings.poll_interval_seconds}s"
        )
        while self._is_running:
            try:
                await self.refresh_async()
            except Exception as e:
                logging.error(f"Error in disk monitoring loop: {e}")

            await asyncio.sleep(self._settings.poll_interval_seconds)

    def get_drives(self) -> List[DriveStatus]:
        return list(self._drives)

    def get_panel_drives(self) -> List[DriveStatus]:
        return [drive for drive in self._drives if drive.on_panel]

    def get_monitoring_status(self) -> dict:
        return {
            "is_running": self._is_running,
            "catalog_available": self._catalog_available,
            "drive_count": len(self._drives),
            "tracked_alert_states": len(self._alert_states),
            "refresh_count": self._refresh_count,
            "poll_interval_seconds": self._settings.poll_interval_seconds,
        }
