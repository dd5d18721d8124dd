from functools import lru_cache
from typing import Any, Dict

from .config import Settings
from .services.disk_monitor import DiskMonitorService, NotificationHandler
from .services.space_probe import SpaceProbe
from .services.udisks import PropertyCatalog

# Global singleton instances
_singletons: Dict[str, Any] = {}


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_property_catalog() -> PropertyCatalog:
    if "property_catalog" not in _singletons:
        settings = get_settings()
        _singletons["property_catalog"] = PropertyCatalog(
            timeout=settings.dbus_timeout_seconds
        )
    return _singletons["property_catalog"]


def get_space_probe() -> SpaceProbe:
    if "space_probe" not in _singletons:
        _singletons["space_probe"] = SpaceProbe()
    return _singletons["space_probe"]


def get_notification_handler() -> NotificationHandler:
    if "notification_handler" not in _singletons:
        _singletons["notification_handler"] = NotificationHandler()
    return _singletons["notification_handler"]


def get_disk_monitor() -> DiskMonitorService:
    if "disk_monitor" not in _singletons:
        _singletons["disk_monitor"] = DiskMonitorService(
            settings=get_settings(),
            property_catalog=get_property_catalog(),
            space_probe=get_space_probe(),
            notification_handler=get_notification_handler(),
        )
    return _singletons["disk_monitor"]


def reset_singletons() -> None:
    """Drop all cached instances. Used by tests."""
    _singletons.clear()
    get_settings.cache_clear()
