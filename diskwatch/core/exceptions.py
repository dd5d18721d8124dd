# diskwatch/core/exceptions.py


class DiskWatchError(Exception):
    """Base class for all diskwatch errors. None of them are fatal to the host."""


class CatalogConnectionError(DiskWatchError, ConnectionError):
    """Raised when the device-management service cannot be queried.

    Aborts the whole refresh cycle; callers keep their previous drive list.
    """


class PropertyDecodeError(DiskWatchError, ValueError):
    """Raised when a single property does not have the expected shape."""
    def __init__(self, name: str, expected: str, message: str = ""):
        self.name = name
        self.expected = expected
        detail = f": {message}" if message else ""
        super().__init__(f"Property {name!r} is not a valid {expected}{detail}")


class SpaceProbeError(DiskWatchError, OSError):
    """Raised when filesystem statistics cannot be read for one mount."""
    def __init__(self, mount_path: str, reason: str):
        self.mount_path = mount_path
        self.reason = reason
        super().__init__(f"Cannot read filesystem statistics for {mount_path}: {reason}")


class NotificationDeliveryError(DiskWatchError):
    """Raised when the notifier fails to deliver an alert. Logged only."""
