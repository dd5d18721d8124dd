from typing import List, Sequence

from ...models import DriveInfo


def select_monitored(drives: List[DriveInfo], monitored_drives: Sequence[str]) -> List[DriveInfo]:
    """Explicitly listed mounts, or every non-removable drive when the list is empty."""
    if not monitored_drives:
        return [drive for drive in drives if not drive.removable]

    wanted = set(monitored_drives)
    return [drive for drive in drives if drive.mount_point in wanted]


def is_on_panel(mount_point: str, panel_drives: Sequence[str]) -> bool:
    # "/home" on the panel list covers every mount below it
    return any(
        entry == mount_point or (entry == "/home" and mount_point.startswith("/home"))
        for entry in panel_drives
    )
