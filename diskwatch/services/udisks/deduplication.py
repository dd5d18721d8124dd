from typing import List, Set

from ...models import DriveInfo, is_primary_mount


def deduplicate_by_device(drives: List[DriveInfo]) -> List[DriveInfo]:
    """
    Drop subvolume mounts that share a device with / or /home.

    Primary mounts are always kept. Non-primary mounts survive only when their
    device has no primary mount at all, in which case every one of them is
    kept. Input order is preserved.
    """
    devices_with_primary: Set[str] = {
        drive.device for drive in drives if is_primary_mount(drive.mount_point)
    }

    return [
        drive
        for drive in drives
        if is_primary_mount(drive.mount_point) or drive.device not in devices_with_primary
    ]
