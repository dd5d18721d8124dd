import logging
import os
from typing import Callable

from ..core.exceptions import SpaceProbeError
from ..models import SpaceInfo


def compute_space(
    block_size: int, blocks: int, blocks_free: int, blocks_available: int
) -> SpaceInfo:
    total = blocks * block_size
    free_bytes = blocks_free * block_size
    available = blocks_available * block_size

    # Used comes from free, not available: available excludes reserved blocks
    used = max(0, total - free_bytes)

    return SpaceInfo(total=total, used=used, available=max(0, available))


class SpaceProbe:
    def __init__(self, statvfs: Callable[[str], os.statvfs_result] = os.statvfs):
        self._statvfs = statvfs

    def probe(self, mount_point: str) -> SpaceInfo:
        try:
            stat = self._statvfs(mount_point)
        except OSError as e:
            raise SpaceProbeError(mount_point, e.strerror or str(e)) from e
        except ValueError as e:
            # e.g. an embedded NUL left in the decoded mount path
            raise SpaceProbeError(mount_point, str(e)) from e

        block_size = stat.f_frsize or stat.f_bsize
        space = compute_space(block_size, stat.f_blocks, stat.f_bfree, stat.f_bavail)

        logging.debug(
            f"Space for {mount_point}: {space.used} of {space.total} bytes used "
            f"({space.percent_used}%)"
        )
        return space
