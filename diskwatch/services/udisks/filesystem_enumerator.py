import logging
from typing import List, Optional, Tuple

from ...core.exceptions import PropertyDecodeError
from ...models import DriveInfo
from .property_values import (
    InterfaceMap,
    ManagedObjects,
    PropertyMap,
    decode_bool,
    decode_byte_string,
    decode_byte_string_array,
    decode_object_path,
    decode_string,
)

FILESYSTEM_INTERFACE = "org.freedesktop.UDisks2.Filesystem"
BLOCK_INTERFACE = "org.freedesktop.UDisks2.Block"
DRIVE_INTERFACE = "org.freedesktop.UDisks2.Drive"

# Virtual/pseudo filesystems, matched exactly against IdType
EXCLUDED_FS_TYPES = frozenset(
    {
        "tmpfs",
        "devtmpfs",
        "squashfs",
        "overlay",
        "fuse.portal",
        "fuse.gvfsd-fuse",
        "autofs",
        "proc",
        "sysfs",
        "devpts",
        "cgroup",
        "cgroup2",
        "securityfs",
        "pstore",
        "efivarfs",
        "bpf",
        "fusectl",
        "configfs",
        "debugfs",
        "tracefs",
        "hugetlbfs",
        "mqueue",
        "ramfs",
    }
)


def is_excluded_fs_type(fs_type: str) -> bool:
    return fs_type in EXCLUDED_FS_TYPES


class FilesystemEnumerator:
    """Turns a UDisks2 object snapshot into a flat list of DriveInfo records."""

    def enumerate(self, objects: ManagedObjects) -> List[DriveInfo]:
        drives: List[DriveInfo] = []

        for object_path, interfaces in objects.items():
            fs_props = interfaces.get(FILESYSTEM_INTERFACE)
            if fs_props is None:
                continue

            mount_points = self._mount_points(object_path, fs_props)
            if not mount_points:
                continue

            block_props = interfaces.get(BLOCK_INTERFACE)
            if block_props is None:
                logging.debug(f"Skipping {object_path}: filesystem without block device")
                continue

            device_prop = block_props.get("Device")
            if device_prop is None:
                logging.debug(f"Skipping {object_path}: missing Device property")
                continue
            try:
                device = decode_byte_string("Device", device_prop)
            except PropertyDecodeError as e:
                logging.debug(f"Skipping {object_path}: {e}")
                continue

            label = self._optional_string(block_props, "IdLabel")
            fs_type = self._optional_string(block_props, "IdType") or ""

            if is_excluded_fs_type(fs_type):
                logging.debug(f"Skipping {device}: pseudo filesystem {fs_type}")
                continue

            model, removable = self._drive_details(objects, block_props)

            for mount_point in mount_points:
                drives.append(
                    DriveInfo(
                        mount_point=mount_point,
                        label=label,
                        device=device,
                        fs_type=fs_type,
                        model=model,
                        removable=removable,
                    )
                )

        logging.debug(f"Enumerated {len(drives)} mounted filesystems")
        return drives

    def _mount_points(self, object_path: str, fs_props: PropertyMap) -> List[str]:
        prop = fs_props.get("MountPoints")
        if prop is None:
            return []
        try:
            return decode_byte_string_array("MountPoints", prop)
        except PropertyDecodeError as e:
            logging.debug(f"Ignoring mount points of {object_path}: {e}")
            return []

    def _optional_string(self, props: PropertyMap, name: str) -> Optional[str]:
        prop = props.get(name)
        if prop is None:
            return None
        try:
            return decode_string(name, prop)
        except PropertyDecodeError:
            return None

    def _drive_details(
        self, objects: ManagedObjects, block_props: PropertyMap
    ) -> Tuple[Optional[str], bool]:
        """Model and removable flag of the parent drive, (None, False) if unknown."""
        drive_ref = block_props.get("Drive")
        if drive_ref is None:
            return None, False

        try:
            drive_path = decode_object_path("Drive", drive_ref)
        except PropertyDecodeError:
            return None, False

        drive_interfaces: Optional[InterfaceMap] = objects.get(drive_path)
        if drive_interfaces is None:
            return None, False
        drive_props = drive_interfaces.get(DRIVE_INTERFACE)
        if drive_props is None:
            return None, False

        model = self._optional_string(drive_props, "Model") or None

        removable = False
        removable_prop = drive_props.get("Removable")
        if removable_prop is not None:
            try:
                removable = decode_bool("Removable", removable_prop)
            except PropertyDecodeError:
                removable = False

        return model, removable
