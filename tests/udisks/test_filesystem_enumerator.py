"""
Tests for FilesystemEnumerator: decoding UDisks2 objects into DriveInfo records.
"""

import pytest

from diskwatch.services.udisks import EXCLUDED_FS_TYPES, FilesystemEnumerator

from tests.udisks_fixtures import catalog_for, drive_object, filesystem_object, managed_objects


def enumerate_raw(raw):
    return FilesystemEnumerator().enumerate(catalog_for(raw).fetch())


class TestFilesystemEnumerator:
    def test_basic_filesystem(self):
        raw = managed_objects(
            filesystems={"nvme0n1p2": filesystem_object(device="/dev/nvme0n1p2", label="root", fs_type="btrfs", drive="nvme")},
            drives={"nvme": drive_object(model="WD SN850")},
        )

        drives = enumerate_raw(raw)

        assert len(drives) == 1
        drive = drives[0]
        assert drive.mount_point == "/"
        assert drive.device == "/dev/nvme0n1p2"
        assert drive.label == "root"
        assert drive.fs_type == "btrfs"
        assert drive.model == "WD SN850"
        assert drive.removable is False

    def test_one_record_per_mount_point(self):
        raw = managed_objects(
            filesystems={"sda2": filesystem_object(mount_points=("/", "/home", "/var"), drive="ssd")},
            drives={"ssd": drive_object()},
        )

        drives = enumerate_raw(raw)

        assert [d.mount_point for d in drives] == ["/", "/home", "/var"]
        assert {d.device for d in drives} == {"/dev/sda1"}
        assert all(d.model == "Samsung SSD 980" for d in drives)

    def test_unmounted_filesystem_skipped(self):
        raw = managed_objects(filesystems={"sdb1": filesystem_object(mount_points=())})
        assert enumerate_raw(raw) == []

    def test_undecodable_mount_point_dropped_others_kept(self):
        fs = filesystem_object(mount_points=("/mnt/ok",))
        fs["org.freedesktop.UDisks2.Filesystem"]["MountPoints"][1].append(b"/mnt/\xff\x00")

        drives = enumerate_raw(managed_objects(filesystems={"sdb1": fs}))

        assert [d.mount_point for d in drives] == ["/mnt/ok"]

    def test_object_without_filesystem_interface_ignored(self):
        fs = filesystem_object()
        del fs["org.freedesktop.UDisks2.Filesystem"]
        assert enumerate_raw(managed_objects(filesystems={"sda": fs})) == []

    def test_filesystem_without_block_interface_skipped(self):
        fs = filesystem_object()
        del fs["org.freedesktop.UDisks2.Block"]
        assert enumerate_raw(managed_objects(filesystems={"sda1": fs})) == []

    def test_invalid_device_skips_object(self):
        fs = filesystem_object()
        fs["org.freedesktop.UDisks2.Block"]["Device"] = ("ay", b"/dev/\xff")
        good = filesystem_object(device="/dev/sdb1", mount_points=("/mnt/b",))

        drives = enumerate_raw(managed_objects(filesystems={"sda1": fs, "sdb1": good}))

        assert [d.device for d in drives] == ["/dev/sdb1"]

    def test_missing_label_and_type(self):
        fs = filesystem_object()
        del fs["org.freedesktop.UDisks2.Block"]["IdLabel"]
        del fs["org.freedesktop.UDisks2.Block"]["IdType"]

        drive = enumerate_raw(managed_objects(filesystems={"sda1": fs}))[0]

        assert drive.label is None
        assert drive.fs_type == ""

    @pytest.mark.parametrize("fs_type", sorted(EXCLUDED_FS_TYPES))
    def test_pseudo_filesystems_excluded(self, fs_type):
        raw = managed_objects(filesystems={"x": filesystem_object(fs_type=fs_type, drive="ssd")}, drives={"ssd": drive_object()})
        assert enumerate_raw(raw) == []

    def test_exclusion_is_exact_match(self):
        raw = managed_objects(filesystems={"x": filesystem_object(fs_type="tmpfs2", mount_points=("/mnt/t",))})
        assert [d.fs_type for d in enumerate_raw(raw)] == ["tmpfs2"]

    def test_removable_drive(self):
        raw = managed_objects(
            filesystems={"sdc1": filesystem_object(device="/dev/sdc1", mount_points=("/run/media/usb",), drive="usb")},
            drives={"usb": drive_object(model="SanDisk Ultra", removable=True)},
        )
        drive = enumerate_raw(raw)[0]
        assert drive.removable is True
        assert drive.model == "SanDisk Ultra"

    def test_empty_model_treated_as_absent(self):
        raw = managed_objects(
            filesystems={"sda1": filesystem_object(drive="ssd")},
            drives={"ssd": drive_object(model="")},
        )
        assert enumerate_raw(raw)[0].model is None

    def test_unresolvable_drive_falls_back(self):
        raw = managed_objects(filesystems={"sda1": filesystem_object(drive="missing")})
        drive = enumerate_raw(raw)[0]
        assert drive.model is None
        assert drive.removable is False

    def test_drive_without_removable_property(self):
        drive_obj = drive_object()
        del drive_obj["org.freedesktop.UDisks2.Drive"]["Removable"]
        raw = managed_objects(filesystems={"sda1": filesystem_object(drive="ssd")}, drives={"ssd": drive_obj})

        assert enumerate_raw(raw)[0].removable is False
