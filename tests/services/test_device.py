from __future__ import annotations

import pytest

from roomba.services.device import DeviceClassifier, base_device_name
from tests.fs_mock import MemoryFileSystem


class TestBaseDeviceName:
    @pytest.mark.parametrize(
        ("device", "expected"),
        [
            ("/dev/sda1", "sda"),
            ("sda", "sda"),
            ("/dev/sdb12", "sdb"),
            ("/dev/nvme0n1p3", "nvme0n1"),
            ("/dev/nvme0n1", "nvme0n1"),
            ("/dev/mmcblk0p1", "mmcblk0"),
            ("/dev/vda2", "vda"),
            ("tmpfs", "tmpfs"),
        ],
    )
    def test_strips_partition_suffix(self, device: str, expected: str) -> None:
        assert base_device_name(device) == expected


class TestClassify:
    def test_sda_partition_is_rotational(self) -> None:
        fs = MemoryFileSystem()
        fs.add_mount("/", "/dev/sda1")
        assert DeviceClassifier(fs).classify("/home/user/file") is True

    def test_nvme_is_not_rotational(self) -> None:
        fs = MemoryFileSystem()
        fs.add_mount("/", "/dev/nvme0n1p2")
        assert DeviceClassifier(fs).classify("/home/user/file") is False

    def test_longest_mountpoint_wins(self) -> None:
        fs = MemoryFileSystem()
        fs.add_mount("/", "/dev/nvme0n1p2")
        fs.add_mount("/mnt/data", "/dev/sda1")
        classifier = DeviceClassifier(fs)
        assert classifier.classify("/mnt/data/old.log") is True
        assert classifier.classify("/mnt/database/x") is False

    def test_lookup_failure_defaults_to_non_rotational(self) -> None:
        fs = MemoryFileSystem()
        fs.add_mount("/", "/dev/sda1")
        fs.mount_error = OSError("mount table unreadable")
        assert DeviceClassifier(fs).classify("/home/user/file") is False

    def test_no_mount_defaults_to_non_rotational(self) -> None:
        fs = MemoryFileSystem()
        assert DeviceClassifier(fs).device_for("/anything") is None
        assert DeviceClassifier(fs).classify("/anything") is False

    def test_empty_device_defaults_to_non_rotational(self) -> None:
        fs = MemoryFileSystem()
        fs.add_mount("/", "")
        assert DeviceClassifier(fs).classify("/x") is False

    def test_allow_list_is_exact_match(self) -> None:
        fs = MemoryFileSystem()
        fs.add_mount("/", "/dev/sdb1")
        assert DeviceClassifier(fs).classify("/x") is False
        assert DeviceClassifier(fs, rotational_devices=["sda", "sdb"]).classify("/x") is True
