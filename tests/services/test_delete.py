from __future__ import annotations

from pathlib import Path

from result import Err, Ok

from roomba.models.enums import DeleteErrorCode
from roomba.services.delete import shred_file, smart_delete
from roomba.services.device import DeviceClassifier
from roomba.services.fs import OsFileSystem
from tests.fs_mock import MemoryFileSystem


def _fs(device: str) -> MemoryFileSystem:
    fs = MemoryFileSystem()
    fs.add_mount("/", device)
    return fs


class TestSmartDelete:
    def test_missing_path_is_noop(self) -> None:
        fs = _fs("/dev/sda1")
        result = smart_delete("/tmp/missing", fs=fs)
        assert isinstance(result, Ok)
        assert fs.calls == []

    def test_rotational_file_is_shredded_then_unlinked(self) -> None:
        fs = _fs("/dev/sda1")
        fs.add_file("/tmp/a", size=10)
        result = smart_delete("/tmp/a", fs=fs)
        assert isinstance(result, Ok)
        assert fs.calls == [("overwrite", "/tmp/a"), ("overwrite", "/tmp/a"), ("unlink", "/tmp/a")]
        # last pass is all zeros over the full length
        assert fs.writes["/tmp/a"][-1] == bytes(10)
        assert not fs.exists("/tmp/a")

    def test_non_rotational_file_is_plain_unlinked(self) -> None:
        fs = _fs("/dev/nvme0n1p3")
        fs.add_file("/tmp/a", size=10)
        result = smart_delete("/tmp/a", fs=fs)
        assert isinstance(result, Ok)
        assert fs.calls == [("unlink", "/tmp/a")]

    def test_unresolvable_device_is_plain_unlinked(self) -> None:
        fs = _fs("/dev/sda1")
        fs.mount_error = OSError("boom")
        fs.add_file("/tmp/a", size=10)
        assert isinstance(smart_delete("/tmp/a", fs=fs), Ok)
        assert fs.ops("overwrite") == []
        assert fs.ops("unlink") == ["/tmp/a"]

    def test_zero_random_passes_still_zero_fills(self) -> None:
        fs = _fs("/dev/sda1")
        fs.add_file("/tmp/a", size=4)
        assert isinstance(smart_delete("/tmp/a", fs=fs, passes=0), Ok)
        assert fs.writes["/tmp/a"] == [bytes(4)]

    def test_symlink_is_never_overwritten(self) -> None:
        fs = _fs("/dev/sda1")
        fs.add_link("/tmp/link")
        assert isinstance(smart_delete("/tmp/link", fs=fs), Ok)
        assert fs.calls == [("unlink", "/tmp/link")]

    def test_directory_is_removed_recursively_without_shredding(self) -> None:
        fs = _fs("/dev/sda1")
        fs.add_file("/tmp/cache/a.bin", size=5)
        fs.add_file("/tmp/cache/sub/b.bin", size=5)
        assert isinstance(smart_delete("/tmp/cache", fs=fs), Ok)
        assert fs.calls == [("rmtree", "/tmp/cache")]
        assert not fs.exists("/tmp/cache/sub/b.bin")

    def test_unlink_failure(self) -> None:
        fs = _fs("/dev/nvme0n1p1")
        fs.add_file("/tmp/a")
        fs.fail_on("unlink", "/tmp/a")
        result = smart_delete("/tmp/a", fs=fs)
        assert isinstance(result, Err)
        assert result.err_value.code is DeleteErrorCode.UNLINK_FAILED
        assert result.err_value.path == "/tmp/a"

    def test_secure_wipe_failure_keeps_file(self) -> None:
        fs = _fs("/dev/sda1")
        fs.add_file("/tmp/a", size=3)
        fs.fail_on("overwrite", "/tmp/a")
        result = smart_delete("/tmp/a", fs=fs)
        assert isinstance(result, Err)
        assert result.err_value.code is DeleteErrorCode.SECURE_WIPE_FAILED
        assert fs.exists("/tmp/a")

    def test_recursive_remove_failure(self) -> None:
        fs = _fs("/dev/sda1")
        fs.add_dir("/tmp/cache")
        fs.fail_on("rmtree", "/tmp/cache")
        result = smart_delete("/tmp/cache", fs=fs)
        assert isinstance(result, Err)
        assert result.err_value.code is DeleteErrorCode.RECURSIVE_REMOVE_FAILED


class TestOnDisk:
    def test_shred_file_removes_file(self, tmp_path: Path) -> None:
        target = tmp_path / "secret.txt"
        target.write_bytes(b"top secret" * 1000)
        shred_file(str(target), OsFileSystem(), passes=1)
        assert not target.exists()

    def test_overwrite_zero_fills_full_length(self, tmp_path: Path) -> None:
        target = tmp_path / "data.bin"
        target.write_bytes(b"\xff" * 70000)
        OsFileSystem().overwrite(str(target), bytes)
        assert target.read_bytes() == bytes(70000)

    def test_smart_delete_directory(self, tmp_path: Path) -> None:
        cache = tmp_path / "cache"
        (cache / "nested").mkdir(parents=True)
        (cache / "nested" / "x.tmp").write_text("x")
        fs = OsFileSystem()
        result = smart_delete(str(cache), fs=fs, classifier=DeviceClassifier(fs, rotational_devices=()))
        assert isinstance(result, Ok)
        assert not cache.exists()

    def test_smart_delete_dangling_symlink(self, tmp_path: Path) -> None:
        link = tmp_path / "link"
        link.symlink_to(tmp_path / "nowhere")
        fs = OsFileSystem()
        assert isinstance(smart_delete(str(link), fs=fs), Ok)
        assert not link.is_symlink()
