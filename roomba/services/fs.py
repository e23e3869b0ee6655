from __future__ import annotations

import glob as globmod
import os
import shutil
import stat as statmod
from collections.abc import Callable, Iterator
from typing import Protocol

import psutil

from roomba.models.enums import NodeKind

# Overwrite passes write in 64 KiB chunks so large files never sit in memory.
_CHUNK = 1 << 16


class FileSystem(Protocol):
    """Host filesystem primitives used by the deletion engine.

    Everything that touches the disk goes through this seam so tests can run
    the whole engine against an in-memory fake.
    """

    def expanduser(self, path: str) -> str: ...

    def glob(self, pattern: str) -> list[str]: ...

    def kind(self, path: str) -> NodeKind: ...

    def exists(self, path: str) -> bool: ...

    def mount_device(self, path: str) -> str | None: ...

    def overwrite(self, path: str, fill: Callable[[int], bytes]) -> None: ...

    def unlink(self, path: str) -> None: ...

    def rmtree(self, path: str) -> None: ...

    def makedirs(self, path: str) -> None: ...

    def truncate(self, path: str) -> None: ...

    def walk_files(self, root: str) -> Iterator[str]: ...

    def read_text(self, path: str) -> str: ...


def has_magic(path: str) -> bool:
    return globmod.has_magic(path)


class OsFileSystem:
    def expanduser(self, path: str) -> str:
        return os.path.expanduser(path)

    def glob(self, pattern: str) -> list[str]:
        return sorted(globmod.glob(pattern, include_hidden=True))

    def kind(self, path: str) -> NodeKind:
        # lstat: a symlink is reported as OTHER and is unlinked, never followed.
        try:
            st = os.lstat(path)
        except FileNotFoundError:
            return NodeKind.MISSING
        if statmod.S_ISDIR(st.st_mode):
            return NodeKind.DIRECTORY
        if statmod.S_ISREG(st.st_mode):
            return NodeKind.FILE
        return NodeKind.OTHER

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def mount_device(self, path: str) -> str | None:
        """Return the device of the mount containing *path* (longest mountpoint prefix)."""
        real = os.path.realpath(path)
        try:
            partitions = psutil.disk_partitions(all=True)
        except psutil.Error as exc:
            raise OSError(f"Cannot read mount table: {exc}") from exc

        best_mount = ""
        device: str | None = None
        for part in partitions:
            mountpoint = part.mountpoint
            inside = real == mountpoint or real.startswith(mountpoint.rstrip("/") + "/")
            if inside and len(mountpoint) > len(best_mount):
                best_mount = mountpoint
                device = part.device
        return device

    def overwrite(self, path: str, fill: Callable[[int], bytes]) -> None:
        size = os.lstat(path).st_size
        with open(path, "r+b", buffering=0) as fh:
            written = 0
            while written < size:
                chunk = min(_CHUNK, size - written)
                fh.write(fill(chunk))
                written += chunk
            os.fsync(fh.fileno())

    def unlink(self, path: str) -> None:
        os.unlink(path)

    def rmtree(self, path: str) -> None:
        shutil.rmtree(path)

    def makedirs(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)

    def truncate(self, path: str) -> None:
        os.truncate(path, 0)

    def walk_files(self, root: str) -> Iterator[str]:
        for dirpath, _dirnames, filenames in os.walk(root):
            for name in filenames:
                full = os.path.join(dirpath, name)
                if os.path.isfile(full) and not os.path.islink(full):
                    yield full

    def read_text(self, path: str) -> str:
        with open(path, encoding="utf-8") as fh:
            return fh.read()


DEFAULT_FS: FileSystem = OsFileSystem()
