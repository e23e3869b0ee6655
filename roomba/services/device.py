from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from roomba.services.fs import DEFAULT_FS, FileSystem

logger = logging.getLogger(__name__)

DEFAULT_ROTATIONAL_DEVICES: tuple[str, ...] = ("sda",)

# Devices whose whole-disk name already ends in a digit use a "p" separator
# before the partition number (nvme0n1p3, mmcblk0p1, loop0p2).  Everything
# else is the classic sdXN / hdXN / vdXN form.
_P_SEPARATED = re.compile(r"^((?:nvme\d+n\d+)|(?:mmcblk\d+)|(?:loop\d+)|(?:nbd\d+))(?:p\d+)?$")
_TRAILING_DIGITS = re.compile(r"\d+$")


def base_device_name(device: str) -> str:
    """Strip the ``/dev/`` prefix and any partition suffix from *device*.

    >>> base_device_name("/dev/nvme0n1p3")
    'nvme0n1'
    >>> base_device_name("/dev/sda1")
    'sda'
    """
    name = device.rstrip("/").rsplit("/", 1)[-1]
    match = _P_SEPARATED.match(name)
    if match:
        return match.group(1)
    return _TRAILING_DIGITS.sub("", name)


class DeviceClassifier:
    """Decide whether a path lives on a rotational (mechanical) drive.

    The verdict comes from an allow-list of base device names, not from the
    kernel's rotational flag.  Anything that cannot be resolved is reported as
    non-rotational so the engine falls back to a plain unlink.
    """

    def __init__(
        self,
        fs: FileSystem = DEFAULT_FS,
        rotational_devices: Iterable[str] = DEFAULT_ROTATIONAL_DEVICES,
    ) -> None:
        self._fs = fs
        self._rotational = frozenset(rotational_devices)

    def device_for(self, path: str) -> str | None:
        try:
            device = self._fs.mount_device(path)
        except OSError as exc:
            logger.debug("Device lookup failed for %s: %s", path, exc)
            return None
        return device or None

    def classify(self, path: str) -> bool:
        device = self.device_for(path)
        if device is None:
            logger.debug("No backing device for %s; treating as non-rotational", path)
            return False
        base = base_device_name(device)
        rotational = base in self._rotational
        logger.debug("%s is on %s (base %s), rotational=%s", path, device, base, rotational)
        return rotational
