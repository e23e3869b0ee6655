from __future__ import annotations

import logging
import os

from result import Err, Ok

from roomba.models.enums import DeleteErrorCode, NodeKind
from roomba.models.job import DeleteError, DeleteResult
from roomba.services.device import DeviceClassifier
from roomba.services.fs import DEFAULT_FS, FileSystem

logger = logging.getLogger(__name__)


def _zeros(n: int) -> bytes:
    return bytes(n)


def shred_file(path: str, fs: FileSystem = DEFAULT_FS, passes: int = 1) -> None:
    """Overwrite *path* with random data *passes* times, then zeros, then unlink.

    Same sequence as ``shred -n <passes> -z -u``.  Raises ``OSError`` if any
    step cannot complete.  Best effort only: journaling filesystems and drive
    firmware may keep copies of the old blocks.
    """
    for _ in range(passes):
        fs.overwrite(path, os.urandom)
    fs.overwrite(path, _zeros)
    fs.unlink(path)


def smart_delete(
    path: str,
    *,
    fs: FileSystem = DEFAULT_FS,
    classifier: DeviceClassifier | None = None,
    passes: int = 1,
) -> DeleteResult:
    """Remove *path* using the strategy that fits its storage device.

    - missing: nothing to do, ``Ok``
    - regular file on a rotational drive: shred, then unlink
    - any other file (flash storage, symlinks, special files): plain unlink
    - directory: plain recursive removal, contents are never shredded
    """
    kind = fs.kind(path)
    if kind is NodeKind.MISSING:
        return Ok(None)

    if kind is NodeKind.DIRECTORY:
        try:
            fs.rmtree(path)
        except OSError as exc:
            logger.warning("Recursive remove failed for %s: %s", path, exc)
            return Err(DeleteError(DeleteErrorCode.RECURSIVE_REMOVE_FAILED, path, str(exc)))
        logger.debug("Removed directory %s", path)
        return Ok(None)

    if classifier is None:
        classifier = DeviceClassifier(fs)

    if kind is NodeKind.FILE and classifier.classify(path):
        try:
            shred_file(path, fs, passes)
        except OSError as exc:
            logger.warning("Secure wipe failed for %s: %s", path, exc)
            return Err(DeleteError(DeleteErrorCode.SECURE_WIPE_FAILED, path, str(exc)))
        logger.debug("Shredded %s", path)
        return Ok(None)

    try:
        fs.unlink(path)
    except OSError as exc:
        logger.warning("Unlink failed for %s: %s", path, exc)
        return Err(DeleteError(DeleteErrorCode.UNLINK_FAILED, path, str(exc)))
    logger.debug("Unlinked %s", path)
    return Ok(None)
