# Batch jobs: build a typed operation list from a catalog entry, then run it.
#
# Build phase (foreground, before any progress rendering):
#   Expand ~ and glob wildcards, keep only candidates that exist right now,
#   and emit operations in candidate order.  A job with no operations is
#   "not found" and is never handed to the progress monitor.
#
# Run phase (background unit):
#   Operations run in order.  By default the first failure stops the rest of
#   the job (the equivalent of an `a && b && c` chain); keep_going jobs try
#   every operation and report the first error.  Either way a failure never
#   escapes the job: it comes back as an ExecutionResult.
#
# Existence is checked at build time and again by each operation, so a path
# that vanished in between is simply a no-op.

from __future__ import annotations

import fnmatch
import logging
import os
import time

from result import Err, Ok

from roomba.models.enums import DeleteErrorCode, JobStatus, NodeKind
from roomba.models.job import (
    BatchJob,
    CancelCheck,
    DeleteError,
    DeleteResult,
    ExecutionResult,
    JobSpec,
    Operation,
    Purge,
    Recreate,
    Remove,
    Truncate,
)
from roomba.services.delete import smart_delete
from roomba.services.device import DeviceClassifier
from roomba.services.fs import DEFAULT_FS, FileSystem, has_magic

logger = logging.getLogger(__name__)


def expand_candidates(candidates: tuple[str, ...], fs: FileSystem) -> list[str]:
    """Expand ``~`` and wildcards; existing paths only, input order, no duplicates."""
    seen: set[str] = set()
    out: list[str] = []
    for raw in candidates:
        expanded = fs.expanduser(raw)
        matches = fs.glob(expanded) if has_magic(expanded) else [expanded]
        for path in matches:
            if path not in seen and fs.exists(path):
                seen.add(path)
                out.append(path)
    return out


def build_job(spec: JobSpec, fs: FileSystem = DEFAULT_FS) -> BatchJob:
    operations: list[Operation] = []
    for path in expand_candidates(spec.candidates, fs):
        operations.append(Remove(path))
        if spec.recreate and fs.kind(path) is NodeKind.DIRECTORY:
            operations.append(Recreate(path))

    for root, pattern in spec.purge:
        expanded = fs.expanduser(root)
        if fs.kind(expanded) is NodeKind.DIRECTORY:
            operations.append(Purge(expanded, pattern))

    operations.extend(Truncate(path) for path in expand_candidates(spec.truncate, fs))

    return BatchJob(label=spec.label, operations=tuple(operations), keep_going=spec.keep_going)


class OperationExecutor:
    """Interprets the typed operations of a batch job against a filesystem."""

    def __init__(
        self,
        fs: FileSystem = DEFAULT_FS,
        classifier: DeviceClassifier | None = None,
        passes: int = 1,
    ) -> None:
        self._fs = fs
        self._classifier = classifier if classifier is not None else DeviceClassifier(fs)
        self._passes = passes

    def delete(self, path: str) -> DeleteResult:
        return smart_delete(path, fs=self._fs, classifier=self._classifier, passes=self._passes)

    def apply(self, op: Operation) -> DeleteResult:
        match op:
            case Remove(path=path):
                return self.delete(path)
            case Recreate(path=path):
                try:
                    self._fs.makedirs(path)
                except OSError as exc:
                    return Err(DeleteError(DeleteErrorCode.RECREATE_FAILED, path, str(exc)))
                return Ok(None)
            case Truncate(path=path):
                if not self._fs.exists(path):
                    return Ok(None)
                try:
                    self._fs.truncate(path)
                except OSError as exc:
                    return Err(DeleteError(DeleteErrorCode.TRUNCATE_FAILED, path, str(exc)))
                return Ok(None)
            case Purge(root=root, pattern=pattern):
                return self._purge(root, pattern)
        msg = f"Unknown operation: {op!r}"
        raise TypeError(msg)

    def _purge(self, root: str, pattern: str) -> DeleteResult:
        # Like `find ROOT -type f -name PATTERN -delete`: keep going past
        # individual failures and report the first one.
        first: DeleteError | None = None
        try:
            for path in list(self._fs.walk_files(root)):
                if not fnmatch.fnmatchcase(os.path.basename(path), pattern):
                    continue
                result = self.delete(path)
                if isinstance(result, Err) and first is None:
                    first = result.err_value
        except OSError as exc:
            return Err(DeleteError(DeleteErrorCode.PURGE_FAILED, root, str(exc)))
        if first is not None:
            return Err(DeleteError(DeleteErrorCode.PURGE_FAILED, first.path, first.message))
        return Ok(None)


def run_job(
    job: BatchJob,
    executor: OperationExecutor,
    cancel_check: CancelCheck | None = None,
) -> ExecutionResult:
    """Run every operation of *job* in order and summarize the outcome."""
    if not job.found:
        return ExecutionResult(label=job.label, status=JobStatus.NOT_FOUND)

    start = time.monotonic()
    result = ExecutionResult(label=job.label, status=JobStatus.SUCCESS)
    ops = list(job.operations)
    for index, op in enumerate(ops):
        if cancel_check is not None and cancel_check():
            result.status = JobStatus.CANCELLED
            result.skipped = ops[index:]
            break

        result.attempted += 1
        outcome = executor.apply(op)
        if isinstance(outcome, Ok):
            continue

        result.failures += 1
        if result.error is None:
            result.error = outcome.err_value
        logger.info("%s: %s failed (%s)", job.label, op, outcome.err_value.code.value)
        if not job.keep_going:
            result.skipped = ops[index + 1 :]
            break

    if result.error is not None and result.status is JobStatus.SUCCESS:
        result.status = JobStatus.FAILED
    result.elapsed = time.monotonic() - start
    return result
