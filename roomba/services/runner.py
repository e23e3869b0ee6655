from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from rich.text import Text

from roomba.models.enums import JobStatus
from roomba.models.job import ExecutionResult, JobSpec
from roomba.services.batch import build_job
from roomba.services.fs import DEFAULT_FS, FileSystem
from roomba.services.monitor import ProgressMonitor

logger = logging.getLogger(__name__)


def unique_specs(specs: Iterable[JobSpec]) -> list[JobSpec]:
    """Drop repeated job specs, keeping the first occurrence and its position."""
    return list(dict.fromkeys(specs))


def run_specs(
    specs: Sequence[JobSpec],
    monitor: ProgressMonitor,
    fs: FileSystem = DEFAULT_FS,
) -> list[ExecutionResult]:
    """Build and run each spec one at a time, in order.

    A failing job is reported and the loop moves on to the next one.
    """
    results: list[ExecutionResult] = []
    for spec in unique_specs(specs):
        job = build_job(spec, fs)
        if not job.found:
            monitor.console.print(Text(f"{spec.label}... Not found, skipping."))
            results.append(ExecutionResult(label=spec.label, status=JobStatus.NOT_FOUND))
            continue
        logger.debug("%s: %d operation(s)", job.label, len(job.operations))
        results.append(monitor.execute(job))
    return results
