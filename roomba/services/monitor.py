# Progress monitor: run one batch job in the background, render progress here.
#
# Model:
#   A producer/poller pair, not a pool.  The job runs on one daemon thread
#   that completes a Future; the foreground thread polls Future.done() every
#   poll_interval and redraws "<label>... [spinner] [elapsed]" in place.
#
# Terminal state:
#   The cursor is hidden while the live line is shown and is restored by
#   hidden_cursor() on every way out of execute(): normal completion, an
#   exception raised inside the job, a timeout, or KeyboardInterrupt.
#
# Cancellation:
#   The job checks a threading.Event between operations.  Ctrl+C and the
#   optional per-job timeout set it, and execute() then waits for the unit
#   to stop at its next check before returning or re-raising.  No operation
#   is ever cut off halfway, and the next job never starts while the
#   previous one is still running.  An operation that blocks forever still
#   blocks the run; the timeout only stops what comes after it.

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterator
from concurrent.futures import Future, wait
from contextlib import contextmanager

from rich.console import Console
from rich.live import Live
from rich.text import Text

from roomba.models.enums import DeleteErrorCode, JobStatus
from roomba.models.job import BatchJob, DeleteError, ExecutionResult
from roomba.services.batch import OperationExecutor, run_job
from roomba.services.formatting import format_elapsed

logger = logging.getLogger(__name__)

SPINNER_FRAMES: tuple[str, ...] = ("|/|", "/\\/", "-|-", "\\-\\")
DEFAULT_POLL_INTERVAL = 0.1

_FINAL_TAGS: dict[JobStatus, str] = {
    JobStatus.SUCCESS: "Done",
    JobStatus.FAILED: "Done",
    JobStatus.CANCELLED: "Cancelled",
    JobStatus.TIMED_OUT: "Timed out",
}


@contextmanager
def hidden_cursor(console: Console) -> Iterator[None]:
    """Hide the cursor for the duration of the block and show it again on exit.

    Terminals offer no query for cursor visibility, so the state on entry is
    taken to be "visible" (the terminal default) and that is what gets
    restored.  On a non-terminal console both calls are no-ops.
    """
    console.show_cursor(False)
    try:
        yield
    finally:
        console.show_cursor(True)


def progress_line(title: str, frame: int, elapsed: float) -> Text:
    spinner = SPINNER_FRAMES[frame % len(SPINNER_FRAMES)]
    return Text(f"{title} [{spinner}] [{format_elapsed(elapsed)}]")


def failure_note(result: ExecutionResult) -> str:
    detail = result.status.value
    if result.error is not None:
        detail = f"{result.error.code.value} ({result.error.path})"
    if result.failures > 1:
        detail += f", {result.failures} failures"
    return f"  └─ Failed with status {detail}. This may be normal for some cleanup tasks."


class ProgressMonitor:
    def __init__(
        self,
        executor: OperationExecutor,
        console: Console | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: float | None = None,
    ) -> None:
        self._executor = executor
        self._console = console if console is not None else Console(highlight=False)
        self._poll_interval = max(0.01, poll_interval)
        self._timeout = timeout

    @property
    def console(self) -> Console:
        return self._console

    def _start(self, job: BatchJob, cancel: threading.Event) -> Future[ExecutionResult]:
        future: Future[ExecutionResult] = Future()

        def _unit() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(run_job(job, self._executor, cancel.is_set))
            except Exception as exc:  # noqa: BLE001
                # Anything raised inside the job is delivered to the poller
                # through the Future and reported there.
                future.set_exception(exc)

        threading.Thread(target=_unit, name=f"roomba-job:{job.label}", daemon=True).start()
        return future

    def _poll(self, title: str, future: Future[ExecutionResult], start: float) -> bool:
        """Render until *future* completes.  Returns False if the timeout hit first."""
        frame = 0
        with Live(console=self._console, transient=True, auto_refresh=False) as live:
            while not future.done():
                elapsed = time.monotonic() - start
                if self._timeout is not None and elapsed >= self._timeout:
                    return False
                live.update(progress_line(title, frame, elapsed), refresh=True)
                frame += 1
                time.sleep(self._poll_interval)
        return True

    def _collect(self, job: BatchJob, future: Future[ExecutionResult]) -> ExecutionResult:
        try:
            return future.result()
        except Exception as exc:  # noqa: BLE001
            logger.exception("%s raised inside the background unit", job.label)
            return ExecutionResult(
                label=job.label,
                status=JobStatus.FAILED,
                error=DeleteError(DeleteErrorCode.INTERNAL, "", str(exc)),
                failures=1,
            )

    def execute(self, job: BatchJob) -> ExecutionResult:
        title = f"{job.label}..."
        cancel = threading.Event()
        start = time.monotonic()
        future = self._start(job, cancel)

        with hidden_cursor(self._console):
            try:
                finished = self._poll(title, future, start)
            except KeyboardInterrupt:
                cancel.set()
                logger.warning("%s interrupted; stopping after the current operation", job.label)
                wait([future])
                raise
            if not finished:
                cancel.set()
                logger.warning("%s exceeded %.1fs; stopping after the current operation", job.label, self._timeout)
                wait([future])

        result = self._collect(job, future)
        if not finished and result.status is JobStatus.CANCELLED:
            result.status = JobStatus.TIMED_OUT
        result.elapsed = time.monotonic() - start
        self.report(title, result)
        return result

    def report(self, title: str, result: ExecutionResult) -> None:
        tag = _FINAL_TAGS.get(result.status, "Done")
        self._console.print(Text(f"{title} [{tag}] [{format_elapsed(result.elapsed)}]"))
        if result.status in (JobStatus.FAILED, JobStatus.TIMED_OUT):
            self._console.print(Text(failure_note(result)))
