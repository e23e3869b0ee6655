from __future__ import annotations

from io import StringIO

from rich.console import Console

from roomba.models.enums import JobStatus
from roomba.models.job import JobSpec
from roomba.services.batch import OperationExecutor
from roomba.services.monitor import ProgressMonitor
from roomba.services.runner import run_specs, unique_specs
from tests.fs_mock import MemoryFileSystem


def _setup() -> tuple[MemoryFileSystem, Console, ProgressMonitor]:
    fs = MemoryFileSystem()
    fs.add_mount("/", "/dev/nvme0n1p1")
    console = Console(file=StringIO(), force_terminal=True, width=200)
    monitor = ProgressMonitor(OperationExecutor(fs), console=console, poll_interval=0.01)
    return fs, console, monitor


def _output(c: Console) -> str:
    f = c.file
    assert isinstance(f, StringIO)
    return f.getvalue()


class TestUniqueSpecs:
    def test_keeps_first_occurrence_order(self) -> None:
        a = JobSpec("A", ("/a",))
        b = JobSpec("B", ("/b",))
        assert unique_specs([b, a, b, a]) == [b, a]


class TestRunSpecs:
    def test_not_found_job_prints_skip(self) -> None:
        fs, console, monitor = _setup()
        results = run_specs([JobSpec("Cleaning Nothing", ("/nope",))], monitor, fs)
        assert [r.status for r in results] == [JobStatus.NOT_FOUND]
        out = _output(console)
        assert "Cleaning Nothing... Not found, skipping." in out
        assert "[Done]" not in out

    def test_found_job_never_prints_not_found(self) -> None:
        fs, console, monitor = _setup()
        fs.add_file("/tmp/a")
        results = run_specs([JobSpec("Job", ("/tmp/a", "/tmp/b"))], monitor, fs)
        assert results[0].status is JobStatus.SUCCESS
        assert "Not found" not in _output(console)
        assert not fs.exists("/tmp/a")

    def test_failing_job_does_not_stop_the_next(self) -> None:
        fs, console, monitor = _setup()
        fs.add_file("/tmp/bad")
        fs.add_file("/tmp/good")
        fs.fail_on("unlink", "/tmp/bad")
        results = run_specs(
            [JobSpec("First", ("/tmp/bad",)), JobSpec("Second", ("/tmp/good",))],
            monitor,
            fs,
        )
        assert [r.status for r in results] == [JobStatus.FAILED, JobStatus.SUCCESS]
        assert not fs.exists("/tmp/good")
        out = _output(console)
        assert out.index("First...") < out.index("Second...")

    def test_duplicate_specs_run_once(self) -> None:
        fs, _, monitor = _setup()
        fs.add_file("/tmp/a")
        spec = JobSpec("Job", ("/tmp/a",))
        results = run_specs([spec, spec], monitor, fs)
        assert len(results) == 1
        assert fs.ops("unlink") == ["/tmp/a"]
