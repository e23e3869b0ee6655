from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from result import Result

from roomba.models.enums import DeleteErrorCode, JobStatus


CancelCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class DeleteError:
    code: DeleteErrorCode
    path: str
    message: str


DeleteResult = Result[None, DeleteError]


# --- operations ---------------------------------------------------------
#
# A batch job is an ordered tuple of these values.  The executor interprets
# them directly; nothing is ever joined into a shell command line, so paths
# with spaces or quotes need no escaping.


@dataclass(slots=True, frozen=True)
class Remove:
    """Smart-delete a file (shred or unlink) or recursively remove a directory."""

    path: str


@dataclass(slots=True, frozen=True)
class Recreate:
    """Create *path* as an empty directory (after a ``Remove`` of the same path)."""

    path: str


@dataclass(slots=True, frozen=True)
class Truncate:
    """Empty a file in place without removing it (live log files)."""

    path: str


@dataclass(slots=True, frozen=True)
class Purge:
    """Delete every regular file below *root* whose name matches *pattern*."""

    root: str
    pattern: str


type Operation = Remove | Recreate | Truncate | Purge


@dataclass(slots=True, frozen=True)
class JobSpec:
    label: str
    candidates: tuple[str, ...] = ()
    recreate: bool = False
    truncate: tuple[str, ...] = ()
    purge: tuple[tuple[str, str], ...] = ()
    keep_going: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "candidates": list(self.candidates),
            "recreate": self.recreate,
            "truncate": list(self.truncate),
            "purge": [{"root": root, "pattern": pattern} for root, pattern in self.purge],
            "keepGoing": self.keep_going,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> JobSpec:
        return cls(
            label=str(payload["label"]),
            candidates=tuple(str(p) for p in payload.get("candidates", ())),
            recreate=bool(payload.get("recreate", False)),
            truncate=tuple(str(p) for p in payload.get("truncate", ())),
            purge=tuple((str(x["root"]), str(x["pattern"])) for x in payload.get("purge", ())),
            keep_going=bool(payload.get("keepGoing", False)),
        )


@dataclass(slots=True, frozen=True)
class BatchJob:
    label: str
    operations: tuple[Operation, ...] = ()
    keep_going: bool = False

    @property
    def found(self) -> bool:
        return bool(self.operations)


@dataclass(slots=True)
class ExecutionResult:
    label: str
    status: JobStatus
    elapsed: float = 0.0
    error: DeleteError | None = None
    attempted: int = 0
    failures: int = 0
    skipped: list[Operation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status.ok
