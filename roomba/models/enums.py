from __future__ import annotations

from enum import Enum


class NodeKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"
    MISSING = "missing"


class Category(str, Enum):
    BROWSERS = "browsers"
    OS_HISTORY = "os_history"
    APP_HISTORY = "app_history"
    APP_CACHES = "app_caches"
    AI_HISTORY = "ai_history"
    SYSTEM_LOGS = "system_logs"

    @property
    def letter(self) -> str:
        return _LETTERS[self]

    @property
    def requires_admin(self) -> bool:
        return self is Category.SYSTEM_LOGS

    @classmethod
    def from_letter(cls, letter: str) -> Category | None:
        return _FROM_LETTER.get(letter.lower())


_LETTERS: dict[Category, str] = {
    Category.BROWSERS: "q",
    Category.OS_HISTORY: "w",
    Category.APP_HISTORY: "e",
    Category.APP_CACHES: "r",
    Category.AI_HISTORY: "t",
    Category.SYSTEM_LOGS: "s",
}

_FROM_LETTER: dict[str, Category] = {v: k for k, v in _LETTERS.items()}


class DeleteErrorCode(str, Enum):
    UNLINK_FAILED = "unlink_failed"
    SECURE_WIPE_FAILED = "secure_wipe_failed"
    RECURSIVE_REMOVE_FAILED = "recursive_remove_failed"
    RECREATE_FAILED = "recreate_failed"
    TRUNCATE_FAILED = "truncate_failed"
    PURGE_FAILED = "purge_failed"
    INTERNAL = "internal"


class JobStatus(str, Enum):
    NOT_FOUND = "not_found"
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"

    @property
    def ok(self) -> bool:
        return self in (JobStatus.NOT_FOUND, JobStatus.SUCCESS)
