from __future__ import annotations

import json
from typing import Any

from result import Err, Ok, Result

from roomba.config.defaults import default_config
from roomba.config.schema import AppConfig
from roomba.models.enums import Category
from roomba.services.fs import DEFAULT_FS, FileSystem

CONFIG_PATH = "~/.config/roomba/config.json"

_CATEGORY_VALUES = frozenset(cat.value for cat in Category)
_CATEGORY_KEYS = ", ".join(cat.value for cat in Category)


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _check_job(category: str, index: int, job: Any) -> str | None:
    where = f"extraJobs.{category}[{index}]"
    if not isinstance(job, dict):
        return f"{where} must be an object."
    label = job.get("label")
    if not isinstance(label, str) or not label:
        return f"{where} needs a non-empty 'label'."
    for key in ("candidates", "truncate", "purge"):
        if not isinstance(job.get(key, []), list):
            return f"{where}.{key} must be a list."
    for entry in job.get("purge", []):
        if not isinstance(entry, dict) or "root" not in entry or "pattern" not in entry:
            return f"{where}.purge entries need 'root' and 'pattern'."
    return None


def validate_payload(payload: dict[str, Any]) -> str | None:
    """Return a message naming the first bad field, or None if *payload* is usable."""
    devices = payload.get("rotationalDevices")
    if devices is not None and (
        not isinstance(devices, list) or not all(isinstance(d, str) for d in devices)
    ):
        return "rotationalDevices must be a list of device names."

    for key in ("shredPasses", "pollInterval"):
        if key in payload and not _is_number(payload[key]):
            return f"{key} must be a number."

    timeout = payload.get("jobTimeout")
    if timeout is not None and not _is_number(timeout):
        return "jobTimeout must be a number of seconds or null."

    extra = payload.get("extraJobs")
    if extra is None:
        return None
    if not isinstance(extra, dict):
        return "extraJobs must be an object keyed by category."
    for category, jobs in extra.items():
        if category not in _CATEGORY_VALUES:
            return f"Unknown category {category!r} in extraJobs; expected one of {_CATEGORY_KEYS}."
        if not isinstance(jobs, list):
            return f"extraJobs.{category} must be a list of jobs."
        for index, job in enumerate(jobs):
            problem = _check_job(category, index, job)
            if problem is not None:
                return problem
    return None


def load_config(path: str | None = None, fs: FileSystem = DEFAULT_FS) -> Result[AppConfig, str]:
    resolved = fs.expanduser(path or CONFIG_PATH)
    if not fs.exists(resolved):
        return Ok(default_config())

    try:
        text = fs.read_text(resolved)
    except OSError as exc:
        return Err(f"Cannot read config at {resolved}: {exc.strerror or exc}.")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        return Err(f"Config at {resolved} is not valid JSON (line {exc.lineno}, column {exc.colno}).")

    if not isinstance(payload, dict):
        return Err(f"Config at {resolved} must be a JSON object.")

    problem = validate_payload(payload)
    if problem is not None:
        return Err(f"Config at {resolved}: {problem}")
    return Ok(AppConfig.from_dict(payload, default_config()))


def sample_config_json() -> str:
    return json.dumps(default_config().to_dict(), indent=2)
