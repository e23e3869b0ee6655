from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from roomba.models.enums import Category
from roomba.models.job import JobSpec


def _get_float(data: dict[str, Any], json_key: str, default: float, minimum: float) -> float:
    return max(minimum, float(data.get(json_key, default)))


def _get_timeout(data: dict[str, Any], default: float | None) -> float | None:
    # Zero or negative disables the timeout.
    raw = data.get("jobTimeout", default)
    if raw is None or float(raw) <= 0:
        return None
    return float(raw)


@dataclass(slots=True)
class AppConfig:
    rotational_devices: list[str] = field(default_factory=lambda: ["sda"])
    shred_passes: int = 1
    poll_interval: float = 0.1
    job_timeout: float | None = None
    extra_jobs: dict[Category, list[JobSpec]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rotationalDevices": list(self.rotational_devices),
            "shredPasses": self.shred_passes,
            "pollInterval": self.poll_interval,
            "jobTimeout": self.job_timeout,
            "extraJobs": {cat.value: [spec.to_dict() for spec in specs] for cat, specs in self.extra_jobs.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], defaults: AppConfig) -> AppConfig:
        devices_raw = data.get("rotationalDevices")
        if devices_raw is not None:
            rotational_devices = [str(d) for d in devices_raw]
        else:
            rotational_devices = list(defaults.rotational_devices)

        extra_raw = data.get("extraJobs")
        if extra_raw is not None:
            extra_jobs = {Category(cat): [JobSpec.from_dict(x) for x in specs] for cat, specs in extra_raw.items()}
        else:
            extra_jobs = {cat: list(specs) for cat, specs in defaults.extra_jobs.items()}

        return cls(
            rotational_devices=rotational_devices,
            shred_passes=max(0, int(data.get("shredPasses", defaults.shred_passes))),
            poll_interval=_get_float(data, "pollInterval", defaults.poll_interval, 0.01),
            job_timeout=_get_timeout(data, defaults.job_timeout),
            extra_jobs=extra_jobs,
        )
