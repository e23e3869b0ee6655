from __future__ import annotations

from roomba.config.catalog import CATALOG
from roomba.config.schema import AppConfig
from roomba.models.enums import Category
from roomba.models.job import JobSpec
from roomba.services.device import DEFAULT_ROTATIONAL_DEVICES


def default_config() -> AppConfig:
    return AppConfig(rotational_devices=list(DEFAULT_ROTATIONAL_DEVICES))


def jobs_for(category: Category, config: AppConfig) -> list[JobSpec]:
    """Built-in jobs for *category* followed by any configured extras."""
    return [*CATALOG[category], *config.extra_jobs.get(category, ())]
