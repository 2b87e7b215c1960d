"""Work queue configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Final

from .env import env_seconds, require_env_vars

DEFAULT_RECALCULATION_DELAY: Final[timedelta] = timedelta(minutes=5)
DEFAULT_CELERY_APP_NAME: Final[str] = "catalog_merge"


@dataclass(frozen=True, slots=True)
class QueueConfig:
    broker_url: str
    recalculation_delay: timedelta = DEFAULT_RECALCULATION_DELAY
    app_name: str = DEFAULT_CELERY_APP_NAME


def get_queue_config() -> QueueConfig:
    values = require_env_vars(("CELERY_BROKER_URL",))
    return QueueConfig(
        broker_url=values["CELERY_BROKER_URL"],
        recalculation_delay=env_seconds(
            "CATALOG_MERGE_RECALCULATION_DELAY_SECONDS", DEFAULT_RECALCULATION_DELAY
        ),
    )
