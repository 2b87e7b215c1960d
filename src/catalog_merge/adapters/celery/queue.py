"""Work queue backed by a Celery broker.

Jobs are published by name with ``send_task``; the workers that execute them
live in other services and are never imported here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from celery import Celery

if TYPE_CHECKING:
    from datetime import timedelta

    from catalog_merge.config import QueueConfig
    from catalog_merge.domain.ports.work_queue import Job

log = logging.getLogger(__name__)


def build_celery_app(config: QueueConfig) -> Celery:
    app = Celery(config.app_name, broker=config.broker_url)
    app.conf.update(
        task_serializer="json",
        accept_content=["json"],
        timezone="UTC",
        enable_utc=True,
        broker_connection_retry_on_startup=True,
    )
    return app


class CeleryWorkQueue:
    """``WorkQueue`` publishing each job as a named Celery task."""

    def __init__(self, app: Celery) -> None:
        self.app = app

    def enqueue(self, job: Job, *, delay: timedelta | None = None) -> None:
        countdown = delay.total_seconds() if delay is not None else None
        result = self.app.send_task(str(job.type), kwargs=dict(job.payload), countdown=countdown)
        log.debug(
            "Enqueued %s %s as task %s (countdown=%s)",
            job.type,
            dict(job.payload),
            result.id,
            countdown,
        )


if TYPE_CHECKING:
    from catalog_merge.domain.ports.work_queue import WorkQueue

    _queue_check: WorkQueue = CeleryWorkQueue(Celery())
