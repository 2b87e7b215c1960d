"""Celery adapter for downstream reindex and ranking jobs."""

from __future__ import annotations

from .queue import CeleryWorkQueue, build_celery_app

__all__ = ["CeleryWorkQueue", "build_celery_app"]
