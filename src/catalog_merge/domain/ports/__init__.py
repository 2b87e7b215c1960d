"""Ports implemented by adapters."""

from __future__ import annotations

from .persistence import AttachedRow, MergeRepository
from .unit_of_work import MergeRepositories, MergeUnitOfWork, RepositoryCollection, UnitOfWork
from .work_queue import Job, WorkQueue

__all__ = [
    "AttachedRow",
    "Job",
    "MergeRepositories",
    "MergeRepository",
    "MergeUnitOfWork",
    "RepositoryCollection",
    "UnitOfWork",
    "WorkQueue",
]
