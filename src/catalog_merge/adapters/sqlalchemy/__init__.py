"""SQLAlchemy adapter package for the catalog."""

from __future__ import annotations

from .inventory import attachment_columns, uncovered_attachments
from .mappings import TABLE_BY_KIND, mapper_registry, start_mappers
from .repositories import SqlAlchemyMergeRepository
from .unit_of_work import SqlAlchemyMergeUnitOfWork, shutdown, startup

__all__ = [
    "TABLE_BY_KIND",
    "SqlAlchemyMergeRepository",
    "SqlAlchemyMergeUnitOfWork",
    "attachment_columns",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
    "uncovered_attachments",
]
