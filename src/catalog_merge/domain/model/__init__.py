"""Public domain model surface."""

from __future__ import annotations

from catalog_merge.domain.model.catalog import CLASS_BY_KIND, Album, Artist, CatalogEntity, Song
from catalog_merge.domain.model.entity import Entity, EntityRef, new_id
from catalog_merge.domain.model.enums import EntityKind, JobType, SongRelationType
from catalog_merge.domain.model.ranking import RankedItem, RankingConfiguration

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "EntityRef",
    "new_id",
    # catalog
    "CatalogEntity",
    "Artist",
    "Album",
    "Song",
    "CLASS_BY_KIND",
    # ranking
    "RankingConfiguration",
    "RankedItem",
    # enums
    "EntityKind",
    "JobType",
    "SongRelationType",
]
