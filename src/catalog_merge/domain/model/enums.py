"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    """Typed-reference discriminator for polymorphic ownership (identifiers, images, etc.)."""

    ARTIST = "artist"
    ALBUM = "album"
    SONG = "song"


class SongRelationType(StrEnum):
    COVER = "cover"
    REMIX = "remix"
    SAMPLE = "sample"
    ALTERNATE = "alternate"


class JobType(StrEnum):
    """Downstream work consumed by external workers."""

    REINDEX_ENTITY = "reindex_entity"
    UNINDEX_ENTITY = "unindex_entity"
    CALCULATE_WEIGHTS = "bulk_calculate_weights"
    RECALCULATE_RANKINGS = "recalculate_ranking_configuration"
