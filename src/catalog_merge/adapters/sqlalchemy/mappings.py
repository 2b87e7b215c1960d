"""SQLAlchemy mapping metadata for the catalog."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from functools import cache
from typing import Final

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from catalog_merge.domain.model import (
    Album,
    Artist,
    EntityKind,
    RankedItem,
    RankingConfiguration,
    Song,
    SongRelationType,
)

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _enum_values(enum_cls: type[StrEnum]) -> list[str]:
    return [member.value for member in enum_cls]


def _kind_column(name: str) -> Column[EntityKind]:
    return Column(
        name,
        Enum(EntityKind, native_enum=False, values_callable=_enum_values, name="entity_kind"),
        nullable=False,
    )


@dataclass(frozen=True, slots=True)
class PolymorphicOwner:
    """Marks a table whose rows point at any of ``kinds`` through a (type, id) pair."""

    type_column: str
    id_column: str
    kinds: frozenset[EntityKind]


ALL_KINDS: Final = frozenset(EntityKind)

mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Entities --------------------------------------------------------------------

artist_table = Table(
    "artist",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("country", String(2), nullable=True),
    Column("updated_at", UTCDateTime(), nullable=True),
)

album_table = Table(
    "album",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("title", String, nullable=False),
    Column("release_year", Integer, nullable=True),
    Column("primary_artist_id", UUIDColumnType, ForeignKey("artist.id"), nullable=True),
    Column("updated_at", UTCDateTime(), nullable=True),
)

song_table = Table(
    "song",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("title", String, nullable=False),
    Column("release_year", Integer, nullable=True),
    Column("updated_at", UTCDateTime(), nullable=True),
)

# Join rows and owned records -------------------------------------------------

album_artist_table = Table(
    "album_artist",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("artist_id", UUIDColumnType, ForeignKey("artist.id"), nullable=False),
    Column("album_id", UUIDColumnType, ForeignKey("album.id"), nullable=False),
    Column("position", Integer, nullable=True),
    UniqueConstraint("artist_id", "album_id"),
)

song_artist_table = Table(
    "song_artist",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("artist_id", UUIDColumnType, ForeignKey("artist.id"), nullable=False),
    Column("song_id", UUIDColumnType, ForeignKey("song.id"), nullable=False),
    Column("position", Integer, nullable=True),
    UniqueConstraint("artist_id", "song_id"),
)

artist_membership_table = Table(
    "artist_membership",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    # band -> member
    Column("artist_id", UUIDColumnType, ForeignKey("artist.id"), nullable=False),
    Column("member_id", UUIDColumnType, ForeignKey("artist.id"), nullable=False),
    Column("joined_year", Integer, nullable=True),
    Column("left_year", Integer, nullable=True),
    UniqueConstraint("artist_id", "member_id"),
)

credit_table = Table(
    "credit",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("artist_id", UUIDColumnType, ForeignKey("artist.id"), nullable=False),
    Column("role", String, nullable=False),
    Column("credited_as", String, nullable=True),
)

release_table = Table(
    "release",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("album_id", UUIDColumnType, ForeignKey("album.id"), nullable=False),
    Column("name", String, nullable=True),
    Column("format", String, nullable=False, default="cd"),
    UniqueConstraint("album_id", "name", "format"),
)

track_table = Table(
    "track",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("release_id", UUIDColumnType, ForeignKey("release.id"), nullable=False),
    Column("song_id", UUIDColumnType, ForeignKey("song.id"), nullable=False),
    Column("medium_number", Integer, nullable=False, default=1),
    Column("position", Integer, nullable=False),
    UniqueConstraint("release_id", "medium_number", "position"),
)

song_relationship_table = Table(
    "song_relationship",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("song_id", UUIDColumnType, ForeignKey("song.id"), nullable=False),
    Column("related_song_id", UUIDColumnType, ForeignKey("song.id"), nullable=False),
    Column(
        "relation_type",
        Enum(
            SongRelationType,
            native_enum=False,
            values_callable=_enum_values,
            name="song_relation_type",
        ),
        nullable=False,
    ),
    UniqueConstraint("song_id", "related_song_id", "relation_type"),
)

# Polymorphic attachments -----------------------------------------------------

identifier_table = Table(
    "identifier",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    _kind_column("identifiable_type"),
    Column("identifiable_id", UUIDColumnType, nullable=False),
    Column("identifier_type", String, nullable=False),
    Column("value", String, nullable=False),
    UniqueConstraint("identifiable_type", "identifier_type", "value"),
    Index("ix_identifier_owner", "identifiable_type", "identifiable_id"),
    info={
        "owner": PolymorphicOwner("identifiable_type", "identifiable_id", ALL_KINDS),
    },
)

category_table = Table(
    "category",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
)

category_item_table = Table(
    "category_item",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("category_id", UUIDColumnType, ForeignKey("category.id"), nullable=False),
    _kind_column("item_type"),
    Column("item_id", UUIDColumnType, nullable=False),
    UniqueConstraint("category_id", "item_type", "item_id"),
    Index("ix_category_item_owner", "item_type", "item_id"),
    info={"owner": PolymorphicOwner("item_type", "item_id", ALL_KINDS)},
)

catalog_list_table = Table(
    "catalog_list",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
)

list_item_table = Table(
    "list_item",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("list_id", UUIDColumnType, ForeignKey("catalog_list.id"), nullable=False),
    _kind_column("listable_type"),
    Column("listable_id", UUIDColumnType, nullable=False),
    Column("position", Integer, nullable=True),
    UniqueConstraint("list_id", "listable_type", "listable_id"),
    Index("ix_list_item_owner", "listable_type", "listable_id"),
    info={
        "owner": PolymorphicOwner(
            "listable_type", "listable_id", frozenset({EntityKind.ALBUM, EntityKind.SONG})
        ),
    },
)

image_table = Table(
    "image",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    _kind_column("parent_type"),
    Column("parent_id", UUIDColumnType, nullable=False),
    Column("url", String, nullable=False),
    Column("is_primary", Boolean, nullable=False, default=False),
    Index("ix_image_owner", "parent_type", "parent_id"),
    info={
        "owner": PolymorphicOwner(
            "parent_type", "parent_id", frozenset({EntityKind.ARTIST, EntityKind.ALBUM})
        ),
    },
)

external_link_table = Table(
    "external_link",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    _kind_column("parent_type"),
    Column("parent_id", UUIDColumnType, nullable=False),
    Column("url", String, nullable=False),
    Column("name", String, nullable=True),
    Index("ix_external_link_owner", "parent_type", "parent_id"),
    info={"owner": PolymorphicOwner("parent_type", "parent_id", ALL_KINDS)},
)

# Rankings --------------------------------------------------------------------

ranking_configuration_table = Table(
    "ranking_configuration",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
)

ranked_item_table = Table(
    "ranked_item",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "ranking_configuration_id",
        UUIDColumnType,
        ForeignKey("ranking_configuration.id"),
        nullable=False,
    ),
    _kind_column("item_type"),
    Column("item_id", UUIDColumnType, nullable=False),
    Column("rank", Integer, nullable=True),
    Column("score", Float, nullable=True),
    UniqueConstraint("ranking_configuration_id", "item_type", "item_id"),
    Index("ix_ranked_item_owner", "item_type", "item_id"),
    info={"owner": PolymorphicOwner("item_type", "item_id", ALL_KINDS)},
)

TABLE_BY_KIND: Final[dict[EntityKind, Table]] = {
    EntityKind.ARTIST: artist_table,
    EntityKind.ALBUM: album_table,
    EntityKind.SONG: song_table,
}


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Artist, artist_table)
    mapper_registry.map_imperatively(Album, album_table)
    mapper_registry.map_imperatively(Song, song_table)
    mapper_registry.map_imperatively(RankingConfiguration, ranking_configuration_table)
    mapper_registry.map_imperatively(RankedItem, ranked_item_table)

    configure_mappers()
    return mapper_registry
