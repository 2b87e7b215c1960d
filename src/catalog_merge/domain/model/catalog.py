"""Catalog entities that can be merged.

Attached records (join rows, identifiers, images, links, graph edges) are not
modelled as objects here; the merge engine addresses them through relation
descriptors (see ``catalog_merge.domain.merging.relations``).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, ClassVar

from catalog_merge.domain.model.entity import Entity
from catalog_merge.domain.model.enums import EntityKind

if TYPE_CHECKING:
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class CatalogEntity(Entity):
    updated_at: datetime | None = None

    def touch(self, now: datetime | None = None) -> None:
        self.updated_at = now or datetime.now(tz=UTC)

    def validation_errors(self) -> list[str]:
        return []


@dataclass(eq=False, kw_only=True)
class Artist(CatalogEntity):
    ENTITY_KIND: ClassVar[EntityKind] = EntityKind.ARTIST

    name: str
    country: str | None = None

    def validation_errors(self) -> list[str]:
        errors: list[str] = []
        if not self.name or not self.name.strip():
            errors.append("Name can't be blank")
        if self.country is not None and len(self.country) != 2:  # noqa: PLR2004
            errors.append("Country must be a two-letter code")
        return errors


@dataclass(eq=False, kw_only=True)
class Album(CatalogEntity):
    ENTITY_KIND: ClassVar[EntityKind] = EntityKind.ALBUM

    title: str
    release_year: int | None = None
    primary_artist_id: UUID | None = None

    def validation_errors(self) -> list[str]:
        if not self.title or not self.title.strip():
            return ["Title can't be blank"]
        return []


@dataclass(eq=False, kw_only=True)
class Song(CatalogEntity):
    ENTITY_KIND: ClassVar[EntityKind] = EntityKind.SONG

    title: str
    release_year: int | None = None

    def validation_errors(self) -> list[str]:
        if not self.title or not self.title.strip():
            return ["Title can't be blank"]
        return []


CLASS_BY_KIND: dict[EntityKind, type[CatalogEntity]] = {
    EntityKind.ARTIST: Artist,
    EntityKind.ALBUM: Album,
    EntityKind.SONG: Song,
}
