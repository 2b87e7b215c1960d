"""Declarative merge plans, one per entity kind.

A plan is an ordered list of strategies plus the relations the entity owns
exclusively (deleted together with the source). Adding an attachment type to
an entity kind means adding one entry here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from catalog_merge.domain.merging.relations import EdgeRelation, Relation
from catalog_merge.domain.merging.strategies import (
    DeleteOwned,
    DirectedGraphMerge,
    NumericReconcile,
    ReassignAll,
    ReassignUnique,
    SingletonPreserve,
)
from catalog_merge.domain.model import EntityKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from catalog_merge.domain.merging.relations import Attachment
    from catalog_merge.domain.merging.strategies import MergeStrategy


@dataclass(frozen=True, slots=True)
class MergePlan:
    kind: EntityKind
    steps: tuple[MergeStrategy, ...]
    owned: tuple[DeleteOwned, ...] = ()

    def with_step(self, step: MergeStrategy) -> MergePlan:
        """Return a new plan appending ``step`` at the end."""

        return MergePlan(kind=self.kind, steps=(*self.steps, step), owned=self.owned)

    def extend(self, steps: Iterable[MergeStrategy]) -> MergePlan:
        return MergePlan(kind=self.kind, steps=(*self.steps, *tuple(steps)), owned=self.owned)

    @property
    def step_names(self) -> tuple[str, ...]:
        return tuple(step.name for step in self.steps)

    def covered_attachments(self) -> frozenset[Attachment]:
        """Every ``(table, column)`` this plan reassigns or deletes."""

        covered: set[Attachment] = set()
        for step in (*self.steps, *self.owned):
            covered.update(step.attachments)
        return frozenset(covered)


# Polymorphic relations shared by several kinds -------------------------------

IDENTIFIERS: Final = Relation(
    "identifiers", "identifier", "identifiable_id", owner_type_column="identifiable_type"
)
CATEGORY_ITEMS: Final = Relation(
    "category_items", "category_item", "item_id", owner_type_column="item_type"
)
LIST_ITEMS: Final = Relation(
    "list_items", "list_item", "listable_id", owner_type_column="listable_type"
)
IMAGES: Final = Relation("images", "image", "parent_id", owner_type_column="parent_type")
EXTERNAL_LINKS: Final = Relation(
    "external_links", "external_link", "parent_id", owner_type_column="parent_type"
)
RANKED_ITEMS: Final = Relation(
    "ranked_items", "ranked_item", "item_id", owner_type_column="item_type"
)

_SHARED_STEPS: Final[tuple[MergeStrategy, ...]] = (
    ReassignUnique(IDENTIFIERS, key_fields=("identifier_type", "value")),
    ReassignUnique(CATEGORY_ITEMS, key_fields=("category_id",)),
)

# Artist -----------------------------------------------------------------------

ARTIST_PLAN: Final = MergePlan(
    kind=EntityKind.ARTIST,
    steps=(
        ReassignUnique(Relation("album_artists", "album_artist", "artist_id"), ("album_id",)),
        ReassignUnique(Relation("song_artists", "song_artist", "artist_id"), ("song_id",)),
        DirectedGraphMerge(
            EdgeRelation(
                "memberships",
                "artist_membership",
                subject_column="artist_id",
                object_column="member_id",
            )
        ),
        ReassignAll(Relation("credits", "credit", "artist_id")),
        ReassignAll(Relation("primary_albums", "album", "primary_artist_id")),
        *_SHARED_STEPS,
        SingletonPreserve(IMAGES, flag_field="is_primary"),
        ReassignAll(EXTERNAL_LINKS),
    ),
    owned=(DeleteOwned(RANKED_ITEMS),),
)

# Album ------------------------------------------------------------------------

ALBUM_PLAN: Final = MergePlan(
    kind=EntityKind.ALBUM,
    steps=(
        ReassignUnique(Relation("album_artists", "album_artist", "album_id"), ("artist_id",)),
        ReassignAll(Relation("releases", "release", "album_id")),
        *_SHARED_STEPS,
        SingletonPreserve(IMAGES, flag_field="is_primary"),
        ReassignAll(EXTERNAL_LINKS),
        ReassignUnique(LIST_ITEMS, key_fields=("list_id",)),
        NumericReconcile("release_year"),
    ),
    owned=(DeleteOwned(RANKED_ITEMS),),
)

# Song -------------------------------------------------------------------------

SONG_PLAN: Final = MergePlan(
    kind=EntityKind.SONG,
    steps=(
        ReassignUnique(Relation("song_artists", "song_artist", "song_id"), ("artist_id",)),
        ReassignAll(Relation("tracks", "track", "song_id")),
        *_SHARED_STEPS,
        ReassignAll(EXTERNAL_LINKS),
        ReassignUnique(LIST_ITEMS, key_fields=("list_id",)),
        DirectedGraphMerge(
            EdgeRelation(
                "song_relationships",
                "song_relationship",
                subject_column="song_id",
                object_column="related_song_id",
            ),
            edge_fields=("relation_type",),
        ),
        NumericReconcile("release_year"),
    ),
    owned=(DeleteOwned(RANKED_ITEMS),),
)

DEFAULT_PLANS: Final[Mapping[EntityKind, MergePlan]] = {
    EntityKind.ARTIST: ARTIST_PLAN,
    EntityKind.ALBUM: ALBUM_PLAN,
    EntityKind.SONG: SONG_PLAN,
}
