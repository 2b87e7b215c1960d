from __future__ import annotations

from catalog_merge.domain.merging.plans import IMAGES, RANKED_ITEMS
from catalog_merge.domain.merging.relations import EdgeRelation, Relation
from catalog_merge.domain.merging.strategies import (
    DeleteOwned,
    DirectedGraphMerge,
    NumericReconcile,
    ReassignAll,
    ReassignUnique,
    SingletonPreserve,
    StepOutcome,
)
from catalog_merge.domain.model import Album, Artist, EntityKind, Song, SongRelationType
from tests.helpers.memory_store import InMemoryMergeRepository

ALBUM_ARTISTS = Relation("album_artists", "album_artist", "artist_id")
CREDITS = Relation("credits", "credit", "artist_id")
MEMBERSHIPS = EdgeRelation(
    "memberships", "artist_membership", subject_column="artist_id", object_column="member_id"
)
SONG_RELATIONSHIPS = EdgeRelation(
    "song_relationships",
    "song_relationship",
    subject_column="song_id",
    object_column="related_song_id",
)


def _artists(repository: InMemoryMergeRepository) -> tuple[Artist, Artist]:
    source = repository.add(Artist(name="The Beatles"))
    target = repository.add(Artist(name="Beatles"))
    assert isinstance(source, Artist)
    assert isinstance(target, Artist)
    return source, target


def test_reassign_unique_moves_new_rows_and_drops_duplicates() -> None:
    repository = InMemoryMergeRepository()
    source, target = _artists(repository)
    album_a, album_b = object(), object()
    duplicate = repository.insert("album_artist", artist_id=source.id, album_id=album_a)
    unique = repository.insert("album_artist", artist_id=source.id, album_id=album_b)
    repository.insert("album_artist", artist_id=target.id, album_id=album_a)

    outcome = ReassignUnique(ALBUM_ARTISTS, ("album_id",)).apply(repository, source, target)

    assert outcome == StepOutcome(moved=1, removed=1)
    assert duplicate not in repository.tables["album_artist"]
    assert repository.tables["album_artist"][unique]["artist_id"] == target.id
    assert [row["album_id"] for row in repository.rows("album_artist")].count(album_a) == 1


def test_reassign_unique_rewrites_polymorphic_owner_kind() -> None:
    repository = InMemoryMergeRepository()
    source, target = _artists(repository)
    identifiers = Relation(
        "identifiers", "identifier", "identifiable_id", owner_type_column="identifiable_type"
    )
    row_id = repository.insert(
        "identifier",
        identifiable_type=EntityKind.ARTIST,
        identifiable_id=source.id,
        identifier_type="musicbrainz",
        value="b10bbbfc",
    )

    outcome = ReassignUnique(identifiers, ("identifier_type", "value")).apply(
        repository, source, target
    )

    assert outcome.moved == 1
    row = repository.tables["identifier"][row_id]
    assert row["identifiable_id"] == target.id
    assert row["identifiable_type"] == EntityKind.ARTIST


def test_reassign_unique_ignores_rows_of_other_kinds_with_same_id() -> None:
    repository = InMemoryMergeRepository()
    source, target = _artists(repository)
    images = Relation("images", "image", "parent_id", owner_type_column="parent_type")
    album_row = repository.insert("image", parent_type=EntityKind.ALBUM, parent_id=source.id)

    outcome = ReassignUnique(images, ("url",)).apply(repository, source, target)

    assert outcome == StepOutcome()
    assert repository.tables["image"][album_row]["parent_id"] == source.id


def test_reassign_all_moves_every_row() -> None:
    repository = InMemoryMergeRepository()
    source, target = _artists(repository)
    for role in ("producer", "producer", "engineer"):
        repository.insert("credit", artist_id=source.id, role=role)

    outcome = ReassignAll(CREDITS).apply(repository, source, target)

    assert outcome == StepOutcome(moved=3)
    assert {row["artist_id"] for row in repository.rows("credit")} == {target.id}


def test_singleton_preserve_keeps_target_primary() -> None:
    repository = InMemoryMergeRepository()
    source, target = _artists(repository)
    source_primary = repository.insert(
        "image", parent_type=EntityKind.ARTIST, parent_id=source.id, is_primary=True
    )
    source_other = repository.insert(
        "image", parent_type=EntityKind.ARTIST, parent_id=source.id, is_primary=False
    )
    target_primary = repository.insert(
        "image", parent_type=EntityKind.ARTIST, parent_id=target.id, is_primary=True
    )

    outcome = SingletonPreserve(IMAGES, flag_field="is_primary").apply(
        repository, source, target
    )

    assert outcome == StepOutcome(moved=2)
    images = repository.tables["image"]
    assert images[target_primary]["is_primary"] is True
    assert images[source_primary]["is_primary"] is False
    assert images[source_other]["is_primary"] is False
    assert {row["parent_id"] for row in images.values()} == {target.id}


def test_singleton_preserve_carries_source_primary_when_target_has_none() -> None:
    repository = InMemoryMergeRepository()
    source, target = _artists(repository)
    source_primary = repository.insert(
        "image", parent_type=EntityKind.ARTIST, parent_id=source.id, is_primary=True
    )
    repository.insert("image", parent_type=EntityKind.ARTIST, parent_id=target.id, is_primary=False)

    SingletonPreserve(IMAGES, flag_field="is_primary").apply(repository, source, target)

    primaries = [row for row in repository.rows("image") if row["is_primary"]]
    assert [row["id"] for row in primaries] == [source_primary]
    assert primaries[0]["parent_id"] == target.id


def test_numeric_reconcile_prefers_earliest_year() -> None:
    repository = InMemoryMergeRepository()
    cases = [
        (1969, 1973, 1969, 1),
        (1973, 1969, 1969, 0),
        (None, 1973, 1973, 0),
        (1969, None, 1969, 1),
        (1969, 1969, 1969, 0),
    ]
    for source_year, target_year, expected, moved in cases:
        source = Album(title="Abbey Road", release_year=source_year)
        target = Album(title="Abbey Road", release_year=target_year)

        outcome = NumericReconcile("release_year").apply(repository, source, target)

        assert target.release_year == expected
        assert outcome.moved == moved


def test_numeric_reconcile_accepts_custom_preference() -> None:
    source = Song(title="Yesterday", release_year=1975)
    target = Song(title="Yesterday", release_year=1965)

    NumericReconcile("release_year", prefer=max).apply(InMemoryMergeRepository(), source, target)

    assert target.release_year == 1975


def test_directed_graph_merge_reconciles_both_directions() -> None:
    repository = InMemoryMergeRepository()
    source, target = _artists(repository)
    shared_member, new_member, band = Artist(name="M"), Artist(name="N"), Artist(name="Band")

    duplicate = repository.insert(
        "artist_membership", artist_id=source.id, member_id=shared_member.id
    )
    repository.insert("artist_membership", artist_id=target.id, member_id=shared_member.id)
    moved_out = repository.insert("artist_membership", artist_id=source.id, member_id=new_member.id)
    loop_out = repository.insert("artist_membership", artist_id=source.id, member_id=target.id)
    moved_in = repository.insert("artist_membership", artist_id=band.id, member_id=source.id)
    loop_in = repository.insert("artist_membership", artist_id=target.id, member_id=source.id)

    outcome = DirectedGraphMerge(MEMBERSHIPS).apply(repository, source, target)

    assert outcome == StepOutcome(moved=2, removed=3)
    edges = repository.tables["artist_membership"]
    for removed in (duplicate, loop_out, loop_in):
        assert removed not in edges
    assert edges[moved_out]["artist_id"] == target.id
    assert edges[moved_in]["member_id"] == target.id
    assert all(edge["artist_id"] != edge["member_id"] for edge in edges.values())
    assert all(source.id not in (edge["artist_id"], edge["member_id"]) for edge in edges.values())


def test_directed_graph_merge_compares_edge_fields() -> None:
    repository = InMemoryMergeRepository()
    source = Song(title="Hurt")
    target = Song(title="Hurt")
    original = Song(title="Hurt (NIN)")
    cover = repository.insert(
        "song_relationship",
        song_id=source.id,
        related_song_id=original.id,
        relation_type=SongRelationType.COVER,
    )
    remix = repository.insert(
        "song_relationship",
        song_id=source.id,
        related_song_id=original.id,
        relation_type=SongRelationType.REMIX,
    )
    repository.insert(
        "song_relationship",
        song_id=target.id,
        related_song_id=original.id,
        relation_type=SongRelationType.COVER,
    )

    outcome = DirectedGraphMerge(SONG_RELATIONSHIPS, edge_fields=("relation_type",)).apply(
        repository, source, target
    )

    assert outcome == StepOutcome(moved=1, removed=1)
    edges = repository.tables["song_relationship"]
    assert cover not in edges
    assert edges[remix]["song_id"] == target.id


def test_directed_graph_merge_drops_source_self_loop_once() -> None:
    repository = InMemoryMergeRepository()
    source = Song(title="Revolution 9")
    target = Song(title="Revolution 9")
    loop = repository.insert(
        "song_relationship",
        song_id=source.id,
        related_song_id=source.id,
        relation_type=SongRelationType.SAMPLE,
    )

    outcome = DirectedGraphMerge(SONG_RELATIONSHIPS, edge_fields=("relation_type",)).apply(
        repository, source, target
    )

    assert outcome == StepOutcome(removed=1)
    assert loop not in repository.tables["song_relationship"]


def test_delete_owned_removes_source_rows_only() -> None:
    repository = InMemoryMergeRepository()
    source, target = _artists(repository)
    repository.insert("ranked_item", item_type=EntityKind.ARTIST, item_id=source.id)
    repository.insert("ranked_item", item_type=EntityKind.ARTIST, item_id=source.id)
    kept = repository.insert("ranked_item", item_type=EntityKind.ARTIST, item_id=target.id)

    outcome = DeleteOwned(RANKED_ITEMS).apply(repository, source, target)

    assert outcome == StepOutcome(removed=2)
    assert list(repository.tables["ranked_item"]) == [kept]


def test_strategies_report_their_attachments() -> None:
    assert ReassignAll(CREDITS).attachments == (("credit", "artist_id"),)
    assert NumericReconcile("release_year").attachments == ()
    assert set(DirectedGraphMerge(MEMBERSHIPS).attachments) == {
        ("artist_membership", "artist_id"),
        ("artist_membership", "member_id"),
    }
