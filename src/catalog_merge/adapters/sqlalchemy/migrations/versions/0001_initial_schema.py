"""Initial catalog schema.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

ENTITY_KINDS = ("artist", "album", "song")
SONG_RELATION_TYPES = ("cover", "remix", "sample", "alternate")


def _kind(name: str) -> sa.Column[str]:
    return sa.Column(
        name,
        sa.Enum(*ENTITY_KINDS, native_enum=False, name="entity_kind"),
        nullable=False,
    )


def _id() -> sa.Column[object]:
    return sa.Column("id", sa.Uuid(), primary_key=True)


def upgrade() -> None:
    op.create_table(
        "artist",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("country", sa.String(length=2), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "song",
        _id(),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("release_year", sa.Integer(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        "album",
        _id(),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("release_year", sa.Integer(), nullable=True),
        sa.Column("primary_artist_id", sa.Uuid(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["primary_artist_id"], ["artist.id"], name="fk_album_primary_artist_id_artist"
        ),
    )
    op.create_table(
        "album_artist",
        _id(),
        sa.Column("artist_id", sa.Uuid(), sa.ForeignKey("artist.id"), nullable=False),
        sa.Column("album_id", sa.Uuid(), sa.ForeignKey("album.id"), nullable=False),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.UniqueConstraint("artist_id", "album_id", name="uq_album_artist_artist_id"),
    )
    op.create_table(
        "song_artist",
        _id(),
        sa.Column("artist_id", sa.Uuid(), sa.ForeignKey("artist.id"), nullable=False),
        sa.Column("song_id", sa.Uuid(), sa.ForeignKey("song.id"), nullable=False),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.UniqueConstraint("artist_id", "song_id", name="uq_song_artist_artist_id"),
    )
    op.create_table(
        "artist_membership",
        _id(),
        sa.Column("artist_id", sa.Uuid(), sa.ForeignKey("artist.id"), nullable=False),
        sa.Column("member_id", sa.Uuid(), sa.ForeignKey("artist.id"), nullable=False),
        sa.Column("joined_year", sa.Integer(), nullable=True),
        sa.Column("left_year", sa.Integer(), nullable=True),
        sa.UniqueConstraint("artist_id", "member_id", name="uq_artist_membership_artist_id"),
    )
    op.create_table(
        "credit",
        _id(),
        sa.Column("artist_id", sa.Uuid(), sa.ForeignKey("artist.id"), nullable=False),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("credited_as", sa.String(), nullable=True),
    )
    op.create_table(
        "release",
        _id(),
        sa.Column("album_id", sa.Uuid(), sa.ForeignKey("album.id"), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("format", sa.String(), nullable=False),
        sa.UniqueConstraint("album_id", "name", "format", name="uq_release_album_id"),
    )
    op.create_table(
        "track",
        _id(),
        sa.Column("release_id", sa.Uuid(), sa.ForeignKey("release.id"), nullable=False),
        sa.Column("song_id", sa.Uuid(), sa.ForeignKey("song.id"), nullable=False),
        sa.Column("medium_number", sa.Integer(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.UniqueConstraint(
            "release_id", "medium_number", "position", name="uq_track_release_id"
        ),
    )
    op.create_table(
        "song_relationship",
        _id(),
        sa.Column("song_id", sa.Uuid(), sa.ForeignKey("song.id"), nullable=False),
        sa.Column("related_song_id", sa.Uuid(), sa.ForeignKey("song.id"), nullable=False),
        sa.Column(
            "relation_type",
            sa.Enum(*SONG_RELATION_TYPES, native_enum=False, name="song_relation_type"),
            nullable=False,
        ),
        sa.UniqueConstraint(
            "song_id", "related_song_id", "relation_type", name="uq_song_relationship_song_id"
        ),
    )
    op.create_table(
        "identifier",
        _id(),
        _kind("identifiable_type"),
        sa.Column("identifiable_id", sa.Uuid(), nullable=False),
        sa.Column("identifier_type", sa.String(), nullable=False),
        sa.Column("value", sa.String(), nullable=False),
        sa.UniqueConstraint(
            "identifiable_type",
            "identifier_type",
            "value",
            name="uq_identifier_identifiable_type",
        ),
    )
    op.create_index("ix_identifier_owner", "identifier", ["identifiable_type", "identifiable_id"])
    op.create_table(
        "category",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
    )
    op.create_table(
        "category_item",
        _id(),
        sa.Column("category_id", sa.Uuid(), sa.ForeignKey("category.id"), nullable=False),
        _kind("item_type"),
        sa.Column("item_id", sa.Uuid(), nullable=False),
        sa.UniqueConstraint(
            "category_id", "item_type", "item_id", name="uq_category_item_category_id"
        ),
    )
    op.create_index("ix_category_item_owner", "category_item", ["item_type", "item_id"])
    op.create_table(
        "catalog_list",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
    )
    op.create_table(
        "list_item",
        _id(),
        sa.Column("list_id", sa.Uuid(), sa.ForeignKey("catalog_list.id"), nullable=False),
        _kind("listable_type"),
        sa.Column("listable_id", sa.Uuid(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.UniqueConstraint(
            "list_id", "listable_type", "listable_id", name="uq_list_item_list_id"
        ),
    )
    op.create_index("ix_list_item_owner", "list_item", ["listable_type", "listable_id"])
    op.create_table(
        "image",
        _id(),
        _kind("parent_type"),
        sa.Column("parent_id", sa.Uuid(), nullable=False),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_image_owner", "image", ["parent_type", "parent_id"])
    op.create_table(
        "external_link",
        _id(),
        _kind("parent_type"),
        sa.Column("parent_id", sa.Uuid(), nullable=False),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
    )
    op.create_index("ix_external_link_owner", "external_link", ["parent_type", "parent_id"])
    op.create_table(
        "ranking_configuration",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
    )
    op.create_table(
        "ranked_item",
        _id(),
        sa.Column(
            "ranking_configuration_id",
            sa.Uuid(),
            sa.ForeignKey("ranking_configuration.id"),
            nullable=False,
        ),
        _kind("item_type"),
        sa.Column("item_id", sa.Uuid(), nullable=False),
        sa.Column("rank", sa.Integer(), nullable=True),
        sa.Column("score", sa.Float(), nullable=True),
        sa.UniqueConstraint(
            "ranking_configuration_id",
            "item_type",
            "item_id",
            name="uq_ranked_item_ranking_configuration_id",
        ),
    )
    op.create_index("ix_ranked_item_owner", "ranked_item", ["item_type", "item_id"])


def downgrade() -> None:
    op.drop_index("ix_ranked_item_owner", table_name="ranked_item")
    op.drop_table("ranked_item")
    op.drop_table("ranking_configuration")
    op.drop_index("ix_external_link_owner", table_name="external_link")
    op.drop_table("external_link")
    op.drop_index("ix_image_owner", table_name="image")
    op.drop_table("image")
    op.drop_index("ix_list_item_owner", table_name="list_item")
    op.drop_table("list_item")
    op.drop_table("catalog_list")
    op.drop_index("ix_category_item_owner", table_name="category_item")
    op.drop_table("category_item")
    op.drop_table("category")
    op.drop_index("ix_identifier_owner", table_name="identifier")
    op.drop_table("identifier")
    op.drop_table("song_relationship")
    op.drop_table("track")
    op.drop_table("release")
    op.drop_table("credit")
    op.drop_table("artist_membership")
    op.drop_table("song_artist")
    op.drop_table("album_artist")
    op.drop_table("album")
    op.drop_table("song")
    op.drop_table("artist")
