"""Schema inventory: every column through which a record can reference an entity.

Merge plans are checked against this inventory so that adding a table that
points at an artist, album or song without teaching the plan about it is
caught before it orphans rows in production.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalog_merge.adapters.sqlalchemy.mappings import (
    TABLE_BY_KIND,
    PolymorphicOwner,
    mapper_registry,
)

if TYPE_CHECKING:
    from catalog_merge.domain.merging.plans import MergePlan
    from catalog_merge.domain.merging.relations import Attachment
    from catalog_merge.domain.model import EntityKind


def attachment_columns(kind: EntityKind) -> frozenset[Attachment]:
    """Return ``(table, column)`` pairs referencing entities of ``kind``."""

    entity_table = TABLE_BY_KIND[kind]
    found: set[Attachment] = set()
    for table in mapper_registry.metadata.sorted_tables:
        for foreign_key in table.foreign_keys:
            if foreign_key.column.table is entity_table:
                found.add((table.name, foreign_key.parent.name))
        owner = table.info.get("owner")
        if isinstance(owner, PolymorphicOwner) and kind in owner.kinds:
            found.add((table.name, owner.id_column))
    return frozenset(found)


def uncovered_attachments(plan: MergePlan) -> frozenset[Attachment]:
    """Attachments of ``plan.kind`` that no step of ``plan`` handles."""

    return attachment_columns(plan.kind) - plan.covered_attachments()
