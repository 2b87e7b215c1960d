"""Relation descriptors: where attached records live and how they point at their owner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from catalog_merge.domain.model import EntityRef

type Attachment = tuple[str, str]
"""``(table, column)`` pair referencing an entity."""


@dataclass(frozen=True, slots=True)
class Relation:
    """Attached records reachable from an owner through one column.

    ``owner_type_column`` is set for polymorphic tables (identifiers, images,
    links) that store the owner's kind next to its id.
    """

    name: str
    table: str
    owner_column: str
    owner_type_column: str | None = None

    @property
    def attachment(self) -> Attachment:
        return (self.table, self.owner_column)

    def owner_columns(self, owner: EntityRef) -> dict[str, object]:
        """Column values identifying ``owner``; used both to filter and to repoint rows."""

        columns: dict[str, object] = {self.owner_column: owner.id}
        if self.owner_type_column is not None:
            columns[self.owner_type_column] = owner.kind
        return columns


@dataclass(frozen=True, slots=True)
class EdgeRelation:
    """Directed edges between two entities of the same kind.

    ``subject_column`` holds the edge's origin, ``object_column`` its destination.
    """

    name: str
    table: str
    subject_column: str
    object_column: str

    @property
    def outbound(self) -> Relation:
        return Relation(self.name, self.table, self.subject_column)

    @property
    def inbound(self) -> Relation:
        return Relation(f"inverse_{self.name}", self.table, self.object_column)

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        return (self.outbound.attachment, self.inbound.attachment)
