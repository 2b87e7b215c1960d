"""Ports for reading and rewriting catalog entities and their attached records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from uuid import UUID

    from catalog_merge.domain.merging.relations import Relation
    from catalog_merge.domain.model import CatalogEntity, EntityRef


@dataclass(frozen=True, slots=True)
class AttachedRow:
    """Snapshot of one attached record, keyed by column name."""

    id: UUID
    values: Mapping[str, object] = field(default_factory=dict["str", "object"])

    def __getitem__(self, column: str) -> object:
        return self.values[column]


@runtime_checkable
class MergeRepository(Protocol):
    """Persistence contract used by the merge engine.

    All calls happen inside the caller's unit of work; nothing here commits.
    Uniqueness violations surface as ``ConstraintViolationError``.
    """

    def get(self, ref: EntityRef) -> CatalogEntity | None: ...

    def save(self, entity: CatalogEntity) -> None: ...

    def delete(self, entity: CatalogEntity) -> None: ...

    def attached(self, relation: Relation, owner: EntityRef) -> list[AttachedRow]: ...

    def find_attached(
        self,
        relation: Relation,
        owner: EntityRef,
        match: Mapping[str, object],
    ) -> AttachedRow | None: ...

    def update_attached(
        self,
        relation: Relation,
        row_id: UUID,
        values: Mapping[str, object],
    ) -> None: ...

    def delete_attached(self, relation: Relation, row_id: UUID) -> None: ...

    def reassign_all(self, relation: Relation, source: EntityRef, target: EntityRef) -> int: ...

    def delete_all_attached(self, relation: Relation, owner: EntityRef) -> int: ...

    def ranking_configurations_for(self, refs: Iterable[EntityRef]) -> set[UUID]: ...
