"""Reusable reconciliation behaviours, one per shape of attached data.

Each strategy moves the source's records for one relation onto the target and
reports how many it moved and how many it removed as duplicates. Strategies
never commit and never catch write failures; the orchestrator owns both.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

    from catalog_merge.domain.merging.relations import Attachment, EdgeRelation, Relation
    from catalog_merge.domain.model import CatalogEntity
    from catalog_merge.domain.ports.persistence import AttachedRow, MergeRepository


@dataclass(frozen=True, slots=True)
class StepOutcome:
    moved: int = 0
    removed: int = 0

    def __add__(self, other: StepOutcome) -> StepOutcome:
        return StepOutcome(moved=self.moved + other.moved, removed=self.removed + other.removed)


class MergeStrategy(Protocol):
    """Contract implemented by every plan step."""

    @property
    def name(self) -> str: ...

    @property
    def attachments(self) -> tuple[Attachment, ...]: ...

    def apply(
        self,
        repository: MergeRepository,
        source: CatalogEntity,
        target: CatalogEntity,
    ) -> StepOutcome: ...


@dataclass(frozen=True, slots=True)
class ReassignUnique:
    """Repoint source rows unless the target already owns one with the same key."""

    relation: Relation
    key_fields: tuple[str, ...]

    @property
    def name(self) -> str:
        return self.relation.name

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        return (self.relation.attachment,)

    def apply(
        self,
        repository: MergeRepository,
        source: CatalogEntity,
        target: CatalogEntity,
    ) -> StepOutcome:
        moved = removed = 0
        for row in repository.attached(self.relation, source.ref):
            match = {field: row[field] for field in self.key_fields}
            if repository.find_attached(self.relation, target.ref, match) is not None:
                repository.delete_attached(self.relation, row.id)
                removed += 1
            else:
                repository.update_attached(
                    self.relation, row.id, self.relation.owner_columns(target.ref)
                )
                moved += 1
        return StepOutcome(moved=moved, removed=removed)


@dataclass(frozen=True, slots=True)
class ReassignAll:
    """Bulk repoint every source row; for relations without a natural key."""

    relation: Relation

    @property
    def name(self) -> str:
        return self.relation.name

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        return (self.relation.attachment,)

    def apply(
        self,
        repository: MergeRepository,
        source: CatalogEntity,
        target: CatalogEntity,
    ) -> StepOutcome:
        moved = repository.reassign_all(self.relation, source.ref, target.ref)
        return StepOutcome(moved=moved)


@dataclass(frozen=True, slots=True)
class SingletonPreserve:
    """Repoint every source row; the target's existing flagged row keeps the flag."""

    relation: Relation
    flag_field: str

    @property
    def name(self) -> str:
        return self.relation.name

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        return (self.relation.attachment,)

    def apply(
        self,
        repository: MergeRepository,
        source: CatalogEntity,
        target: CatalogEntity,
    ) -> StepOutcome:
        rows = repository.attached(self.relation, source.ref)
        if not rows:
            return StepOutcome()
        target_flagged = (
            repository.find_attached(self.relation, target.ref, {self.flag_field: True})
            is not None
        )
        values = self.relation.owner_columns(target.ref)
        if target_flagged:
            values[self.flag_field] = False
        for row in rows:
            repository.update_attached(self.relation, row.id, values)
        return StepOutcome(moved=len(rows))


def earliest(left: Any, right: Any) -> Any:  # noqa: ANN401
    return min(left, right)


@dataclass(frozen=True, slots=True)
class NumericReconcile:
    """Carry a scalar field over to the target when the source's value is better.

    ``prefer`` picks the better of two non-null values; the target only changes
    when it has no value or the source's is strictly better.
    """

    field: str
    prefer: Callable[[Any, Any], Any] = earliest

    @property
    def name(self) -> str:
        return self.field

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        return ()

    def apply(
        self,
        repository: MergeRepository,
        source: CatalogEntity,
        target: CatalogEntity,
    ) -> StepOutcome:
        _ = repository
        source_value = getattr(source, self.field)
        if source_value is None:
            return StepOutcome()
        target_value = getattr(target, self.field)
        if target_value is not None and (
            source_value == target_value
            or self.prefer(source_value, target_value) != source_value
        ):
            return StepOutcome()
        setattr(target, self.field, source_value)
        return StepOutcome(moved=1)


@dataclass(frozen=True, slots=True)
class DirectedGraphMerge:
    """Reconcile edges where the entity is either the subject or the object.

    Edges that would connect the target to itself are dropped, in both
    directions; a self-loop of the source is dropped once, in the outbound
    pass. ``edge_fields`` are the columns (besides the two endpoints) that
    make two edges equivalent, for example the relation type.
    """

    relation: EdgeRelation
    edge_fields: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.relation.name

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        return self.relation.attachments

    def apply(
        self,
        repository: MergeRepository,
        source: CatalogEntity,
        target: CatalogEntity,
    ) -> StepOutcome:
        outbound = self._merge_direction(
            repository,
            self.relation.outbound,
            far_column=self.relation.object_column,
            source=source,
            target=target,
        )
        inbound = self._merge_direction(
            repository,
            self.relation.inbound,
            far_column=self.relation.subject_column,
            source=source,
            target=target,
        )
        return outbound + inbound

    def _merge_direction(
        self,
        repository: MergeRepository,
        relation: Relation,
        *,
        far_column: str,
        source: CatalogEntity,
        target: CatalogEntity,
    ) -> StepOutcome:
        moved = removed = 0
        for edge in repository.attached(relation, source.ref):
            if edge[far_column] in (source.id, target.id) or self._has_equivalent(
                repository, relation, edge, far_column=far_column, target=target
            ):
                repository.delete_attached(relation, edge.id)
                removed += 1
                continue
            repository.update_attached(relation, edge.id, relation.owner_columns(target.ref))
            moved += 1
        return StepOutcome(moved=moved, removed=removed)

    def _has_equivalent(
        self,
        repository: MergeRepository,
        relation: Relation,
        edge: AttachedRow,
        *,
        far_column: str,
        target: CatalogEntity,
    ) -> bool:
        match = {far_column: edge[far_column]}
        match.update({field: edge[field] for field in self.edge_fields})
        return repository.find_attached(relation, target.ref, match) is not None


@dataclass(frozen=True, slots=True)
class DeleteOwned:
    """Remove rows exclusively owned by the source before it is destroyed."""

    relation: Relation

    @property
    def name(self) -> str:
        return self.relation.name

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        return (self.relation.attachment,)

    def apply(
        self,
        repository: MergeRepository,
        source: CatalogEntity,
        target: CatalogEntity,
    ) -> StepOutcome:
        _ = target
        return StepOutcome(removed=repository.delete_all_attached(self.relation, source.ref))
