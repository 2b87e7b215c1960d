"""In-memory implementations of the persistence ports for domain tests."""

from __future__ import annotations

import uuid
from collections import defaultdict
from typing import TYPE_CHECKING, Literal

from catalog_merge.domain.merging.errors import ConstraintViolationError, NotFoundError
from catalog_merge.domain.model import EntityRef
from catalog_merge.domain.ports.persistence import AttachedRow, MergeRepository
from catalog_merge.domain.ports.unit_of_work import MergeRepositories

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from types import TracebackType

    from catalog_merge.domain.merging.relations import Relation
    from catalog_merge.domain.model import CatalogEntity

type Row = dict[str, object]


class InMemoryMergeRepository(MergeRepository):
    """Dictionary-backed repository; ``unique`` declares per-table key columns."""

    def __init__(self, unique: Mapping[str, tuple[str, ...]] | None = None) -> None:
        self.entities: dict[EntityRef, CatalogEntity] = {}
        self.tables: defaultdict[str, dict[uuid.UUID, Row]] = defaultdict(dict)
        self.unique = dict(unique or {})
        self.saved: list[EntityRef] = []
        self.deleted: list[EntityRef] = []

    # Test setup --------------------------------------------------------------

    def add(self, entity: CatalogEntity) -> CatalogEntity:
        self.entities[entity.ref] = entity
        return entity

    def insert(self, table: str, **values: object) -> uuid.UUID:
        row_id = uuid.uuid4()
        self.tables[table][row_id] = {"id": row_id, **values}
        return row_id

    def rows(self, table: str) -> list[Row]:
        return list(self.tables[table].values())

    # Port ------------------------------------------------------------------

    def get(self, ref: EntityRef) -> CatalogEntity | None:
        return self.entities.get(ref)

    def save(self, entity: CatalogEntity) -> None:
        self.entities[entity.ref] = entity
        self.saved.append(entity.ref)

    def delete(self, entity: CatalogEntity) -> None:
        if self.entities.pop(entity.ref, None) is None:
            raise NotFoundError(f"{entity.ref} already deleted")
        self.deleted.append(entity.ref)

    def attached(self, relation: Relation, owner: EntityRef) -> list[AttachedRow]:
        return [
            AttachedRow(id=row_id, values=dict(row))
            for row_id, row in self.tables[relation.table].items()
            if _matches(row, relation.owner_columns(owner))
        ]

    def find_attached(
        self,
        relation: Relation,
        owner: EntityRef,
        match: Mapping[str, object],
    ) -> AttachedRow | None:
        criteria = {**relation.owner_columns(owner), **match}
        for row in self.attached(relation, owner):
            if _matches(row.values, criteria):
                return row
        return None

    def update_attached(
        self,
        relation: Relation,
        row_id: uuid.UUID,
        values: Mapping[str, object],
    ) -> None:
        table = self.tables[relation.table]
        updated = {**table[row_id], **values}
        self._check_unique(relation.table, row_id, updated)
        table[row_id] = updated

    def delete_attached(self, relation: Relation, row_id: uuid.UUID) -> None:
        del self.tables[relation.table][row_id]

    def reassign_all(self, relation: Relation, source: EntityRef, target: EntityRef) -> int:
        rows = self.attached(relation, source)
        for row in rows:
            self.update_attached(relation, row.id, relation.owner_columns(target))
        return len(rows)

    def delete_all_attached(self, relation: Relation, owner: EntityRef) -> int:
        rows = self.attached(relation, owner)
        for row in rows:
            self.delete_attached(relation, row.id)
        return len(rows)

    def ranking_configurations_for(self, refs: Iterable[EntityRef]) -> set[uuid.UUID]:
        wanted = set(refs)
        found: set[uuid.UUID] = set()
        for row in self.tables["ranked_item"].values():
            item_type, item_id = row["item_type"], row["item_id"]
            if EntityRef(item_type, item_id) in wanted:  # pyright: ignore[reportArgumentType]
                found.add(row["ranking_configuration_id"])  # pyright: ignore[reportArgumentType]
        return found

    def _check_unique(self, table: str, row_id: uuid.UUID, candidate: Row) -> None:
        columns = self.unique.get(table)
        if columns is None:
            return
        key = tuple(candidate[column] for column in columns)
        for other_id, other in self.tables[table].items():
            if other_id != row_id and tuple(other[column] for column in columns) == key:
                raise ConstraintViolationError(f"Constraint violation: {table} {key}")


def _matches(row: Mapping[str, object], criteria: Mapping[str, object]) -> bool:
    return all(row.get(column) == value for column, value in criteria.items())


class FakeUnitOfWork:
    """Unit of work over an ``InMemoryMergeRepository`` recording commits and rollbacks."""

    def __init__(self, repository: InMemoryMergeRepository) -> None:
        self._repositories = MergeRepositories(catalog=repository)
        self.committed = 0
        self.rolled_back = 0

    @property
    def repositories(self) -> MergeRepositories:
        return self._repositories

    def __enter__(self) -> FakeUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.committed += 1

    def rollback(self) -> None:
        self.rolled_back += 1


class CountingUnitOfWorkFactory:
    """Factory handing out ``FakeUnitOfWork`` instances and remembering them."""

    def __init__(self, repository: InMemoryMergeRepository) -> None:
        self.repository = repository
        self.created: list[FakeUnitOfWork] = []

    def __call__(self) -> FakeUnitOfWork:
        uow = FakeUnitOfWork(self.repository)
        self.created.append(uow)
        return uow
