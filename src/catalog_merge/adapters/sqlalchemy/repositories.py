"""Repository implementation backed by SQLAlchemy sessions."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy import and_, delete, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from catalog_merge.adapters.sqlalchemy.mappings import (
    TABLE_BY_KIND,
    mapper_registry,
    ranked_item_table,
)
from catalog_merge.domain.merging.errors import ConstraintViolationError, NotFoundError
from catalog_merge.domain.model import CLASS_BY_KIND
from catalog_merge.domain.ports.persistence import AttachedRow

if TYPE_CHECKING:
    import uuid
    from collections.abc import Iterable, Iterator, Mapping

    from sqlalchemy import ColumnElement, Row, Table
    from sqlalchemy.orm import Session

    from catalog_merge.domain.merging.relations import Relation
    from catalog_merge.domain.model import CatalogEntity, EntityRef


@contextmanager
def _translate_errors() -> Iterator[None]:
    try:
        yield
    except IntegrityError as exc:
        raise ConstraintViolationError(f"Constraint violation: {exc.orig}") from exc
    except StaleDataError as exc:
        raise NotFoundError(str(exc)) from exc


def _to_attached(row: Row[tuple[object, ...]]) -> AttachedRow:
    values = row._asdict()
    return AttachedRow(id=values["id"], values=values)  # pyright: ignore[reportArgumentType]


class SqlAlchemyMergeRepository:
    """Reads entities through the ORM and rewrites attached rows with Core statements."""

    def __init__(self, session: Session) -> None:
        self.session = session

    # Entities ---------------------------------------------------------------

    def get(self, ref: EntityRef) -> CatalogEntity | None:
        return self.session.get(CLASS_BY_KIND[ref.kind], ref.id, with_for_update=True)

    def save(self, entity: CatalogEntity) -> None:
        with _translate_errors():
            self.session.add(entity)
            self.session.flush()

    def delete(self, entity: CatalogEntity) -> None:
        table = TABLE_BY_KIND[entity.kind]
        with _translate_errors():
            result = self.session.execute(delete(table).where(table.c.id == entity.id))
        if result.rowcount == 0:  # pyright: ignore[reportAttributeAccessIssue]
            raise NotFoundError(f"{entity.kind.capitalize()} {entity.id} no longer exists")
        self.session.expunge(entity)

    # Attached rows ----------------------------------------------------------

    def attached(self, relation: Relation, owner: EntityRef) -> list[AttachedRow]:
        table = _table(relation)
        stmt = select(table).where(*_owner_criteria(table, relation, owner)).order_by(table.c.id)
        return [_to_attached(row) for row in self.session.execute(stmt)]

    def find_attached(
        self,
        relation: Relation,
        owner: EntityRef,
        match: Mapping[str, object],
    ) -> AttachedRow | None:
        table = _table(relation)
        stmt = (
            select(table)
            .where(*_owner_criteria(table, relation, owner))
            .where(*(table.c[column] == value for column, value in match.items()))
            .order_by(table.c.id)
            .limit(1)
        )
        row = self.session.execute(stmt).first()
        return None if row is None else _to_attached(row)

    def update_attached(
        self,
        relation: Relation,
        row_id: uuid.UUID,
        values: Mapping[str, object],
    ) -> None:
        table = _table(relation)
        with _translate_errors():
            self.session.execute(update(table).where(table.c.id == row_id).values(**values))

    def delete_attached(self, relation: Relation, row_id: uuid.UUID) -> None:
        table = _table(relation)
        with _translate_errors():
            self.session.execute(delete(table).where(table.c.id == row_id))

    def reassign_all(self, relation: Relation, source: EntityRef, target: EntityRef) -> int:
        table = _table(relation)
        stmt = (
            update(table)
            .where(*_owner_criteria(table, relation, source))
            .values(**relation.owner_columns(target))
        )
        with _translate_errors():
            result = self.session.execute(stmt)
        return result.rowcount  # pyright: ignore[reportAttributeAccessIssue]

    def delete_all_attached(self, relation: Relation, owner: EntityRef) -> int:
        table = _table(relation)
        stmt = delete(table).where(*_owner_criteria(table, relation, owner))
        with _translate_errors():
            result = self.session.execute(stmt)
        return result.rowcount  # pyright: ignore[reportAttributeAccessIssue]

    # Rankings ---------------------------------------------------------------

    def ranking_configurations_for(self, refs: Iterable[EntityRef]) -> set[uuid.UUID]:
        refs = tuple(refs)
        if not refs:
            return set()
        stmt = (
            select(ranked_item_table.c.ranking_configuration_id)
            .where(
                or_(
                    *(
                        and_(
                            ranked_item_table.c.item_type == ref.kind,
                            ranked_item_table.c.item_id == ref.id,
                        )
                        for ref in refs
                    )
                )
            )
            .distinct()
        )
        return set(self.session.execute(stmt).scalars())


def _table(relation: Relation) -> Table:
    try:
        return mapper_registry.metadata.tables[relation.table]
    except KeyError as exc:
        raise ValueError(f"Unknown table {relation.table!r} for relation {relation.name}") from exc


def _owner_criteria(
    table: Table,
    relation: Relation,
    owner: EntityRef,
) -> list[ColumnElement[bool]]:
    return [table.c[column] == value for column, value in relation.owner_columns(owner).items()]
