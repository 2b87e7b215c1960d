"""Merge orchestrator: run a plan atomically, then fire post-commit side effects."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from catalog_merge.domain.merging.errors import (
    MergeError,
    NotFoundError,
    SelfMergeError,
    UnknownMergeError,
    ValidationError,
)
from catalog_merge.domain.merging.plans import DEFAULT_PLANS
from catalog_merge.domain.merging.result import MergeResult, MergeStats
from catalog_merge.domain.merging.scope import AffectedScope, collect_affected_scope
from catalog_merge.domain.model import EntityKind, EntityRef

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from uuid import UUID

    from catalog_merge.domain.merging.plans import MergePlan
    from catalog_merge.domain.merging.scope import DownstreamScheduler
    from catalog_merge.domain.model import CatalogEntity
    from catalog_merge.domain.ports.persistence import MergeRepository
    from catalog_merge.domain.ports.unit_of_work import MergeUnitOfWork

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Committed:
    stats: MergeStats
    scope: AffectedScope


class EntityMerger:
    """Consolidate a duplicate ``source`` record into ``target``.

    All reconciliation happens in one unit of work. Any failure rolls the whole
    merge back and is reported through ``MergeResult``; reindex and ranking
    recalculation are only enqueued after the commit succeeded.
    """

    def __init__(
        self,
        *,
        unit_of_work_factory: Callable[[], MergeUnitOfWork],
        scheduler: DownstreamScheduler,
        plans: Mapping[EntityKind, MergePlan] = DEFAULT_PLANS,
    ) -> None:
        self.unit_of_work_factory = unit_of_work_factory
        self.scheduler = scheduler
        self.plans = plans

    def merge(self, kind: EntityKind | str, source_id: UUID, target_id: UUID) -> MergeResult:
        log.info("Merging %s %s into %s", kind, source_id, target_id)
        try:
            if source_id == target_id:
                raise SelfMergeError(f"Cannot merge {kind} {source_id} with itself")  # noqa: TRY301
            plan = self._plan_for(kind)
            source = EntityRef(plan.kind, source_id)
            target = EntityRef(plan.kind, target_id)
            committed = self._merge_atomically(plan, source, target)
        except MergeError as exc:
            log.warning(
                "Merge of %s %s into %s failed (%s): %s", kind, source_id, target_id, exc.kind, exc
            )
            return MergeResult.failed(exc)
        except Exception as exc:
            log.exception("Unexpected error merging %s %s into %s", kind, source_id, target_id)
            return MergeResult.failed(UnknownMergeError(str(exc) or type(exc).__name__))

        self._after_commit(source, target, committed.scope)
        log.info(
            "Merged %s into %s: moved=%s, removed=%s, configurations=%s",
            source,
            target,
            committed.stats.moved,
            committed.stats.removed,
            len(committed.scope),
        )
        return MergeResult.succeeded(target_id, committed.stats, committed.scope.configurations)

    def _plan_for(self, kind: EntityKind | str) -> MergePlan:
        try:
            return self.plans[EntityKind(kind)]
        except (KeyError, ValueError) as exc:
            raise UnknownMergeError(f"No merge plan for entity kind {kind!r}") from exc

    def _merge_atomically(
        self,
        plan: MergePlan,
        source_ref: EntityRef,
        target_ref: EntityRef,
    ) -> _Committed:
        stats = MergeStats()
        with self.unit_of_work_factory() as uow:
            repository = uow.repositories.catalog
            source = _load(repository, source_ref, role="Source")
            target = _load(repository, target_ref, role="Target")
            scope = collect_affected_scope(repository, source_ref, target_ref)

            for step in plan.steps:
                stats.record(step.name, step.apply(repository, source, target))

            errors = target.validation_errors()
            if errors:
                raise ValidationError(f"Validation failed: {', '.join(errors)}")
            target.touch()
            repository.save(target)

            for owned in plan.owned:
                stats.record(owned.name, owned.apply(repository, source, target))
            repository.delete(source)
            uow.commit()
        return _Committed(stats=stats, scope=scope)

    def _after_commit(self, source: EntityRef, target: EntityRef, scope: AffectedScope) -> None:
        failed = [
            *self.scheduler.reindex(target),
            *self.scheduler.unindex(source),
            *self.scheduler.schedule(scope),
        ]
        if failed:
            log.warning(
                "Merge of %s into %s committed but %s downstream job(s) were not enqueued",
                source,
                target,
                len(failed),
            )


def _load(repository: MergeRepository, ref: EntityRef, *, role: str) -> CatalogEntity:
    entity = repository.get(ref)
    if entity is None:
        raise NotFoundError(f"{role} {ref.kind} {ref.id} not found")
    return entity
