"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from catalog_merge.adapters.celery import CeleryWorkQueue, build_celery_app
from catalog_merge.adapters.sqlalchemy.inventory import uncovered_attachments
from catalog_merge.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyMergeUnitOfWork,
    is_started,
    startup,
)
from catalog_merge.config import get_queue_config
from catalog_merge.domain.merging import DEFAULT_PLANS, DownstreamScheduler, EntityMerger
from catalog_merge.domain.ports.unit_of_work import MergeUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

    from catalog_merge.config import QueueConfig
    from catalog_merge.domain.merging import MergePlan, MergeResult
    from catalog_merge.domain.merging.relations import Attachment
    from catalog_merge.domain.model import EntityKind
    from catalog_merge.domain.ports.work_queue import WorkQueue

UnitOfWorkFactory = Callable[[], MergeUnitOfWork]


log = getLogger(__name__)


def merge_entities(
    kind: EntityKind | str,
    source_id: UUID,
    target_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    work_queue: WorkQueue | None = None,
    queue_config: QueueConfig | None = None,
) -> MergeResult:
    """Merge ``source_id`` into ``target_id`` using the configured adapters."""

    if unit_of_work_factory is None and not is_started():
        startup()
    effective_uow = unit_of_work_factory or SqlAlchemyMergeUnitOfWork
    config = queue_config or get_queue_config()
    effective_queue = work_queue or CeleryWorkQueue(build_celery_app(config))

    merger = EntityMerger(
        unit_of_work_factory=effective_uow,
        scheduler=DownstreamScheduler(
            effective_queue,
            recalculation_delay=config.recalculation_delay,
        ),
    )
    result = merger.merge(kind, source_id, target_id)
    if result.ok:
        log.info(
            "Finished merge: survivor=%s, moved=%d, removed=%d, configurations=%d",
            result.survivor,
            sum(result.stats.values()),
            sum(result.removed.values()),
            len(result.affected_configurations),
        )
    return result


def check_merge_plans(
    plans: Mapping[EntityKind, MergePlan] = DEFAULT_PLANS,
) -> dict[EntityKind, frozenset[Attachment]]:
    """Return, per kind, the schema attachments its plan does not handle."""

    gaps = {kind: uncovered_attachments(plan) for kind, plan in plans.items()}
    for kind, missing in gaps.items():
        if missing:
            log.warning(
                "Merge plan for %s misses %s",
                kind,
                ", ".join(f"{table}.{column}" for table, column in sorted(missing)),
            )
    return {kind: missing for kind, missing in gaps.items() if missing}
