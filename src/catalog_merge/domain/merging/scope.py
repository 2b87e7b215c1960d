"""Affected-scope collection and post-commit scheduling of downstream work."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING, Final

from catalog_merge.domain.model import JobType
from catalog_merge.domain.ports.work_queue import Job

if TYPE_CHECKING:
    from uuid import UUID

    from catalog_merge.domain.model import EntityRef
    from catalog_merge.domain.ports.persistence import MergeRepository
    from catalog_merge.domain.ports.work_queue import WorkQueue

log = logging.getLogger(__name__)

DEFAULT_RECALCULATION_DELAY: Final = timedelta(minutes=5)


@dataclass(frozen=True, slots=True)
class AffectedScope:
    """Ranking configurations that referenced either record before the merge."""

    configurations: frozenset[UUID] = field(default_factory=frozenset["UUID"])

    def __len__(self) -> int:
        return len(self.configurations)

    def ordered(self) -> tuple[UUID, ...]:
        return tuple(sorted(self.configurations, key=str))


def collect_affected_scope(repository: MergeRepository, *refs: EntityRef) -> AffectedScope:
    """Snapshot the configurations ranking any of ``refs``, de-duplicated."""

    return AffectedScope(frozenset(repository.ranking_configurations_for(refs)))


class DownstreamScheduler:
    """Enqueue reindex and recalculation work once a merge has committed.

    Every job is attempted independently. A job that cannot be enqueued is
    logged and returned to the caller; the merge itself stays successful.
    """

    def __init__(
        self,
        queue: WorkQueue,
        *,
        recalculation_delay: timedelta = DEFAULT_RECALCULATION_DELAY,
    ) -> None:
        self.queue = queue
        self.recalculation_delay = recalculation_delay

    def schedule(self, scope: AffectedScope) -> list[Job]:
        failed: list[Job] = []
        for configuration_id in scope.ordered():
            payload = {"id": str(configuration_id)}
            failed.extend(self._enqueue(Job(JobType.CALCULATE_WEIGHTS, payload)))
            failed.extend(
                self._enqueue(
                    Job(JobType.RECALCULATE_RANKINGS, payload),
                    delay=self.recalculation_delay,
                )
            )
        return failed

    def reindex(self, ref: EntityRef) -> list[Job]:
        return self._enqueue(Job(JobType.REINDEX_ENTITY, _entity_payload(ref)))

    def unindex(self, ref: EntityRef) -> list[Job]:
        return self._enqueue(Job(JobType.UNINDEX_ENTITY, _entity_payload(ref)))

    def _enqueue(self, job: Job, *, delay: timedelta | None = None) -> list[Job]:
        try:
            self.queue.enqueue(job, delay=delay)
        except Exception:
            log.exception("Failed to enqueue %s %s; retry it manually", job.type, dict(job.payload))
            return [job]
        return []


def _entity_payload(ref: EntityRef) -> dict[str, str]:
    return {"id": str(ref.id), "kind": str(ref.kind)}
