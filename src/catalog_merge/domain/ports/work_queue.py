"""Port for handing work to external asynchronous workers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import timedelta

    from catalog_merge.domain.model import JobType


@dataclass(frozen=True, slots=True)
class Job:
    type: JobType
    payload: Mapping[str, str] = field(default_factory=dict["str", "str"])


@runtime_checkable
class WorkQueue(Protocol):
    """Fire-and-forget queue with at-least-once delivery."""

    def enqueue(self, job: Job, *, delay: timedelta | None = None) -> None: ...
