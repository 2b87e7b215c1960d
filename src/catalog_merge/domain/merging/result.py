"""Uniform outcome of a merge, consumed by UI actions and admin tooling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from catalog_merge.domain.merging.errors import MergeErrorKind

if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

    from catalog_merge.domain.merging.errors import MergeError
    from catalog_merge.domain.merging.strategies import StepOutcome


@dataclass(frozen=True, slots=True)
class MergeFailure:
    kind: MergeErrorKind
    message: str


@dataclass(slots=True)
class MergeStats:
    """Per-relation tally: records moved onto the target and records removed."""

    moved: dict[str, int] = field(default_factory=dict["str", "int"])
    removed: dict[str, int] = field(default_factory=dict["str", "int"])

    def record(self, name: str, outcome: StepOutcome) -> None:
        self.moved[name] = self.moved.get(name, 0) + outcome.moved
        if outcome.removed:
            self.removed[name] = self.removed.get(name, 0) + outcome.removed


@dataclass(frozen=True, slots=True, kw_only=True)
class MergeResult:
    ok: bool
    survivor: UUID | None = None
    stats: Mapping[str, int] = field(default_factory=dict["str", "int"])
    removed: Mapping[str, int] = field(default_factory=dict["str", "int"])
    affected_configurations: frozenset[UUID] = field(default_factory=frozenset["UUID"])
    error: MergeFailure | None = None

    @classmethod
    def succeeded(
        cls,
        survivor: UUID,
        stats: MergeStats,
        affected_configurations: frozenset[UUID],
    ) -> MergeResult:
        return cls(
            ok=True,
            survivor=survivor,
            stats=dict(stats.moved),
            removed=dict(stats.removed),
            affected_configurations=affected_configurations,
        )

    @classmethod
    def failed(cls, error: MergeError) -> MergeResult:
        return cls(ok=False, error=MergeFailure(kind=error.kind, message=error.message))

    @property
    def error_kind(self) -> MergeErrorKind | None:
        return self.error.kind if self.error is not None else None
