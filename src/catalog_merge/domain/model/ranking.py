"""Ranking configurations and the ranked items they hold."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from catalog_merge.domain.model.entity import EntityRef, new_id

if TYPE_CHECKING:
    from uuid import UUID

    from catalog_merge.domain.model.enums import EntityKind


@dataclass(eq=False, kw_only=True)
class RankingConfiguration:
    id: UUID = field(default_factory=new_id)
    name: str


@dataclass(eq=False, kw_only=True)
class RankedItem:
    """One entity's position inside a ranking configuration.

    Ranked items are owned by the ranked entity and are destroyed with it;
    the recalculation worker rebuilds them for the survivor.
    """

    id: UUID = field(default_factory=new_id)
    ranking_configuration_id: UUID
    item_type: EntityKind
    item_id: UUID
    rank: int | None = None
    score: float | None = None

    @property
    def item(self) -> EntityRef:
        return EntityRef(self.item_type, self.item_id)
