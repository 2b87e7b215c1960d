"""
Base building blocks:
identity and typed references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from catalog_merge.domain.model.enums import EntityKind


def new_id() -> UUID:
    return uuid4()


@dataclass(frozen=True, slots=True)
class EntityRef:
    """Reference to a catalog entity by kind and surrogate id."""

    kind: EntityKind
    id: UUID

    def __str__(self) -> str:
        return f"{self.kind}:{self.id}"


@dataclass(eq=False, kw_only=True)
class Entity:
    """Internal identity exists immediately in the domain."""

    id: UUID = field(default_factory=new_id)

    # class-level discriminator; subclasses must override
    ENTITY_KIND: ClassVar[EntityKind]

    @property
    def kind(self) -> EntityKind:
        return self.ENTITY_KIND

    @property
    def ref(self) -> EntityRef:
        return EntityRef(self.ENTITY_KIND, self.id)
