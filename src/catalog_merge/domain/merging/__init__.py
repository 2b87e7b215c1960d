"""Duplicate entity merge engine."""

from __future__ import annotations

from .errors import (
    ConstraintViolationError,
    MergeError,
    MergeErrorKind,
    NotFoundError,
    SelfMergeError,
    UnknownMergeError,
    ValidationError,
)
from .orchestrator import EntityMerger
from .plans import ALBUM_PLAN, ARTIST_PLAN, DEFAULT_PLANS, SONG_PLAN, MergePlan
from .relations import EdgeRelation, Relation
from .result import MergeFailure, MergeResult, MergeStats
from .scope import (
    DEFAULT_RECALCULATION_DELAY,
    AffectedScope,
    DownstreamScheduler,
    collect_affected_scope,
)
from .strategies import (
    DeleteOwned,
    DirectedGraphMerge,
    MergeStrategy,
    NumericReconcile,
    ReassignAll,
    ReassignUnique,
    SingletonPreserve,
    StepOutcome,
)

__all__ = [
    "ALBUM_PLAN",
    "ARTIST_PLAN",
    "DEFAULT_PLANS",
    "DEFAULT_RECALCULATION_DELAY",
    "SONG_PLAN",
    "AffectedScope",
    "ConstraintViolationError",
    "DeleteOwned",
    "DirectedGraphMerge",
    "DownstreamScheduler",
    "EdgeRelation",
    "EntityMerger",
    "MergeError",
    "MergeErrorKind",
    "MergeFailure",
    "MergePlan",
    "MergeResult",
    "MergeStats",
    "MergeStrategy",
    "NotFoundError",
    "NumericReconcile",
    "ReassignAll",
    "ReassignUnique",
    "Relation",
    "SelfMergeError",
    "SingletonPreserve",
    "StepOutcome",
    "UnknownMergeError",
    "ValidationError",
    "collect_affected_scope",
]
