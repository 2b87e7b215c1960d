"""Merge error taxonomy.

Every error carries a machine-distinguishable ``kind`` so the orchestrator can
report it without leaking exception types to callers.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class MergeErrorKind(StrEnum):
    SELF_MERGE = "self_merge"
    CONSTRAINT_VIOLATION = "constraint_violation"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class MergeError(Exception):
    """Base class for failures inside a merge."""

    kind: ClassVar[MergeErrorKind] = MergeErrorKind.UNKNOWN

    @property
    def message(self) -> str:
        return str(self)


class SelfMergeError(MergeError):
    """Raised when source and target are the same record."""

    kind = MergeErrorKind.SELF_MERGE


class ConstraintViolationError(MergeError):
    """Raised when a write violates a uniqueness or referential constraint."""

    kind = MergeErrorKind.CONSTRAINT_VIOLATION


class ValidationError(ConstraintViolationError):
    """Raised when an entity fails a domain constraint while being merged."""


class NotFoundError(MergeError):
    """Raised when the source or target no longer exists."""

    kind = MergeErrorKind.NOT_FOUND


class UnknownMergeError(MergeError):
    """Wraps any other exception caught at the merge boundary."""
