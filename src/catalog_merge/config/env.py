"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from datetime import timedelta
from typing import TYPE_CHECKING

from .errors import InvalidConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise if any are missing/blank."""

    missing: list[str] = []
    values: dict[str, str] = {}
    for name in names:
        value = os.getenv(name)
        if value is None or not value.strip():
            missing.append(name)
            continue
        values[name] = value

    if missing:
        missing_list = ", ".join(sorted(missing))
        raise MissingConfigurationError(f"Missing configuration for: {missing_list}")

    return values


def env_seconds(name: str, default: timedelta) -> timedelta:
    """Read a non-negative number of seconds, falling back to ``default`` when unset."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        seconds = float(raw)
    except ValueError as exc:
        raise InvalidConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from exc
    if seconds < 0:
        raise InvalidConfigurationError(f"{name} must be non-negative")
    return timedelta(seconds=seconds)
