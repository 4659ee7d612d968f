"""Allocation limits applied to every buffer region request."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

from .telemetry import ENV_PREFIX


@dataclass(frozen=True, slots=True)
class BufferLimits:
    """Upper bound on a single owned region; ``None`` means unbounded."""

    max_capacity: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_capacity is not None and self.max_capacity < 0:
            raise ValueError("max_capacity cannot be negative")

    def allows(self, size: int) -> bool:
        return self.max_capacity is None or size <= self.max_capacity


def _limits_from_env() -> BufferLimits:
    variable = f"{ENV_PREFIX}MAX_CAPACITY"
    raw = os.getenv(variable, "").strip()
    if not raw:
        return BufferLimits()
    try:
        max_capacity = int(raw)
    except ValueError as exc:
        raise ValueError(f"{variable} must be an integer, got {raw!r}") from exc
    return BufferLimits(max_capacity=max_capacity)


_ACTIVE_LIMITS: BufferLimits = _limits_from_env()


def current_limits() -> BufferLimits:
    return _ACTIVE_LIMITS


def configure_limits(
    *, limits: Optional[BufferLimits] = None, max_capacity: Optional[int] = None
) -> BufferLimits:
    """Install new limits, either a full ``BufferLimits`` or a single override."""

    global _ACTIVE_LIMITS
    if limits is not None and max_capacity is not None:
        raise ValueError("Provide either `limits` or `max_capacity`, not both.")

    if limits is None:
        limits = replace(_ACTIVE_LIMITS, max_capacity=max_capacity)
    _ACTIVE_LIMITS = limits
    return _ACTIVE_LIMITS


def reset_limits() -> BufferLimits:
    """Restore the limits described by the environment."""

    global _ACTIVE_LIMITS
    _ACTIVE_LIMITS = _limits_from_env()
    return _ACTIVE_LIMITS


__all__ = ["BufferLimits", "configure_limits", "current_limits", "reset_limits"]
