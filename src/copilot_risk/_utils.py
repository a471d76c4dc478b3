"""Shared numeric helpers for the aggregation modules."""

from __future__ import annotations

import math

__all__ = ["non_negative", "round_half_up", "safe_pct"]


def non_negative(value: float | None) -> float:
    """Return ``value`` as a finite float clamped to ``>= 0`` (missing counts as 0)."""

    if value is None:
        return 0.0
    number = float(value)
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, as the dashboard does."""

    return math.floor(value + 0.5)


def safe_pct(part: float, whole: float) -> float:
    """``part / whole * 100`` or ``0.0`` when ``whole`` is not positive."""

    if whole <= 0:
        return 0.0
    return part / whole * 100
