"""Interval helpers for the poll timer."""

from __future__ import annotations

from datetime import timedelta


def to_interval(value: timedelta | float) -> timedelta:
    """Normalise an interval given as timedelta or seconds.

    Raises:
        ValueError: If the interval is not positive
    """
    interval = value if isinstance(value, timedelta) else timedelta(seconds=value)
    if interval <= timedelta(0):
        raise ValueError(f"Poll interval must be positive, got {interval}")
    return interval
