"""Scheduling package: poll timer and interval handling."""

from rpiforecast.scheduling.models import to_interval
from rpiforecast.scheduling.timer import IntervalTimer

__all__ = ["IntervalTimer", "to_interval"]
