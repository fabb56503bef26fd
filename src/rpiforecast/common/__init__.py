"""Shared enums and notification primitives."""

from rpiforecast.common.enums import FailureKind, FetchState
from rpiforecast.common.events import Signal

__all__ = ["FailureKind", "FetchState", "Signal"]
