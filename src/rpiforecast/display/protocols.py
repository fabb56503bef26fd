# src/rpiforecast/display/protocols.py
from __future__ import annotations

from typing import Protocol, runtime_checkable

from rpiforecast.common.enums import FailureKind
from rpiforecast.weather.collection import ForecastCollection


@runtime_checkable
class ForecastView(Protocol):
    """Protocol for anything that presents the forecast collection.

    The polling pipeline only needs two entry points: redraw from the
    collection after an update, and show an error indicator after a
    failed cycle.
    """

    def show_forecast(self, collection: ForecastCollection) -> None:
        """Redraw from the current contents of ``collection``."""
        ...

    def show_error(self, kind: FailureKind, message: str) -> None:
        """Indicate that the latest poll cycle failed."""
        ...


class MockView:
    """Mock implementation of ForecastView for testing."""

    def __init__(self) -> None:
        self.forecast_calls: list[int] = []
        self.error_calls: list[tuple[FailureKind, str]] = []

    def show_forecast(self, collection: ForecastCollection) -> None:
        """Record the redraw along with the collection size."""
        self.forecast_calls.append(len(collection))

    def show_error(self, kind: FailureKind, message: str) -> None:
        self.error_calls.append((kind, message))

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.forecast_calls = []
        self.error_calls = []
