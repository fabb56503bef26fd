"""Display-ready collection of the latest accepted forecast batch."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator
from typing import Any, Final

from rpiforecast.common.events import Signal
from rpiforecast.weather.models import ROLE_ATTRIBUTES, ForecastRecord, ForecastRole

logger: Final = logging.getLogger(__name__)

_EMPTY: Final = ForecastRecord()


class ForecastCollection:
    """Ordered, role-addressable list of ForecastRecord.

    The collection is written by a single fetcher and read by the display.
    Contents are held as an immutable tuple that ``replace`` swaps in one
    step, so a reader sees either the old batch or the new one, never a mix.

    Signals:
        about_to_reset: emitted before the contents are swapped
        reset: emitted after the swap
        count_changed(int): emitted after ``reset`` with the new length
    """

    def __init__(self, records: Iterable[ForecastRecord] = ()) -> None:
        self._records: tuple[ForecastRecord, ...] = tuple(records)
        self._lock = threading.Lock()

        self.about_to_reset = Signal("about_to_reset")
        self.reset = Signal("reset")
        self.count_changed = Signal("count_changed")

    # ---- writing ----
    def replace(self, records: Iterable[ForecastRecord]) -> None:
        """Discard all held records and store ``records`` instead.

        Args:
            records: New batch, in display order
        """
        new_records = tuple(records)

        self.about_to_reset.emit()
        with self._lock:
            self._records = new_records
        self.reset.emit()

        for record in new_records:
            logger.debug(
                "City: %s Temp: %.1f Min: %.1f Max: %.1f Description: %s",
                record.city_name,
                record.temperature,
                record.temperature_min,
                record.temperature_max,
                record.condition_description,
            )
        self.count_changed.emit(len(new_records))

    # ---- reading ----
    def snapshot(self) -> tuple[ForecastRecord, ...]:
        """Return the current batch as one consistent tuple."""
        with self._lock:
            return self._records

    def __len__(self) -> int:
        return len(self.snapshot())

    def __iter__(self) -> Iterator[ForecastRecord]:
        return iter(self.snapshot())

    def at(self, index: int) -> ForecastRecord:
        """Get the record at ``index``.

        Returns:
            The record, or an all-zero ForecastRecord when out of range
        """
        records = self.snapshot()
        if index < 0 or index >= len(records):
            return _EMPTY
        return records[index]

    def field_by_role(self, index: int, role: ForecastRole | str) -> tuple[Any, bool]:
        """Look up one field of one record by role.

        Args:
            index: Row in the collection
            role: ForecastRole or its binding name (e.g. "mainTemp")

        Returns:
            ``(value, True)`` on success, ``(None, False)`` for an
            out-of-range index or an unknown role
        """
        try:
            role = ForecastRole(role)
        except ValueError:
            return None, False

        records = self.snapshot()
        if index < 0 or index >= len(records):
            return None, False
        return getattr(records[index], ROLE_ATTRIBUTES[role]), True

    @staticmethod
    def role_names() -> dict[ForecastRole, str]:
        """Map every role to the name list bindings use for it."""
        return {role: role.value for role in ForecastRole}

    # ---- current conditions ----
    def current(self) -> ForecastRecord:
        """Get the current-conditions record of the batch.

        Returns:
            The record flagged ``is_current``, or an all-zero record
        """
        for record in self.snapshot():
            if record.is_current:
                return record
        return _EMPTY

    @property
    def current_city_name(self) -> str:
        return self.current().city_name

    @property
    def current_weather_description(self) -> str:
        return self.current().condition_description

    @property
    def current_weather_icon(self) -> str:
        return self.current().icon_id

    @property
    def current_main_temp(self) -> float:
        return self.current().temperature

    @property
    def current_wind_speed(self) -> float:
        return self.current().wind_speed

    @property
    def current_pop(self) -> float:
        return self.current().precipitation_probability
