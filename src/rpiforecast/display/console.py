"""Plain-text forecast view for terminals and headless devices."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Final

from jinja2 import DictLoader, Environment, StrictUndefined

from rpiforecast.common.enums import FailureKind
from rpiforecast.utils import (
    TimeUtils,
    format_percentage,
    format_temperature,
    format_volume,
    format_wind_speed,
)
from rpiforecast.weather.collection import ForecastCollection
from rpiforecast.weather.fetcher import PollingFetcher

logger: Final = logging.getLogger(__name__)

FORECAST_TEMPLATE: Final = """\
{% if current.city_name %}{{ current.city_name }} - {% endif %}{{ current.timestamp | local_time(date_format) }}
Now: {{ current.temperature | temp }} {{ current.condition_description or current.condition_main }}, \
wind {{ current.wind_speed | wind }}, rain chance {{ current.precipitation_probability | pct }}
{%- for slot in slots %}
  {{ slot.timestamp | local_time(time_format) }}  {{ slot.temperature | temp }} \
({{ slot.temperature_min | temp }}/{{ slot.temperature_max | temp }})  {{ slot.condition_main }}\
{% if slot.precipitation_probability %}  {{ slot.precipitation_probability | pct }}{% endif %}\
{% if slot.rain_volume_3h %}  rain {{ slot.rain_volume_3h | volume }}{% endif %}\
{% if slot.snow_volume_3h %}  snow {{ slot.snow_volume_3h | volume }}{% endif %}
{%- endfor %}"""

ERROR_TEMPLATE: Final = "Weather update failed ({{ kind }}): {{ message }} - showing last forecast"

EMPTY_TEMPLATE: Final = "No forecast data yet"


class ConsoleForecastView:
    """Renders the forecast collection as text through an echo function.

    Args:
        echo: Receives each rendered block, ``print`` by default
        slot_count: Number of forecast slices after the current one
        time_format: strftime format for forecast slices
        date_format: strftime format for the heading
    """

    def __init__(
        self,
        echo: Callable[[str], Any] = print,
        slot_count: int = 8,
        time_format: str = "%a %H:%M",
        date_format: str = "%A, %B %d %H:%M",
    ) -> None:
        self.echo = echo
        self.slot_count = slot_count
        self.time_format = time_format
        self.date_format = date_format

        self.env = Environment(
            loader=DictLoader(
                {
                    "forecast.txt": FORECAST_TEMPLATE,
                    "error.txt": ERROR_TEMPLATE,
                    "empty.txt": EMPTY_TEMPLATE,
                }
            ),
            undefined=StrictUndefined,
        )
        self._register_filters()

    def _register_filters(self) -> None:
        self.env.filters.update(
            {
                "temp": format_temperature,
                "pct": format_percentage,
                "wind": format_wind_speed,
                "volume": format_volume,
                "local_time": lambda ts, fmt: TimeUtils.format_datetime(
                    TimeUtils.to_local_datetime(ts), fmt
                ),
            }
        )

    def attach(self, fetcher: PollingFetcher) -> None:
        """Redraw on every ``updated`` and report every ``failed``."""
        fetcher.updated.connect(lambda: self.show_forecast(fetcher.collection))
        fetcher.failed.connect(self.show_error)

    def render_forecast(self, collection: ForecastCollection) -> str:
        records = collection.snapshot()
        if not records:
            return self.env.get_template("empty.txt").render()

        current = collection.current()
        slots = [r for r in records if not r.is_current][: self.slot_count]
        return self.env.get_template("forecast.txt").render(
            current=current,
            slots=slots,
            time_format=self.time_format,
            date_format=self.date_format,
        )

    def render_error(self, kind: FailureKind, message: str) -> str:
        return self.env.get_template("error.txt").render(kind=kind.value, message=message)

    def show_forecast(self, collection: ForecastCollection) -> None:
        self.echo(self.render_forecast(collection))

    def show_error(self, kind: FailureKind, message: str) -> None:
        self.echo(self.render_error(kind, message))
