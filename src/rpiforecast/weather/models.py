"""Typed models for OpenWeather 2.5 /forecast responses.

The raw blocks mirror the JSON layout and are lenient (see LenientModel);
ForecastRecord is the flattened, immutable record handed to the display.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from rpiforecast.models.base import LenientModel
from rpiforecast.utils.time import TimeUtils

# Last midnight of year 9999 UTC; later stamps overflow datetime once localized
MAX_TIMESTAMP: Final = 253402214400

# ─────────────────────────── raw payload blocks ──────────────────────────────


class WeatherCondition(LenientModel):
    """Weather condition information from OpenWeather."""

    id: int | str = ""
    main: str = ""
    description: str = ""
    icon: str = ""


class MainBlock(LenientModel):
    """Temperatures and humidity of one slice."""

    temp: float = 0.0
    temp_min: float = 0.0
    temp_max: float = 0.0
    humidity: float = Field(0.0, ge=0, allow_inf_nan=False)


class WindBlock(LenientModel):
    speed: float = 0.0


class CloudsBlock(LenientModel):
    all: float = Field(0.0, ge=0, allow_inf_nan=False)


class VolumeBlock(LenientModel):
    """Rain or snow volume for the last 3 hours, in mm."""

    volume_3h: float = Field(0.0, alias="3h")


class CityBlock(LenientModel):
    name: str = ""


class ForecastSlice(LenientModel):
    """One element of the ``list`` array."""

    dt: int = Field(0, ge=0, le=MAX_TIMESTAMP)
    dt_txt: str = ""
    main: MainBlock = Field(default_factory=MainBlock)
    weather: list[WeatherCondition] = Field(default_factory=list)
    wind: WindBlock = Field(default_factory=WindBlock)
    clouds: CloudsBlock = Field(default_factory=CloudsBlock)
    pop: float = 0.0
    rain: VolumeBlock = Field(default_factory=VolumeBlock)
    snow: VolumeBlock = Field(default_factory=VolumeBlock)

    @property
    def weather_main(self) -> WeatherCondition:
        """Get the primary weather condition.

        Returns:
            First weather condition, or an empty one if the list is empty
        """
        return self.weather[0] if self.weather else WeatherCondition()

    def to_record(self, city_name: str, is_current: bool) -> ForecastRecord:
        """Flatten this slice into a ForecastRecord.

        Args:
            city_name: Batch-level city name
            is_current: Whether this slice represents current conditions

        Returns:
            Immutable forecast record
        """
        condition = self.weather_main
        return ForecastRecord(
            is_current=is_current,
            timestamp=self.dt,
            label=self.dt_txt,
            city_name=city_name,
            condition_id=str(condition.id),
            condition_main=condition.main,
            condition_description=condition.description,
            icon_id=condition.icon,
            temperature=self.main.temp,
            temperature_min=self.main.temp_min,
            temperature_max=self.main.temp_max,
            wind_speed=self.wind.speed,
            humidity=round(self.main.humidity),
            cloudiness=round(self.clouds.all),
            precipitation_probability=self.pop,
            rain_volume_3h=self.rain.volume_3h,
            snow_volume_3h=self.snow.volume_3h,
        )


# ─────────────────────────── display records ─────────────────────────────────


class ForecastRecord(BaseModel):
    """One time-sliced forecast sample, or the current-conditions sample.

    Every field has a zero default, so ``ForecastRecord()`` doubles as the
    "invalid" record returned for out-of-range lookups.
    """

    model_config = ConfigDict(frozen=True)

    is_current: bool = False
    timestamp: int = 0
    label: str = ""
    city_name: str = ""
    condition_id: str = ""
    condition_main: str = ""
    condition_description: str = ""
    icon_id: str = ""
    temperature: float = 0.0
    temperature_min: float = 0.0
    temperature_max: float = 0.0
    wind_speed: float = 0.0
    humidity: int = 0
    cloudiness: int = 0
    precipitation_probability: float = 0.0
    rain_volume_3h: float = 0.0
    snow_volume_3h: float = 0.0

    @property
    def date_time(self) -> datetime:
        """UTC datetime of the slice, derived from ``timestamp``."""
        return TimeUtils.epoch_to_datetime(self.timestamp)

    @property
    def is_day(self) -> bool:
        """Check if the icon represents daytime conditions."""
        return not self.icon_id.endswith("n")

    @property
    def has_rain(self) -> bool:
        return self._condition_in(500, 600)

    @property
    def has_snow(self) -> bool:
        return self._condition_in(600, 700)

    def _condition_in(self, low: int, high: int) -> bool:
        try:
            code = int(self.condition_id)
        except ValueError:
            return False
        return low <= code < high


class ForecastRole(Enum):
    """Named field accessors used by list bindings in the display layer.

    Values are the binding names exposed through ``role_names()``.
    """

    CITY_NAME = "cityName"
    IS_CURRENT_WEATHER = "isCurrentWeather"
    DATE_AND_TIME = "dateAndTime"
    TIMESTAMP = "timestamp"
    LABEL = "label"
    CONDITION_ID = "conditionId"
    WEATHER_MAIN = "weatherMain"
    WEATHER_DESCRIPTION = "weatherDescription"
    WEATHER_ICON = "weatherIcon"
    TEMPERATURE = "mainTemp"
    MIN_TEMPERATURE = "mainTempMin"
    MAX_TEMPERATURE = "mainTempMax"
    WIND_SPEED = "windSpeed"
    HUMIDITY = "humidity"
    CLOUDINESS = "cloudiness"
    POP = "pop"
    RAIN_3H = "rain3h"
    SNOW_3H = "snow3h"


# Role → ForecastRecord attribute
ROLE_ATTRIBUTES: Final[dict[ForecastRole, str]] = {
    ForecastRole.CITY_NAME: "city_name",
    ForecastRole.IS_CURRENT_WEATHER: "is_current",
    ForecastRole.DATE_AND_TIME: "date_time",
    ForecastRole.TIMESTAMP: "timestamp",
    ForecastRole.LABEL: "label",
    ForecastRole.CONDITION_ID: "condition_id",
    ForecastRole.WEATHER_MAIN: "condition_main",
    ForecastRole.WEATHER_DESCRIPTION: "condition_description",
    ForecastRole.WEATHER_ICON: "icon_id",
    ForecastRole.TEMPERATURE: "temperature",
    ForecastRole.MIN_TEMPERATURE: "temperature_min",
    ForecastRole.MAX_TEMPERATURE: "temperature_max",
    ForecastRole.WIND_SPEED: "wind_speed",
    ForecastRole.HUMIDITY: "humidity",
    ForecastRole.CLOUDINESS: "cloudiness",
    ForecastRole.POP: "precipitation_probability",
    ForecastRole.RAIN_3H: "rain_volume_3h",
    ForecastRole.SNOW_3H: "snow_volume_3h",
}
