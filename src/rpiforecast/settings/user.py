"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Final, Literal

from pydantic import BaseModel, Field, ValidationError

from rpiforecast.settings.store import ConfigStore

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

# Optional keys are only passed on when present so pydantic defaults apply
OPTIONAL_WEATHER_KEYS: Final = {
    "Weather/RefreshMinutes": "refresh_minutes",
    "Weather/RequestTimeout": "request_timeout",
}
OPTIONAL_LOGGING_KEYS: Final = {
    "Logging/LogToFile": "log_to_file",
    "Logging/LogToConsole": "log_to_console",
    "Logging/FilePath": "file_path",
    "Logging/Level": "level",
}


class WeatherSettings(BaseModel):
    """Location, credential and polling settings (``Weather`` section)."""

    api_key: str = Field("", description="OpenWeather API key")
    lat: float = Field(0.0, ge=-90.0, le=90.0, description="Latitude")
    lon: float = Field(0.0, ge=-180.0, le=180.0, description="Longitude")
    refresh_minutes: float = Field(10.0, gt=0, description="Poll interval (minutes)")
    request_timeout: float = Field(10.0, gt=0, description="HTTP timeout (seconds)")

    @property
    def refresh_interval(self) -> timedelta:
        return timedelta(minutes=self.refresh_minutes)


class LoggingSettings(BaseModel):
    """Log destinations (``Logging`` section)."""

    log_to_file: bool = False
    log_to_console: bool = True
    file_path: Path = Path("rpiforecast.log")
    level: LogLevel = "INFO"


class UserSettings(BaseModel):
    """User settings for the forecast display.

    Built from a ConfigStore so missing keys degrade to empty values with a
    logged warning. Values that are present but out of range are rejected.
    """

    weather: WeatherSettings = Field(default_factory=WeatherSettings)
    log: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_store(cls, store: ConfigStore) -> UserSettings:
        """Build settings from a key/value store.

        Args:
            store: Loaded configuration

        Returns:
            Validated UserSettings object

        Raises:
            RuntimeError: If a present value is invalid
        """
        weather: dict[str, object] = {
            "api_key": store.get_str("Weather/OpenWeatherApiKey"),
            "lat": store.get_float("Weather/Latitude"),
            "lon": store.get_float("Weather/Longitude"),
        }
        for key, field in OPTIONAL_WEATHER_KEYS.items():
            if key in store:
                weather[field] = store.get_float(key, default=10.0)

        log: dict[str, object] = {}
        for key, field in OPTIONAL_LOGGING_KEYS.items():
            if key not in store:
                continue
            if field.startswith("log_to_"):
                log[field] = store.get_bool(key)
            elif field == "level":
                log[field] = store.get_str(key).upper()
            else:
                log[field] = store.get_str(key)

        try:
            return cls(weather=WeatherSettings(**weather), log=LoggingSettings(**log))
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated UserSettings object

        Raises:
            FileNotFoundError: If no config file is found
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        return cls.from_store(ConfigStore.load(path))

    def to_mapping(self) -> dict[str, dict[str, object]]:
        """Render the settings in config file layout."""
        return {
            "Weather": {
                "OpenWeatherApiKey": self.weather.api_key,
                "Latitude": self.weather.lat,
                "Longitude": self.weather.lon,
                "RefreshMinutes": self.weather.refresh_minutes,
                "RequestTimeout": self.weather.request_timeout,
            },
            "Logging": {
                "LogToFile": self.log.log_to_file,
                "LogToConsole": self.log.log_to_console,
                "FilePath": str(self.log.file_path),
                "Level": self.log.level,
            },
        }
