"""Common utility functions and helpers for the rpiforecast package."""

from rpiforecast.utils.file import ensure_directory_exists
from rpiforecast.utils.formatting import (
    format_percentage,
    format_temperature,
    format_volume,
    format_wind_speed,
)
from rpiforecast.utils.time import TimeUtils

__all__ = [
    "TimeUtils",
    "ensure_directory_exists",
    "format_percentage",
    "format_temperature",
    "format_volume",
    "format_wind_speed",
]
