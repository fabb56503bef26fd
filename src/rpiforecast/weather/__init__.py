"""Weather package - holds the poller, decoder, collection and custom errors."""

from .collection import ForecastCollection
from .decoder import decode_forecast
from .errors import (
    DecodeError,
    DecodeErrorReason,
    HttpStatusError,
    NetworkError,
    WeatherAPIError,
)
from .fetcher import API_URL, PollingFetcher
from .models import ForecastRecord, ForecastRole

# Define what gets imported with: from rpiforecast.weather import *
__all__ = [
    "API_URL",
    "DecodeError",
    "DecodeErrorReason",
    "ForecastCollection",
    "ForecastRecord",
    "ForecastRole",
    "HttpStatusError",
    "NetworkError",
    "PollingFetcher",
    "WeatherAPIError",
    "decode_forecast",
]
