"""Timer-driven OpenWeather forecast poller."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import timedelta
from functools import partial
from typing import Final
from urllib.parse import urlencode

import requests

from rpiforecast.common.enums import FetchState
from rpiforecast.common.events import Signal
from rpiforecast.scheduling import IntervalTimer, to_interval
from rpiforecast.settings.user import WeatherSettings
from rpiforecast.weather.collection import ForecastCollection
from rpiforecast.weather.decoder import decode_forecast
from rpiforecast.weather.errors import (
    HTTP_ERROR_MAP,
    DecodeError,
    DecodeErrorReason,
    HttpStatusError,
    NetworkError,
    WeatherAPIError,
)
from rpiforecast.weather.models import ForecastRecord

logger: Final = logging.getLogger(__name__)

# API endpoint
API_URL: Final = "https://api.openweathermap.org/data/2.5/forecast"

Job = Callable[[], None]
Dispatcher = Callable[[Job], None]


def thread_dispatcher(job: Job) -> None:
    """Run a request job on its own daemon thread."""
    threading.Thread(target=job, name="forecast-request", daemon=True).start()


class PollingFetcher:
    """Polls the OpenWeather forecast API and feeds a ForecastCollection.

    Every tick issues one GET for the configured location. At most one
    request is current at a time: a tick that fires while a request is
    still outstanding supersedes it, and the stale reply is dropped on
    arrival by comparing its generation number with the current one.

    A cycle ends in exactly one notification. On success the collection is
    replaced and ``updated`` fires; otherwise ``failed(kind, message)`` fires
    and the collection is left as it was. Failed cycles are not retried;
    the next tick simply tries again.

    Signals:
        updated: no arguments, read the collection for the new batch
        failed(FailureKind, str): the cycle ended without an update
    """

    def __init__(
        self,
        collection: ForecastCollection,
        settings: WeatherSettings,
        session: requests.Session | None = None,
        dispatch: Dispatcher | None = None,
    ) -> None:
        """Initialize the poller.

        Args:
            collection: Sink replaced on every successful cycle
            settings: Location, API key, interval and timeout
            session: HTTP session, a new one if omitted
            dispatch: Runs request jobs; defaults to one thread per request
        """
        self.collection = collection
        self.session = session or requests.Session()
        self.timeout = settings.request_timeout
        self.interval = settings.refresh_interval

        self._latitude = settings.lat
        self._longitude = settings.lon
        self._api_key = settings.api_key

        self._dispatch = dispatch or thread_dispatcher
        self._timer = IntervalTimer(self._on_timer, name="forecast-poll")
        self._lock = threading.RLock()
        self._generation = 0
        self._pending: int | None = None
        self._last_error: WeatherAPIError | None = None
        self._api_url = ""

        self.updated = Signal("updated")
        self.failed = Signal("failed")

    # ---- state ----
    @property
    def state(self) -> FetchState:
        with self._lock:
            return FetchState.IDLE if self._pending is None else FetchState.AWAITING_RESPONSE

    @property
    def last_error(self) -> WeatherAPIError | None:
        """Error of the most recent completed cycle, None after a success."""
        with self._lock:
            return self._last_error

    @property
    def api_url(self) -> str:
        """URL of the most recently issued request."""
        with self._lock:
            return self._api_url

    @property
    def is_running(self) -> bool:
        return self._timer.is_active

    # ---- control ----
    def configure(self, latitude: float, longitude: float, api_key: str) -> None:
        """Set the target location and credential.

        Takes effect on the next tick; an outstanding request keeps the
        values it was built with.
        """
        with self._lock:
            self._latitude = latitude
            self._longitude = longitude
            self._api_key = api_key
        logger.info("Forecast location set to %.4f, %.4f", latitude, longitude)

    def build_url(self) -> str:
        """Build the forecast request URL from the current configuration."""
        with self._lock:
            params = {
                "lat": self._latitude,
                "lon": self._longitude,
                "appid": self._api_key,
                "units": "metric",
            }
        return f"{API_URL}?{urlencode(params)}"

    def start(self, interval: timedelta | float | None = None) -> None:
        """Poll now and then once every ``interval``.

        Restarts the timer if already running; an outstanding request is
        not affected.

        Args:
            interval: timedelta or seconds, the configured interval if None
        """
        if interval is not None:
            self.interval = to_interval(interval)
        logger.info("Polling forecast every %s", self.interval)
        self._timer.start(self.interval)

    def stop(self, cancel_pending: bool = False) -> None:
        """Stop polling.

        Args:
            cancel_pending: Also abandon the outstanding request so its
                reply is discarded. By default it completes normally.
        """
        self._timer.stop()
        if cancel_pending:
            with self._lock:
                if self._pending is not None:
                    logger.info("Abandoning request #%d", self._pending)
                self._pending = None
        logger.info("Forecast polling stopped")

    def tick(self) -> int:
        """Run one poll cycle.

        Returns:
            Generation number of the request that was issued
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            if self._pending is not None:
                logger.info("Request #%d superseded by #%d", self._pending, generation)
            self._pending = generation
            if not self._api_key:
                logger.warning("No OpenWeather API key configured")
            url = self.build_url()
            self._api_url = url

        logger.debug("Issuing forecast request #%d", generation)
        self._dispatch(partial(self._perform_request, generation, url))
        return generation

    def _on_timer(self) -> None:
        # A stop() that won the lock while this tick waited for it cancels the tick
        with self._lock:
            if not self._timer.is_active:
                logger.debug("Timer tick after stop ignored")
                return
            self.tick()

    # ---- request / reply ----
    def _perform_request(self, generation: int, url: str) -> None:
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            self._complete(generation, error=NetworkError(f"Network error: {exc}", exc))
            return
        self._complete(generation, response=response)

    def _complete(
        self,
        generation: int,
        response: requests.Response | None = None,
        error: WeatherAPIError | None = None,
    ) -> None:
        with self._lock:
            if generation != self._pending:
                logger.debug("Discarding reply of abandoned request #%d", generation)
                return
            self._pending = None

            records: list[ForecastRecord] = []
            if error is None:
                try:
                    records = self._records_from(response)
                except WeatherAPIError as err:
                    error = err
                except Exception as exc:
                    logger.exception("Unexpected error decoding reply of request #%d", generation)
                    error = DecodeError(
                        DecodeErrorReason.MALFORMED, f"Unusable forecast response: {exc}", exc
                    )

            if error is not None:
                self._last_error = error
                logger.warning(
                    "Forecast request #%d failed (%s): %s", generation, error.kind.value, error.message
                )
                self.failed.emit(error.kind, error.message)
                return

            self.collection.replace(records)
            self._last_error = None
            logger.info("Forecast updated with %d records", len(records))
            self.updated.emit()

    def _records_from(self, response: requests.Response | None) -> list[ForecastRecord]:
        if response is None:
            raise NetworkError("No response received")
        if response.status_code != 200:
            raise HttpStatusError.from_status(response.status_code, _error_message(response))
        return decode_forecast(response.content)


def _error_message(response: requests.Response) -> str:
    """Pick the most useful message out of a non-200 response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])

    if response.status_code in HTTP_ERROR_MAP:
        return HTTP_ERROR_MAP[response.status_code]

    reason = getattr(response, "reason", None)
    if isinstance(reason, str) and reason:
        return reason
    text = getattr(response, "text", None)
    return text[:200] if isinstance(text, str) else ""
