# filepath: src/rpiforecast/controller.py
"""Core controller wiring the forecast pipeline together."""

from __future__ import annotations

import logging
import threading
from datetime import timedelta
from pathlib import Path
from typing import Final

import requests

from rpiforecast.common.enums import FailureKind
from rpiforecast.display.console import ConsoleForecastView
from rpiforecast.display.protocols import ForecastView
from rpiforecast.logging_setup import configure_logging
from rpiforecast.settings.user import UserSettings
from rpiforecast.weather.collection import ForecastCollection
from rpiforecast.weather.fetcher import Dispatcher, PollingFetcher

logger: Final = logging.getLogger(__name__)


class ForecastDisplay:
    """Main controller for the forecast display application.

    Owns the pieces of the polling pipeline and connects them:
    - Loading configuration and setting up logging
    - Creating the forecast collection and the poller
    - Forwarding ``updated`` / ``failed`` to the view
    - Running a single cycle or polling until shut down

    All dependencies can be injected, which is how the tests drive it.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        view: ForecastView | None = None,
        settings: UserSettings | None = None,
        session: requests.Session | None = None,
        dispatch: Dispatcher | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize the forecast display controller.

        Args:
            config_path: Path to config.yaml, default search if None
            view: Presentation of the forecast, console output if None
            settings: Preloaded settings, skips reading config_path
            session: Optional HTTP session for the poller
            dispatch: Optional request dispatcher for the poller
            debug: Enable debug logging
        """
        # Console logging until the configured destinations are known
        configure_logging(debug=debug)
        self.settings = settings or UserSettings.load(config_path)
        configure_logging(self.settings.log, debug)

        self.collection = ForecastCollection()
        self.fetcher = PollingFetcher(
            self.collection, self.settings.weather, session=session, dispatch=dispatch
        )
        self.view: ForecastView = view or ConsoleForecastView()

        self.error_streak = 0
        self.last_cycle_ok: bool | None = None
        self._cycle_done = threading.Event()
        self._shutdown = threading.Event()

        self.fetcher.updated.connect(self._on_updated)
        self.fetcher.failed.connect(self._on_failed)

    def _on_updated(self) -> None:
        self.error_streak = 0
        self.last_cycle_ok = True
        self.view.show_forecast(self.collection)
        self._cycle_done.set()

    def _on_failed(self, kind: FailureKind, message: str) -> None:
        self.error_streak += 1
        self.last_cycle_ok = False
        if self.error_streak > 1:
            logger.warning("%d consecutive failed forecast updates", self.error_streak)
        self.view.show_error(kind, message)
        self._cycle_done.set()

    def run_once(self, timeout: float | None = None) -> bool:
        """Run one poll cycle and wait for its outcome.

        Args:
            timeout: Seconds to wait, request timeout plus a margin if None

        Returns:
            True if the forecast was updated, False on failure or timeout
        """
        self._cycle_done.clear()
        self.last_cycle_ok = None
        self.fetcher.tick()

        wait = timeout if timeout is not None else self.fetcher.timeout + 5
        if not self._cycle_done.wait(wait):
            logger.error("No forecast reply within %.0f s", wait)
            return False
        return bool(self.last_cycle_ok)

    def run(self, interval: timedelta | float | None = None) -> None:
        """Poll until ``shutdown`` is called or the process is interrupted."""
        self._shutdown.clear()
        self.fetcher.start(interval)
        try:
            self._shutdown.wait()
        finally:
            self.fetcher.stop(cancel_pending=True)

    def shutdown(self) -> None:
        self._shutdown.set()
