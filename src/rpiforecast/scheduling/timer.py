"""Interval timer driving the polling cycle."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import timedelta
from typing import Final

from rpiforecast.scheduling.models import to_interval

logger: Final = logging.getLogger(__name__)


class IntervalTimer:
    """Calls a function immediately and then once every interval.

    Each ``start`` spawns a fresh daemon thread with its own stop event.
    Once a run is stopped or replaced it schedules no further ticks; a
    callback already executing is allowed to finish.
    """

    def __init__(self, callback: Callable[[], None], name: str = "poll-timer") -> None:
        self.callback = callback
        self.name = name
        self.interval: timedelta | None = None
        self._stop_event: threading.Event | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def is_active(self) -> bool:
        with self._lock:
            return self._stop_event is not None and not self._stop_event.is_set()

    def start(self, interval: timedelta | float) -> None:
        """Start ticking, restarting if already active.

        Args:
            interval: Time between ticks, as timedelta or seconds
        """
        interval = to_interval(interval)
        with self._lock:
            if self._stop_event is not None:
                self._stop_event.set()
            stop_event = threading.Event()
            self._stop_event = stop_event
            self.interval = interval
            self._thread = threading.Thread(
                target=self._run,
                args=(stop_event, interval.total_seconds()),
                name=self.name,
                daemon=True,
            )
            self._thread.start()
        logger.debug("Timer '%s' started, interval %s", self.name, interval)

    def stop(self) -> None:
        """Stop ticking. Safe to call when not active."""
        with self._lock:
            if self._stop_event is None:
                return
            self._stop_event.set()
            self._stop_event = None
            thread, self._thread = self._thread, None

        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)
        logger.debug("Timer '%s' stopped", self.name)

    def _run(self, stop_event: threading.Event, seconds: float) -> None:
        while not stop_event.is_set():
            try:
                self.callback()
            except Exception as exc:
                logger.exception("Timer '%s' callback failed: %s", self.name, exc)
            if stop_event.wait(seconds):
                break
