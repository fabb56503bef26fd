"""Callback-based notifications used between the pipeline and its observers."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, Final

logger: Final = logging.getLogger(__name__)

Handler = Callable[..., Any]


class Signal:
    """A named list of callbacks invoked synchronously on ``emit``.

    Handlers run in connection order on the emitting thread. A handler that
    raises is logged and skipped so the remaining observers still hear about
    the event and the emitter never sees the exception.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: list[Handler] = []
        self._lock = threading.Lock()

    def connect(self, handler: Handler) -> Handler:
        """Register a handler.

        Returns the handler so this can be used as a decorator.
        """
        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)
        return handler

    def disconnect(self, handler: Handler) -> bool:
        """Remove a handler. Returns False if it was not connected."""
        with self._lock:
            try:
                self._handlers.remove(handler)
            except ValueError:
                return False
        return True

    def emit(self, *args: Any) -> None:
        with self._lock:
            handlers = list(self._handlers)

        for handler in handlers:
            try:
                handler(*args)
            except Exception as exc:
                logger.exception("Handler %r for signal '%s' failed: %s", handler, self.name, exc)

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"Signal({self.name!r}, handlers={len(self._handlers)})"
