"""Named events delivered to whatever presentation layer is listening."""

from __future__ import annotations

import threading
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from audio_track_switcher.config import DEFAULT_PROGRESS_EVENT

PROGRESS_EVENT = DEFAULT_PROGRESS_EVENT

EventHandler = Callable[[Any], None]


class EventEmitter:
    """Minimal publish/subscribe hub keyed by event name."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)
        self._lock = threading.Lock()

    def listen(self, event: str, handler: EventHandler) -> Callable[[], None]:
        """Subscribe ``handler`` and return a callable that unsubscribes it."""

        with self._lock:
            self._handlers[event].append(handler)

        def _unlisten() -> None:
            with self._lock:
                handlers = self._handlers.get(event, [])
                if handler in handlers:
                    handlers.remove(handler)

        return _unlisten

    def emit(self, event: str, payload: Any) -> None:
        """Call every handler of ``event`` in subscription order.

        Handler exceptions propagate to the caller.
        """

        with self._lock:
            handlers = list(self._handlers.get(event, ()))
        for handler in handlers:
            handler(payload)

    def observer(self, event: str = PROGRESS_EVENT) -> EventHandler:
        """Bind ``event`` so the emitter can be used as a progress observer."""

        def _emit(payload: Any) -> None:
            self.emit(event, payload)

        return _emit
