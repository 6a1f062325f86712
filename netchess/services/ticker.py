"""Background thread that drives the turn clock."""

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)

TickFn = Callable[[], bool]


class ClockTicker(threading.Thread):
    """
    Calls `on_tick` once per `period` seconds until it returns False (clock stopped / game over)
    or until `stop()` is called.
    """

    def __init__(self, on_tick: TickFn, period: float = 1.0) -> None:
        super().__init__(name="netchess-clock", daemon=True)
        self._on_tick = on_tick
        self._period = period
        self._stop_event = threading.Event()

    def run(self) -> None:
        while not self._stop_event.wait(self._period):
            if not self._on_tick():
                logger.debug("Clock stopped, ticker exits")
                return

    def stop(self) -> None:
        self._stop_event.set()
