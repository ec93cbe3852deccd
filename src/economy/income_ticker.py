"""Background thread that pays passive income on a fixed cadence."""

import logging
import threading
from typing import Optional

from src.economy.game_session import GameSession

logger = logging.getLogger(__name__)


class PassiveIncomeTicker:
    """Calls ``session.tick()`` every ``interval`` seconds until stopped.

    Each tick credits ``total_cps * interval``; a tick with an empty (or
    zero-CPS) inventory does nothing.
    """

    def __init__(self, session: GameSession, interval: Optional[float] = None):
        self.session = session
        self.interval = (
            interval if interval is not None else session.config.tick_interval_seconds
        )
        if self.interval <= 0:
            raise ValueError(f"Tick interval must be positive: {self.interval}")
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run,
            name=f"income-ticker-{self.session.state.player_id[:8]}",
            daemon=True,
        )
        self._thread.start()
        logger.info(
            "Passive income ticker started for %s (every %.2fs)",
            self.session.state.player_name, self.interval,
        )

    def stop(self, timeout: Optional[float] = None):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            # a thread still alive after a timed-out join keeps the slot,
            # so start() cannot run a second ticker beside it
            if self._thread.is_alive():
                logger.warning(
                    "Passive income ticker for %s did not stop within %ss",
                    self.session.state.player_name, timeout,
                )
                return
            self._thread = None
        logger.info(
            "Passive income ticker stopped for %s after %d ticks",
            self.session.state.player_name, self.ticks,
        )

    def _run(self):
        # wait() returns True once stop() is called
        while not self._stop.wait(self.interval):
            self.session.tick(self.interval)
            self.ticks += 1

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
