"""Elapsed time logging."""
import logging
import time
from typing import Optional

logger = logging.getLogger(__name__)


class Stopwatch:
    """Measures the time between laps of a run."""

    def __init__(self, clock=time.perf_counter):
        self._clock = clock
        self._started: Optional[float] = None

    def start(self) -> "Stopwatch":
        self._started = self._clock()
        return self

    @property
    def elapsed_ms(self) -> int:
        if self._started is None:
            return 0
        return int((self._clock() - self._started) * 1000)

    def lap(self, label: str) -> int:
        """Log the time since the last lap and restart the watch."""
        elapsed = self.elapsed_ms
        logger.debug(f"Took {elapsed}ms - {label}")
        self.start()
        return elapsed
