import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("boggle")


class StageTimer:
    """Wall-clock timings for the stages of one unit of work.

    Used for the dictionary load at startup and the board solve when a game
    finishes. A stage entered more than once accumulates its time.
    """

    def __init__(self, label: str = ""):
        self.label = label
        self.timings: dict[str, float] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - t0) * 1000
            self.timings[name] = round(self.timings.get(name, 0.0) + elapsed_ms, 1)
            logger.debug("%s stage=%s elapsed=%.1fms", self.label or "timer", name, elapsed_ms)

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict[str, float]:
        """Per-stage milliseconds plus ``total`` since the timer was created."""
        return {**self.timings, "total": self.total_ms}

    def log_summary(self, level: int = logging.INFO) -> dict[str, float]:
        result = self.summary()
        stages = " ".join(f"{name}={ms:.1f}ms" for name, ms in result.items())
        logger.log(level, "%s timings %s", self.label or "timer", stages)
        return result
