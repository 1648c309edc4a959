from __future__ import annotations

import time
from typing import Callable

STOPWATCH_METRICS: tuple[str, ...] = (
    "dash_60",
    "dash_30",
    "home_to_2b",
    "steal_2b",
    "pop_2b",
    "pop_3b",
)


def format_split(seconds: float) -> str:
    return f"{seconds:.3f}"


class RaceStopwatch:
    """One clock for a group start; each press after the start records the next finisher."""

    def __init__(self, max_athletes: int = 5, clock: Callable[[], float] = time.perf_counter) -> None:
        if max_athletes < 1:
            raise ValueError("max_athletes must be at least 1")
        self.max_athletes = max_athletes
        self._clock = clock
        self._started_at: float | None = None
        self._stopped_at: float | None = None
        self.splits: list[float] = []

    @property
    def running(self) -> bool:
        return self._started_at is not None and self._stopped_at is None

    @property
    def finished(self) -> bool:
        return len(self.splits) >= self.max_athletes

    def press(self) -> float | None:
        if self.finished:
            return None
        if self._started_at is None:
            self._started_at = self._clock()
            return None

        split = self._clock() - self._started_at
        self.splits.append(split)
        if self.finished:
            self._stopped_at = self._started_at + split
        return split

    def elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        return end - self._started_at

    def reset(self) -> None:
        self._started_at = None
        self._stopped_at = None
        self.splits = []
