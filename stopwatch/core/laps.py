from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from stopwatch.core.notifications import IMMEDIATE, NotificationScheduler, dispatch, lap_message
from stopwatch.core.timer import StopwatchTimer


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Lap:
    index: int
    duration_ms: int


class LapRecorder:
    """Append-only lap splits derived from the timer's elapsed value."""

    def __init__(self, timer: StopwatchTimer, notifier: NotificationScheduler | None = None) -> None:
        self._timer = timer
        self._notifier = notifier
        self._laps: list[Lap] = []
        self._last_lap_mark_ms = 0
        timer.add_reset_listener(self.reset)

    @property
    def laps(self) -> tuple[Lap, ...]:
        return tuple(self._laps)

    @property
    def last_lap_mark_ms(self) -> int:
        return self._last_lap_mark_ms

    def durations(self) -> list[int]:
        return [lap.duration_ms for lap in self._laps]

    def record_lap(self) -> Lap | None:
        if not self._timer.running:
            logger.debug("Lap rejected: timer is stopped")
            return None
        now_ms = self._timer.current_elapsed_ms()
        lap = Lap(index=len(self._laps) + 1, duration_ms=max(0, now_ms - self._last_lap_mark_ms))
        self._laps.append(lap)
        self._last_lap_mark_ms = now_ms
        dispatch(self._notifier, lap_message(lap.duration_ms), IMMEDIATE)
        return lap

    def reset(self) -> None:
        # Invoked through StopwatchTimer.reset() only.
        self._laps.clear()
        self._last_lap_mark_ms = 0

    def restore(self, durations: Iterable[int], last_lap_mark_ms: int) -> None:
        self._laps = [Lap(index=i, duration_ms=int(d)) for i, d in enumerate(durations, start=1)]
        self._last_lap_mark_ms = int(last_lap_mark_ms)
