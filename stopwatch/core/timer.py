from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable


logger = logging.getLogger(__name__)

Clock = Callable[[], int]


def monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


@dataclass(frozen=True)
class TimerState:
    running: bool
    elapsed_ms: int


class StopwatchTimer:
    """Anchor-based stopwatch engine detached from UI framework.

    Elapsed time is derived as ``now - anchor`` on every read instead of
    summing tick deltas, so a descheduled process does not lose time.
    """

    def __init__(self, clock: Clock = monotonic_ms) -> None:
        self._clock = clock
        self._running = False
        self._elapsed_ms = 0
        self._anchor_ms: int | None = None
        self._reset_listeners: list[Callable[[], None]] = []

    @property
    def running(self) -> bool:
        return self._running

    def add_reset_listener(self, listener: Callable[[], None]) -> None:
        self._reset_listeners.append(listener)

    def start(self) -> bool:
        if self._running:
            return False
        self._anchor_ms = self._clock() - self._elapsed_ms
        self._running = True
        logger.debug("Timer started at %d ms", self._elapsed_ms)
        return True

    def stop(self) -> bool:
        if not self._running:
            return False
        self._elapsed_ms = self.current_elapsed_ms()
        self._anchor_ms = None
        self._running = False
        logger.debug("Timer stopped at %d ms", self._elapsed_ms)
        return True

    def toggle(self) -> bool:
        if self._running:
            self.stop()
        else:
            self.start()
        return self._running

    def current_elapsed_ms(self) -> int:
        if not self._running or self._anchor_ms is None:
            return self._elapsed_ms
        # never report less than what was frozen at the last start
        return max(self._elapsed_ms, self._clock() - self._anchor_ms)

    def reset(self) -> bool:
        if self._running:
            logger.debug("Reset rejected: timer is running")
            return False
        self._elapsed_ms = 0
        self._anchor_ms = None
        for listener in self._reset_listeners:
            listener()
        return True

    def restore(self, state: TimerState) -> None:
        self._elapsed_ms = max(0, int(state.elapsed_ms))
        self._running = bool(state.running)
        self._anchor_ms = self._clock() - self._elapsed_ms if self._running else None

    def state(self) -> TimerState:
        return TimerState(running=self._running, elapsed_ms=self.current_elapsed_ms())
