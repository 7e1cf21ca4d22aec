from __future__ import annotations

import logging

from stopwatch.core.laps import Lap, LapRecorder
from stopwatch.core.lifecycle import DEFAULT_BACKGROUND_DELAY_MS, LifecycleChannel, LifecycleMonitor
from stopwatch.core.notifications import NotificationScheduler
from stopwatch.core.timer import Clock, StopwatchTimer, TimerState, monotonic_ms
from stopwatch.data.storage import PersistedSnapshot, PersistenceError, StateStore
from stopwatch.data.writer import SnapshotWriter


logger = logging.getLogger(__name__)


class StopwatchSession:
    """Wires the timer, laps and persistence together for a host UI."""

    def __init__(
        self,
        store: StateStore,
        notifier: NotificationScheduler | None = None,
        clock: Clock = monotonic_ms,
        background_delay_ms: int = DEFAULT_BACKGROUND_DELAY_MS,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.background_delay_ms = background_delay_ms
        self.timer = StopwatchTimer(clock)
        self.laps = LapRecorder(self.timer, notifier)
        self._writer = SnapshotWriter(store)

    @property
    def running(self) -> bool:
        return self.timer.running

    def elapsed_ms(self) -> int:
        return self.timer.current_elapsed_ms()

    def start(self) -> bool:
        return self.timer.start()

    def stop(self) -> bool:
        return self.timer.stop()

    def toggle(self) -> bool:
        return self.timer.toggle()

    def record_lap(self) -> Lap | None:
        return self.laps.record_lap()

    def reset(self) -> bool:
        return self.timer.reset()

    def snapshot(self) -> PersistedSnapshot:
        state = self.timer.state()
        return PersistedSnapshot(
            running=state.running,
            elapsed_ms=state.elapsed_ms,
            laps=tuple(self.laps.durations()),
            last_lap_mark_ms=self.laps.last_lap_mark_ms,
        )

    def restore(self) -> bool:
        """Loads the saved snapshot; falls back to a zeroed stopwatch on any error."""
        try:
            snapshot = self.store.restore()
        except PersistenceError as exc:
            logger.warning("Could not restore stopwatch state, starting from zero: %s", exc)
            snapshot = None
        if snapshot is None:
            self.timer.restore(TimerState(running=False, elapsed_ms=0))
            self.laps.restore([], 0)
            return False
        self.timer.restore(TimerState(running=snapshot.running, elapsed_ms=snapshot.elapsed_ms))
        self.laps.restore(snapshot.laps, snapshot.last_lap_mark_ms)
        logger.info("Restored stopwatch at %d ms with %d laps", snapshot.elapsed_ms, len(snapshot.laps))
        return True

    def save(self) -> None:
        self._writer.submit(self.snapshot())

    def save_now(self) -> bool:
        self.save()
        self._writer.flush()
        return self._writer.last_error is None

    def attach_lifecycle(self, channel: LifecycleChannel) -> LifecycleMonitor:
        monitor = LifecycleMonitor(
            self.timer,
            channel,
            notifier=self.notifier,
            background_delay_ms=self.background_delay_ms,
        )
        monitor.add_background_listener(lambda _elapsed_ms: self.save())
        return monitor

    def close(self) -> None:
        self._writer.close()
