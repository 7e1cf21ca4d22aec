from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Protocol

from stopwatch.core.notifications import NotificationScheduler, background_message, dispatch
from stopwatch.core.timer import StopwatchTimer


logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND_DELAY_MS = 1000


class LifecycleState(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    BACKGROUND = "background"

    @property
    def is_foreground(self) -> bool:
        return self is LifecycleState.ACTIVE


def parse_state(value: Any) -> LifecycleState | None:
    if isinstance(value, LifecycleState):
        return value
    try:
        return LifecycleState(value)
    except ValueError:
        return None


class LifecycleChannel(Protocol):
    def connect(self, slot: Callable[[Any], None]) -> Any: ...

    def disconnect(self, slot: Callable[[Any], None]) -> Any: ...


class LifecycleMonitor:
    """Watches host foreground/background transitions.

    Leaving ``active`` for either non-active state fires the background
    callbacks once; moving between ``inactive`` and ``background`` does not
    count as a new backgrounding. Returning to ``active`` only notifies
    foreground listeners; the clock is left as it is.
    """

    def __init__(
        self,
        timer: StopwatchTimer,
        channel: LifecycleChannel,
        notifier: NotificationScheduler | None = None,
        background_delay_ms: int = DEFAULT_BACKGROUND_DELAY_MS,
        initial_state: LifecycleState = LifecycleState.ACTIVE,
    ) -> None:
        self._timer = timer
        self._channel = channel
        self._notifier = notifier
        self._background_delay_ms = background_delay_ms
        self._state = initial_state
        self._background_listeners: list[Callable[[int], None]] = []
        self._foreground_listeners: list[Callable[[], None]] = []
        self._channel.connect(self.handle_transition)
        self._subscribed = True

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def subscribed(self) -> bool:
        return self._subscribed

    def add_background_listener(self, listener: Callable[[int], None]) -> None:
        self._background_listeners.append(listener)

    def add_foreground_listener(self, listener: Callable[[], None]) -> None:
        self._foreground_listeners.append(listener)

    def handle_transition(self, value: Any) -> None:
        next_state = parse_state(value)
        if next_state is None:
            logger.debug("Ignoring unknown lifecycle state %r", value)
            return
        previous = self._state
        self._state = next_state
        if previous.is_foreground and not next_state.is_foreground:
            self._on_backgrounded(self._timer.current_elapsed_ms())
        elif not previous.is_foreground and next_state.is_foreground:
            self._on_foregrounded()

    def close(self) -> None:
        if not self._subscribed:
            return
        self._channel.disconnect(self.handle_transition)
        self._subscribed = False

    def __enter__(self) -> LifecycleMonitor:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def _on_backgrounded(self, elapsed_ms: int) -> None:
        logger.info("App backgrounded at %d ms", elapsed_ms)
        dispatch(self._notifier, background_message(elapsed_ms), self._background_delay_ms)
        for listener in self._background_listeners:
            listener(elapsed_ms)

    def _on_foregrounded(self) -> None:
        logger.info("App foregrounded")
        for listener in self._foreground_listeners:
            listener()
