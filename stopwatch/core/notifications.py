from __future__ import annotations

"""Notification requests built by the core and handed to a scheduler."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from stopwatch.core.formatting import format_time


logger = logging.getLogger(__name__)

IMMEDIATE = 0
BACKGROUND_TITLE = "Stopwatch in background"
LAP_TITLE = "Lap recorded"


@dataclass(frozen=True)
class NotificationMessage:
    title: str
    body: str
    data: dict[str, str] = field(default_factory=dict)


class NotificationScheduler(Protocol):
    def schedule(self, message: NotificationMessage, delay_ms: int = IMMEDIATE) -> None:
        """Deliver `message` after `delay_ms`; 0 means right away."""


@dataclass(frozen=True)
class ScheduledNotification:
    message: NotificationMessage
    delay_ms: int


class RecordingScheduler:
    """Keeps every request in memory instead of showing it."""

    def __init__(self) -> None:
        self.requests: list[ScheduledNotification] = []

    def schedule(self, message: NotificationMessage, delay_ms: int = IMMEDIATE) -> None:
        self.requests.append(ScheduledNotification(message=message, delay_ms=delay_ms))


def background_message(elapsed_ms: int) -> NotificationMessage:
    formatted = format_time(elapsed_ms)
    return NotificationMessage(
        title=BACKGROUND_TITLE,
        body=f"Current time: {formatted}",
        data={"time": formatted},
    )


def lap_message(duration_ms: int) -> NotificationMessage:
    return NotificationMessage(title=LAP_TITLE, body=f"Lap time: {format_time(duration_ms)}")


def dispatch(scheduler: NotificationScheduler | None, message: NotificationMessage, delay_ms: int = IMMEDIATE) -> bool:
    """Best-effort delivery: scheduler errors are logged, never raised."""
    if scheduler is None:
        return False
    try:
        scheduler.schedule(message, max(0, int(delay_ms)))
    except Exception:
        logger.exception("Failed to schedule notification %r", message.title)
        return False
    return True
