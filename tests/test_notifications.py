from stopwatch.core.notifications import (
    BACKGROUND_TITLE,
    RecordingScheduler,
    background_message,
    dispatch,
    lap_message,
)


class BrokenScheduler:
    def schedule(self, message, delay_ms=0) -> None:
        raise RuntimeError("tray is gone")


def test_background_message_carries_formatted_time() -> None:
    message = background_message(110000)

    assert message.title == BACKGROUND_TITLE
    assert message.body == "Current time: 01:50:00"
    assert message.data == {"time": "01:50:00"}


def test_lap_message_has_no_data() -> None:
    message = lap_message(700)

    assert message.body == "Lap time: 00:00:70"
    assert message.data == {}


def test_dispatch_records_request() -> None:
    scheduler = RecordingScheduler()

    assert dispatch(scheduler, lap_message(10), 250) is True
    assert scheduler.requests[0].delay_ms == 250


def test_dispatch_swallows_scheduler_failure(caplog) -> None:
    assert dispatch(BrokenScheduler(), lap_message(10)) is False
    assert "Failed to schedule notification" in caplog.text


def test_dispatch_without_scheduler() -> None:
    assert dispatch(None, lap_message(10)) is False
