import pytest

from stopwatch.core.notifications import RecordingScheduler
from stopwatch.core.session import StopwatchSession
from stopwatch.data.storage import STATE_KEY, PersistedSnapshot, StateStore


@pytest.fixture
def store(tmp_path) -> StateStore:
    store = StateStore(tmp_path / "stopwatch.db")
    store.init_db()
    return store


@pytest.fixture
def session(store, clock):
    session = StopwatchSession(store, notifier=RecordingScheduler(), clock=clock)
    yield session
    session.close()


def test_snapshot_reflects_timer_and_laps(session, clock) -> None:
    session.toggle()
    clock.advance(1500)
    session.record_lap()
    clock.advance(700)
    session.record_lap()
    clock.advance(300)

    assert session.snapshot() == PersistedSnapshot(
        running=True,
        elapsed_ms=2500,
        laps=(1500, 700),
        last_lap_mark_ms=2200,
    )


def test_save_now_then_restore_in_new_session(session, store, clock) -> None:
    session.start()
    clock.advance(1000)
    session.record_lap()
    clock.advance(2500)
    session.record_lap()
    session.stop()
    assert session.save_now() is True

    restored = StopwatchSession(store, clock=clock)
    try:
        assert restored.restore() is True
        assert restored.snapshot() == PersistedSnapshot(
            running=False,
            elapsed_ms=3500,
            laps=(1000, 2500),
            last_lap_mark_ms=3500,
        )
        assert [lap.index for lap in restored.laps.laps] == [1, 2]
    finally:
        restored.close()


def test_restored_running_session_keeps_counting(session, store, clock) -> None:
    session.start()
    clock.advance(4000)
    session.save_now()

    restored = StopwatchSession(store, clock=clock)
    try:
        restored.restore()
        clock.advance(1000)
        assert restored.running is True
        assert restored.elapsed_ms() == 5000
    finally:
        restored.close()


def test_restore_with_nothing_saved_is_zeroed(session) -> None:
    assert session.restore() is False
    assert session.snapshot() == PersistedSnapshot(running=False, elapsed_ms=0)


def test_restore_of_corrupt_data_falls_back_to_zero(session, store, caplog) -> None:
    with store._transaction() as conn:  # noqa: SLF001
        conn.execute("INSERT INTO settings(key, value) VALUES(?, ?)", (STATE_KEY, "garbage"))

    assert session.restore() is False
    assert session.snapshot() == PersistedSnapshot(running=False, elapsed_ms=0)
    assert "Could not restore stopwatch state" in caplog.text


def test_save_now_reports_failure(tmp_path, clock) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    session = StopwatchSession(StateStore(blocker / "stopwatch.db"), clock=clock)
    try:
        assert session.save_now() is False
    finally:
        session.close()


def test_reset_guard(session, clock) -> None:
    session.start()
    clock.advance(900)
    session.record_lap()

    assert session.reset() is False
    assert session.elapsed_ms() == 900

    session.stop()
    assert session.reset() is True
    assert session.snapshot() == PersistedSnapshot(running=False, elapsed_ms=0)


def test_backgrounding_saves_and_notifies(session, store, clock, channel) -> None:
    monitor = session.attach_lifecycle(channel)
    session.start()
    clock.advance(110000)

    channel.emit("background")
    session.save_now()

    assert store.restore() == PersistedSnapshot(running=True, elapsed_ms=110000)
    bodies = [request.message.body for request in session.notifier.requests]
    assert bodies == ["Current time: 01:50:00"]
    monitor.close()
    assert channel.slots == []
