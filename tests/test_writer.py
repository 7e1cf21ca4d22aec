import threading

from stopwatch.data.storage import PersistedSnapshot, PersistenceError, StateStore
from stopwatch.data.writer import SnapshotWriter


class SlowStore:
    """Blocks the first save until released."""

    def __init__(self) -> None:
        self.saved: list[PersistedSnapshot] = []
        self.started = threading.Event()
        self.release = threading.Event()

    def save(self, snapshot: PersistedSnapshot) -> None:
        self.started.set()
        self.release.wait(5)
        self.saved.append(snapshot)


class FailingStore:
    def save(self, snapshot: PersistedSnapshot) -> None:
        raise PersistenceError("disk full")


class CrashingStore:
    def __init__(self) -> None:
        self.calls = 0

    def save(self, snapshot: PersistedSnapshot) -> None:
        self.calls += 1
        if self.calls == 1:
            raise ValueError("boom")


def _snap(ms: int) -> PersistedSnapshot:
    return PersistedSnapshot(running=False, elapsed_ms=ms)


def test_writes_land_in_store(tmp_path) -> None:
    store = StateStore(tmp_path / "stopwatch.db")
    store.init_db()
    writer = SnapshotWriter(store)

    writer.submit(_snap(100))
    assert writer.flush(5) is True
    writer.close()

    assert store.restore() == _snap(100)
    assert writer.last_error is None


def test_superseded_pending_write_is_dropped() -> None:
    store = SlowStore()
    writer = SnapshotWriter(store)

    writer.submit(_snap(1))
    assert store.started.wait(5)
    writer.submit(_snap(2))
    writer.submit(_snap(3))
    store.release.set()
    writer.close()

    assert store.saved == [_snap(1), _snap(3)]


def test_failed_write_is_recorded() -> None:
    writer = SnapshotWriter(FailingStore())

    writer.submit(_snap(1))
    writer.flush(5)

    assert isinstance(writer.last_error, PersistenceError)
    writer.close()


def test_submit_after_close_raises() -> None:
    writer = SnapshotWriter(SlowStore())
    writer.close()
    try:
        writer.submit(_snap(1))
        assert False, "Expected RuntimeError after close"
    except RuntimeError:
        pass


def test_unexpected_error_keeps_writer_alive() -> None:
    store = CrashingStore()
    writer = SnapshotWriter(store)

    writer.submit(_snap(1))
    assert writer.flush(5) is True
    assert isinstance(writer.last_error, ValueError)

    writer.submit(_snap(2))
    assert writer.flush(5) is True
    assert writer.last_error is None
    assert store.calls == 2
    writer.close()
