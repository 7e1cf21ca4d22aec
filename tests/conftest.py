from __future__ import annotations

import pytest


class FakeClock:
    def __init__(self, now_ms: int = 0) -> None:
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


class FakeChannel:
    def __init__(self) -> None:
        self.slots: list = []

    def connect(self, slot) -> None:
        self.slots.append(slot)

    def disconnect(self, slot) -> None:
        self.slots.remove(slot)

    def emit(self, value) -> None:
        for slot in list(self.slots):
            slot(value)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(10_000)


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()
