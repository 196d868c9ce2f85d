"""Shared fakes: a manual clock and a scripted receiver stream."""

from __future__ import annotations

import pytest

from denon_tuner.session import Session


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class StubStream:
    """Answers each write with the next scripted reply.

    ``None`` in the script means the device stays silent. Waiting on a
    silent stream advances the fake clock by the full timeout.
    """

    def __init__(self, clock: FakeClock, replies=(), pending: bytes = b"") -> None:
        self.clock = clock
        self.replies = list(replies)
        self.pending = pending
        self.writes: list[tuple[float, bytes]] = []
        self.connected = True

    def open(self) -> None:
        self.connected = True

    def close(self) -> None:
        self.connected = False

    def write(self, data: bytes) -> int:
        self.writes.append((self.clock(), data))
        reply = self.replies.pop(0) if self.replies else None
        if reply is not None:
            self.pending += reply
        return len(data)

    def wait_readable(self, timeout: float) -> bool:
        if self.pending:
            return True
        self.clock.now += timeout
        return False

    def read(self, size: int = 1024) -> bytes:
        chunk, self.pending = self.pending[:size], self.pending[size:]
        return chunk

    @property
    def lines(self) -> list[bytes]:
        return [data for _, data in self.writes]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_session(clock):
    def factory(replies=(), pending: bytes = b""):
        stream = StubStream(clock, replies, pending)
        return Session(stream, clock=clock, sleep=clock.sleep), stream

    return factory
