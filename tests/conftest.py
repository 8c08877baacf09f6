"""Shared fixtures for tests."""

import pytest

from animal_memory.config import Config
from animal_memory.game.controller import RoundController
from animal_memory.leaderboard import InMemoryLeaderboard


class ManualTimer:
    """Timer that fires only when the test says so."""

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.callback()


class TimerRecorder:
    """Timer factory that keeps every timer it creates."""

    def __init__(self):
        self.timers: list[ManualTimer] = []

    def __call__(self, delay, callback):
        timer = ManualTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> ManualTimer:
        return self.timers[-1]


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def timers():
    return TimerRecorder()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def leaderboard():
    return InMemoryLeaderboard()


@pytest.fixture
def controller(timers, clock, leaderboard):
    return RoundController(
        leaderboard=leaderboard,
        config=Config(),
        player_name="Alice",
        timer_factory=timers,
        clock=clock,
    )
