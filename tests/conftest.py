"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It pins the settings environment so no developer .env file leaks into tests.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["PFP_ENV"] = "testing"

from typing import Callable

import pytest


class FakeClock:
    """Deterministic millisecond clock for the rate-limit gate."""

    def __init__(self, start_ms: int = 1_699_999_990_000) -> None:
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


class FakeTimerHandle:
    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Records scheduled resets; tests fire them explicitly."""

    def __init__(self) -> None:
        self.handles: list[FakeTimerHandle] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimerHandle:
        handle = FakeTimerHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeTimerHandle]:
        return [h for h in self.handles if not h.cancelled]

    def fire_pending(self) -> None:
        for handle in self.pending:
            handle.callback()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    return FakeScheduler()
