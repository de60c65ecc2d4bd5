"""Shared fixtures and fakes for unit tests."""

from __future__ import annotations

import typing as t

import pytest

from memory_cache.monitoring import metrics
from memory_cache.scheduler import Scheduler


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class ManualHandle:
    def __init__(self, callback: t.Callable[[], None], delay_ms: float) -> None:
        self.callback = callback
        self.delay_ms = delay_ms
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(Scheduler):
    """Scheduler that queues callbacks until the test fires them."""

    def __init__(self) -> None:
        self.handles: t.List[ManualHandle] = []

    @property
    def pending(self) -> t.List[ManualHandle]:
        return [h for h in self.handles if not h.cancelled]

    def run_once_after(self, callback: t.Callable[[], None], delay_ms: float) -> ManualHandle:
        handle = ManualHandle(callback, delay_ms)
        self.handles.append(handle)
        return handle

    def fire_pending(self) -> int:
        due = self.pending
        for handle in due:
            # a handle fires once
            handle.cancelled = True
            handle.callback()
        return len(due)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Start every test from zeroed counters."""
    metrics.reset_all()
    yield
    metrics.reset_all()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def make_cache(clock, scheduler):
    """Factory for caches wired to the fake clock and manual scheduler."""
    from memory_cache import MemoryCache

    created = []

    def factory(**options: t.Any) -> MemoryCache:
        options.setdefault("validate_invariants", True)
        cache = MemoryCache(scheduler=scheduler, clock=clock, **options)
        created.append(cache)
        return cache

    yield factory
    for cache in created:
        cache.close()
