from __future__ import annotations

import asyncio
import threading
import typing as t

from .base import Scheduler, TimerHandle


class ThreadingScheduler(Scheduler):
    """Fires callbacks on daemon `threading.Timer` threads."""

    def __init__(self, daemon: bool = True) -> None:
        self._daemon = daemon

    def run_once_after(self, callback: t.Callable[[], None], delay_ms: float) -> TimerHandle:
        timer = threading.Timer(delay_ms / 1000.0, callback)
        timer.daemon = self._daemon
        timer.start()
        return timer


class LoopTimerHandle:
    """Wraps an `asyncio.TimerHandle` so it can be cancelled from any thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop, handle: asyncio.TimerHandle) -> None:
        self._loop = loop
        self._handle = handle

    def cancelled(self) -> bool:
        return self._handle.cancelled()

    def cancel(self) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop or not self._loop.is_running():
            self._handle.cancel()
        else:
            # loop is running on another thread
            self._loop.call_soon_threadsafe(self._handle.cancel)


class AsyncioScheduler(Scheduler):
    """Schedules callbacks on an asyncio event loop via `call_later`.

    Without an explicit loop, the loop running at scheduling time is used, so
    the first call must happen from inside that loop.
    """

    def __init__(self, loop: t.Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def run_once_after(self, callback: t.Callable[[], None], delay_ms: float) -> LoopTimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        if self._loop is None:
            self._loop = loop
        return LoopTimerHandle(loop, loop.call_later(delay_ms / 1000.0, callback))
