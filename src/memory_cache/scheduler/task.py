from __future__ import annotations

import logging
import threading
import typing as t
import weakref

from .base import Scheduler, TimerHandle

_logger = logging.getLogger(__name__)

Callback = t.Callable[[], t.Any]


class RepeatingTask:
    """Re-arms a callback on a scheduler every `interval_ms` until cancelled.

    The task owns the pending timer handle, so `cancel()` stops both future
    runs and the one currently waiting. A `weakref.WeakMethod` callback does
    not keep its object alive; once the object is collected the task cancels
    itself on the next run.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        callback: t.Union[Callback, weakref.WeakMethod],
        interval_ms: float,
        name: str = "repeating-task",
    ) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self._scheduler = scheduler
        self._callback = callback
        self._interval_ms = interval_ms
        self._name = name
        self._handle: t.Optional[TimerHandle] = None
        self._running = False
        # reentrant: cancel() may run from a GC finalizer while this thread holds it
        self._lock = threading.RLock()

    @property
    def running(self) -> bool:
        return self._running

    @property
    def interval_ms(self) -> float:
        return self._interval_ms

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._arm()

    def cancel(self) -> None:
        with self._lock:
            self._running = False
            handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()
        _logger.debug("Cancelled %s", self._name)

    def _resolve(self) -> t.Optional[Callback]:
        if isinstance(self._callback, weakref.WeakMethod):
            return self._callback()
        return self._callback

    def _arm(self) -> None:
        self._handle = self._scheduler.run_once_after(self._fire, self._interval_ms)
        _logger.debug("Armed %s to run in %sms", self._name, self._interval_ms)

    def _fire(self) -> None:
        if not self._running:
            return
        callback = self._resolve()
        if callback is None:
            _logger.debug("%s target was collected", self._name)
            self.cancel()
            return
        try:
            callback()
        except Exception:
            _logger.exception("%s raised; re-arming", self._name)
        finally:
            with self._lock:
                if self._running:
                    self._arm()
