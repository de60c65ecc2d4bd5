from __future__ import annotations

import typing as t
from abc import ABC, abstractmethod


class TimerHandle(t.Protocol):
    def cancel(self) -> t.Any:  # pragma: no cover - interface
        ...


class Scheduler(ABC):
    """Runs a callback once after a delay.

    This is the only capability the cache needs from its environment. The
    returned handle is optional; when present it lets the owner cancel a
    pending run at teardown.
    """

    @abstractmethod
    def run_once_after(
        self, callback: t.Callable[[], None], delay_ms: float
    ) -> t.Optional[TimerHandle]:  # pragma: no cover - interface
        raise NotImplementedError
