from .base import Scheduler, TimerHandle
from .periodic import sweep_periodically
from .task import RepeatingTask
from .timers import AsyncioScheduler, LoopTimerHandle, ThreadingScheduler

__all__ = [
    "Scheduler",
    "TimerHandle",
    "ThreadingScheduler",
    "AsyncioScheduler",
    "LoopTimerHandle",
    "RepeatingTask",
    "sweep_periodically",
]
