"""memory_cache

An in-process key/value cache with bounded capacity, least-recently-used
eviction and optional per-entry time-to-live, swept periodically.
"""

from .cache import CacheEntry, CacheResult, MemoryCache, RecencyList
from .errors import CacheInvariantError
from .scheduler import (
    AsyncioScheduler,
    RepeatingTask,
    Scheduler,
    ThreadingScheduler,
    sweep_periodically,
)
from .utils.config import CacheConfig

__all__ = [
    "MemoryCache",
    "CacheConfig",
    "CacheResult",
    "CacheEntry",
    "RecencyList",
    "CacheInvariantError",
    "Scheduler",
    "ThreadingScheduler",
    "AsyncioScheduler",
    "RepeatingTask",
    "sweep_periodically",
]

__version__ = "0.1.0"
