from .engine import MemoryCache, monotonic_ms
from .models import CacheEntry, CacheResult
from .recency import RecencyList, RecencyNode

__all__ = [
    "MemoryCache",
    "CacheEntry",
    "CacheResult",
    "RecencyList",
    "RecencyNode",
    "monotonic_ms",
]
