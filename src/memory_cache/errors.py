from __future__ import annotations


class CacheInvariantError(RuntimeError):
    """Internal structures disagree; the cache instance can no longer be trusted."""
