from __future__ import annotations

import logging
import math
import threading
import time
import typing as t
import weakref

from ..errors import CacheInvariantError
from ..monitoring.metrics import (
    cache_evictions_total,
    cache_requests_total,
    cache_sweep_duration_seconds,
)
from ..scheduler import RepeatingTask, Scheduler, ThreadingScheduler
from ..utils.config import CacheConfig
from .models import EXPIRED, MISS, CacheEntry, CacheResult
from .recency import RecencyList, RecencyNode

_logger = logging.getLogger(__name__)

Clock = t.Callable[[], float]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def _ttl_from(expire_after_ms: t.Any) -> t.Optional[float]:
    # anything but a positive number means "never expires"
    if isinstance(expire_after_ms, bool) or not isinstance(expire_after_ms, (int, float)):
        return None
    try:
        ttl = float(expire_after_ms)
    except OverflowError:
        # ints beyond float range
        ttl = math.inf if expire_after_ms > 0 else -math.inf
    if math.isnan(ttl) or ttl <= 0:
        return None
    return ttl


class MemoryCache:
    """Bounded LRU cache with optional per-entry TTL.

    Three structures are kept in step:

    - a recency list, head = most recently used;
    - a key index mapping each key to its node in that list;
    - an expiration table mapping keys with a TTL to an absolute expiry (ms).

    Every removal (explicit clear, capacity eviction, expiry on read, sweep,
    overwrite) goes through `_remove`, so the three never disagree. A single
    lock spans each public operation.
    """

    def __init__(
        self,
        config: t.Optional[CacheConfig] = None,
        *,
        scheduler: t.Optional[Scheduler] = None,
        clock: t.Optional[Clock] = None,
        **options: t.Any,
    ) -> None:
        config = config or CacheConfig()
        if options:
            config = config.merged(options)
        self._config = config
        self._clock = clock or monotonic_ms
        self._recency = RecencyList()
        self._nodes_by_key: t.Dict[t.Hashable, RecencyNode] = {}
        self._expiry_by_key: t.Dict[t.Hashable, float] = {}
        self._lock = threading.Lock()

        self._sweeper: t.Optional[RepeatingTask] = None
        if config.sweep_enabled:
            self._sweeper = RepeatingTask(
                scheduler or ThreadingScheduler(),
                weakref.WeakMethod(self.sweep),
                config.expiry_clean_delay_ms,
                name="cache-expiry-sweep",
            )
            self._sweeper.start()
            # a dropped cache stops its own sweep
            weakref.finalize(self, self._sweeper.cancel)

    @property
    def config(self) -> CacheConfig:
        return self._config

    @property
    def max_items(self) -> int:
        return self._config.max_items

    @property
    def sweeper(self) -> t.Optional[RepeatingTask]:
        return self._sweeper

    # Public API

    def get(self, key: t.Hashable) -> CacheResult:
        with self._lock:
            node = self._nodes_by_key.get(key)
            if node is None:
                cache_requests_total.inc(result="miss")
                return MISS

            if self._expired_locked(key):
                self._remove(key, reason="expired")
                cache_requests_total.inc(result="expired")
                _logger.debug("Key %r expired on read", key)
                self._validate_locked()
                return EXPIRED

            # mark as recently used
            self._recency.move_to_front(node)
            cache_requests_total.inc(result="hit")
            return CacheResult(cached=True, value=node.entry.value)

    def set(
        self,
        key: t.Hashable,
        value: t.Any,
        opts: t.Optional[t.Mapping[str, t.Any]] = None,
        *,
        expire_after_ms: t.Optional[float] = None,
    ) -> None:
        """Cache `value` (which may be None) under `key`.

        The TTL comes from `expire_after_ms` or, for option-dict callers,
        `opts["expireAfterMS"]`. A missing or non-positive TTL stores the
        entry without expiry, dropping any TTL a previous value had.
        """
        if expire_after_ms is None and isinstance(opts, t.Mapping):
            expire_after_ms = opts.get("expireAfterMS", opts.get("expire_after_ms"))
        ttl = _ttl_from(expire_after_ms)

        with self._lock:
            if key in self._nodes_by_key:
                self._remove(key, reason="replaced")

            node = self._recency.push_front(CacheEntry(key, value))
            self._nodes_by_key[key] = node
            if ttl is not None:
                self._expiry_by_key[key] = self._clock() + ttl

            # evict from the tail until back under capacity
            max_items = self._config.max_items
            while max_items > 0 and len(self._nodes_by_key) > max_items:
                oldest = self._recency.tail
                if oldest is None:
                    raise CacheInvariantError("key index is non-empty but recency list is empty")
                self._remove(oldest.entry.key, reason="capacity")
                _logger.debug("Evicted least recently used key %r", oldest.entry.key)

            self._validate_locked()

    def clear(self, key: t.Hashable) -> bool:
        """Drop `key`; return whether anything was cached under it."""
        with self._lock:
            removed = self._remove(key, reason="explicit")
            self._validate_locked()
            return removed

    def clear_all(self) -> int:
        with self._lock:
            keys = list(self._nodes_by_key)
            for key in keys:
                self._remove(key, reason="explicit")
            self._validate_locked()
            return len(keys)

    def sweep(self) -> int:
        """Remove every entry whose expiry has passed; return how many."""
        started = time.perf_counter()
        with self._lock:
            now = self._clock()
            # snapshot, since _remove mutates the table
            due = [key for key, expires_at in self._expiry_by_key.items() if now >= expires_at]
            for key in due:
                self._remove(key, reason="sweep")
            self._validate_locked()
        cache_sweep_duration_seconds.observe(time.perf_counter() - started)
        if due:
            _logger.debug("Sweep removed %d expired entries", len(due))
        return len(due)

    def is_expired(self, key: t.Hashable) -> bool:
        with self._lock:
            return self._expired_locked(key)

    def close(self) -> None:
        if self._sweeper is not None:
            self._sweeper.cancel()

    def check_invariants(self) -> None:
        with self._lock:
            self._check_invariants_locked()

    def __len__(self) -> int:
        with self._lock:
            return len(self._nodes_by_key)

    def __contains__(self, key: t.Hashable) -> bool:
        with self._lock:
            return key in self._nodes_by_key

    def __enter__(self) -> "MemoryCache":
        return self

    def __exit__(self, *exc_info: t.Any) -> None:
        self.close()

    # Internals; callers hold self._lock

    def _expired_locked(self, key: t.Hashable) -> bool:
        expires_at = self._expiry_by_key.get(key)
        return expires_at is not None and self._clock() >= expires_at

    def _remove(self, key: t.Hashable, reason: str) -> bool:
        self._expiry_by_key.pop(key, None)
        node = self._nodes_by_key.pop(key, None)
        if node is None:
            return False
        self._recency.remove(node)
        cache_evictions_total.inc(reason=reason)
        return True

    def _validate_locked(self) -> None:
        if self._config.validate_invariants:
            self._check_invariants_locked()

    def _check_invariants_locked(self) -> None:
        if len(self._recency) != len(self._nodes_by_key):
            raise CacheInvariantError(
                f"recency list holds {len(self._recency)} entries but key index holds {len(self._nodes_by_key)}"
            )
        seen = set()
        for entry in self._recency:
            if entry.key in seen:
                raise CacheInvariantError(f"key {entry.key!r} appears twice in recency list")
            seen.add(entry.key)
            node = self._nodes_by_key.get(entry.key)
            if node is None or node.entry is not entry:
                raise CacheInvariantError(f"key index does not point at the live node for {entry.key!r}")
        orphans = [key for key in self._expiry_by_key if key not in self._nodes_by_key]
        if orphans:
            raise CacheInvariantError(f"expiry records without entries: {orphans!r}")
        max_items = self._config.max_items
        if max_items > 0 and len(self._nodes_by_key) > max_items:
            raise CacheInvariantError(f"{len(self._nodes_by_key)} entries exceed max_items={max_items}")
