from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

# Metrics are module-level and shared by every cache instance, so each
# metric carries its own lock rather than relying on a cache's lock.


@dataclass
class Counter:
    name: str
    help: str
    values: Dict[Tuple, float] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def inc(self, value: float = 1.0, **labels: Any) -> None:
        key = tuple(sorted(labels.items()))
        with self._lock:
            self.values[key] = self.values.get(key, 0.0) + value

    def get(self, **labels: Any) -> float:
        with self._lock:
            return self.values.get(tuple(sorted(labels.items())), 0.0)

    def reset(self) -> None:
        with self._lock:
            self.values.clear()


@dataclass
class Histogram:
    name: str
    help: str
    buckets: List[float]
    counts: Dict[Tuple, List[int]] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def observe(self, val: float, **labels: Any) -> None:
        key = tuple(sorted(labels.items()))
        with self._lock:
            if key not in self.counts:
                # last slot counts observations above the largest bucket
                self.counts[key] = [0 for _ in range(len(self.buckets) + 1)]
            for i, b in enumerate(self.buckets):
                if val <= b:
                    self.counts[key][i] += 1
                    break
            else:
                self.counts[key][-1] += 1

    def total(self, **labels: Any) -> int:
        with self._lock:
            return sum(self.counts.get(tuple(sorted(labels.items())), []))

    def reset(self) -> None:
        with self._lock:
            self.counts.clear()


# Predefined metrics
cache_requests_total = Counter("cache_requests_total", "Lookups by result (hit, miss, expired)")
cache_evictions_total = Counter(
    "cache_evictions_total",
    "Entries removed by reason (capacity, expired, sweep, replaced, explicit)",
)
cache_sweep_duration_seconds = Histogram(
    "cache_sweep_duration_seconds",
    "Expiration sweep duration",
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)


def reset_all() -> None:
    cache_requests_total.reset()
    cache_evictions_total.reset()
    cache_sweep_duration_seconds.reset()
