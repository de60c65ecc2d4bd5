from __future__ import annotations

import typing as t
from dataclasses import dataclass


@dataclass
class CacheEntry:
    key: t.Hashable
    value: t.Any


@dataclass(frozen=True)
class CacheResult:
    """Outcome of a lookup.

    `cached` is True whenever the key was found, including when it was found
    expired; in that case `value` is None.
    """

    cached: bool
    value: t.Any = None


MISS = CacheResult(cached=False, value=None)
EXPIRED = CacheResult(cached=True, value=None)
