from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict

DEFAULT_EXPIRY_CLEAN_DELAY_MS = 3600 * 1000

# camelCase option names accepted alongside the field names
_ALIASES = {
    "maxItems": "max_items",
    "expiryCleanDelayMS": "expiry_clean_delay_ms",
    "sweepEnabled": "sweep_enabled",
    "validateInvariants": "validate_invariants",
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class CacheConfig:
    max_items: int = 0  # 0 = unbounded
    expiry_clean_delay_ms: int = DEFAULT_EXPIRY_CLEAN_DELAY_MS
    sweep_enabled: bool = True
    validate_invariants: bool = False

    def __post_init__(self) -> None:
        if not _is_int(self.max_items) or self.max_items < 0:
            raise ValueError(f"max_items must be a non-negative integer, got {self.max_items!r}")
        if not _is_int(self.expiry_clean_delay_ms) or self.expiry_clean_delay_ms <= 0:
            raise ValueError(
                f"expiry_clean_delay_ms must be a positive integer, got {self.expiry_clean_delay_ms!r}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheConfig":
        values = {_ALIASES.get(key, key): value for key, value in data.items()}
        return cls(**values)

    def merged(self, data: Dict[str, Any]) -> "CacheConfig":
        """Return a copy with `data` (snake_case or camelCase keys) applied on top."""
        values = dataclasses.asdict(self)
        values.update({_ALIASES.get(key, key): value for key, value in data.items()})
        return type(self)(**values)
