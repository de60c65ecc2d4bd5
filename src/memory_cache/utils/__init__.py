"""Utility module for cache configuration."""

from .config import DEFAULT_EXPIRY_CLEAN_DELAY_MS, CacheConfig

__all__ = [
    "CacheConfig",
    "DEFAULT_EXPIRY_CLEAN_DELAY_MS",
]
