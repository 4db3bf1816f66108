"""Flyweight cache backends."""

from patternkit.cache.base import CacheStats, FlyweightCache
from patternkit.cache.locked import LockedCache
from patternkit.cache.memory import MemoryCache

__all__ = [
    "CacheStats",
    "FlyweightCache",
    "LockedCache",
    "MemoryCache",
]
