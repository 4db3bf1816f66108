"""LockedCache: MemoryCache that is safe to share between threads."""

import logging
import threading
from collections.abc import Callable, Hashable, Iterator, MutableMapping
from typing import Any

from patternkit.cache.base import check_factory
from patternkit.cache.memory import CachePolicy, MemoryCache

logger = logging.getLogger(__name__)


class LockedCache(MemoryCache):
    """Thread-safe flyweight cache.

    The check-then-create path is a single critical section, so the factory
    runs at most once per key even with many concurrent callers. Hits on an
    unbounded cache are served from a plain dict lookup without taking the
    lock (double-checked locking); bounded caches reorder entries on read and
    therefore always lock.

    The lock is re-entrant: a factory may itself request other flyweights
    from the same cache.
    """

    def __init__(
        self,
        cache: CachePolicy | MutableMapping[Hashable, Any] = "unbounded",
        max_size: int | None = None,
    ) -> None:
        super().__init__(cache=cache, max_size=max_size)
        self._lock = threading.RLock()
        self._lock_free_reads = type(self._entries) is dict

    def get_or_create(self, key: Hashable, factory: Callable[[], Any]) -> Any:
        """Return the shared instance for key; factory runs at most once per key."""
        check_factory(factory)

        if self._lock_free_reads:
            instance = self._entries.get(key, _MISSING)
            if instance is not _MISSING:
                # Best-effort count; lock-free hits may race
                self.stats.hits += 1
                return instance

        with self._lock:
            # Re-check: another thread may have created it while we waited
            return super().get_or_create(key, factory)

    def get(self, key: Hashable) -> Any:
        with self._lock:
            return super().get(key)

    def keys(self) -> Iterator[Hashable]:
        with self._lock:
            return super().keys()

    def size(self) -> int:
        with self._lock:
            return super().size()

    def clear(self) -> None:
        with self._lock:
            super().clear()
        logger.debug("Cleared locked flyweight cache")


_MISSING = object()
