"""MemoryCache: In-memory flyweight cache."""

import logging
import math
from collections.abc import Callable, Hashable, Iterator, MutableMapping
from typing import Any, Literal

from cachetools import LFUCache, LRUCache

from patternkit.cache.base import FlyweightCache, check_factory
from patternkit.errors import ConfigurationError

logger = logging.getLogger(__name__)

CachePolicy = Literal["unbounded", "lru", "lfu"]

DEFAULT_MAX_SIZE = 1000


def _create_cache(
    max_size: int,
    cache: Literal["lru", "lfu"],
) -> MutableMapping[Hashable, Any]:
    """Create a cachetools cache."""
    if cache == "lfu":
        return LFUCache(maxsize=max_size)
    return LRUCache(maxsize=max_size)


def create_mapping(
    cache: CachePolicy | MutableMapping[Hashable, Any],
    max_size: int | None,
) -> MutableMapping[Hashable, Any]:
    """Resolve a cache policy and max_size into a backing mapping.

    Args:
        cache: "unbounded" (plain dict), "lru", "lfu", or a MutableMapping
            instance (e.g. cachetools.TTLCache).
        max_size: Maximum number of entries for "lru"/"lfu". Default 1000.
            Ignored for "unbounded". Must be None for a mapping instance.

    Raises:
        ConfigurationError: Invalid combination of cache and max_size.
    """
    # Mapping instance provided: use it, max_size forbidden
    if isinstance(cache, MutableMapping):
        if max_size is not None:
            raise ConfigurationError(
                "max_size must not be set when cache is a mapping instance"
            )
        return cache

    if cache == "unbounded":
        return {}

    if cache in ("lru", "lfu"):
        size = max_size if max_size is not None else DEFAULT_MAX_SIZE
        if size < 1:
            raise ConfigurationError("max_size must be at least 1")
        if isinstance(size, float) and math.isinf(size):
            raise ConfigurationError("max_size cannot be infinity")
        return _create_cache(size, cache)

    raise ConfigurationError(
        f"cache must be 'unbounded', 'lru', 'lfu', or a MutableMapping; got {cache!r}"
    )


class MemoryCache(FlyweightCache):
    """In-memory flyweight cache backed by a dict or a cachetools cache.

    Default is cache="unbounded": entries live as long as the cache, which is
    what the identity guarantee needs. "lru" and "lfu" bound the cache; an
    evicted key is constructed again on its next request, so two instances
    for one key may then exist over time (never at once inside the cache).
    """

    def __init__(
        self,
        cache: CachePolicy | MutableMapping[Hashable, Any] = "unbounded",
        max_size: int | None = None,
    ) -> None:
        """Initialize memory cache.

        Args:
            cache: "unbounded", "lru", "lfu", or a MutableMapping instance.
            max_size: Bound for "lru"/"lfu"; see create_mapping().

        Raises:
            ConfigurationError: Invalid combination of cache and max_size.
        """
        super().__init__()
        self._entries = create_mapping(cache, max_size)

    def get_or_create(self, key: Hashable, factory: Callable[[], Any]) -> Any:
        """Return the shared instance for key, calling factory only on a miss."""
        check_factory(factory)

        try:
            instance = self._entries[key]
        except KeyError:
            pass
        else:
            self.stats.hits += 1
            return instance

        self.stats.misses += 1
        instance = factory()
        self._entries[key] = instance
        self.stats.creates += 1
        logger.debug("Created flyweight for key %r (%d cached)", key, len(self._entries))
        return instance

    def get(self, key: Hashable) -> Any:
        """Return the shared instance for key.

        Raises:
            KeyError: If no instance exists for key.
        """
        if key not in self._entries:
            raise KeyError(f"No flyweight cached for key {key!r}")
        return self._entries[key]

    def keys(self) -> Iterator[Hashable]:
        return iter(list(self._entries.keys()))

    def size(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Clear all entries (cache-wide teardown)."""
        self._entries.clear()
        self.reset_stats()
