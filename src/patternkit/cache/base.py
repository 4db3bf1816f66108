"""Base class for FlyweightCache implementations."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable, Iterator
from dataclasses import dataclass
from typing import Any

from patternkit.errors import ConfigurationError


@dataclass
class CacheStats:
    """Cache statistics tracking hits, misses, and factory calls."""

    hits: int = 0  # get_or_create() found the key
    misses: int = 0  # get_or_create() did not find the key
    creates: int = 0  # factory() was called


class FlyweightCache(ABC):
    """Abstract base class for flyweight caches.

    A flyweight cache hands out at most one live instance per distinct
    intrinsic-state key. Callers present a key and a zero-argument factory;
    the factory runs only on a miss, and every later request for an equal
    key gets the very same object back.

    Entries are never replaced. Teardown is cache-wide via clear().
    """

    def __init__(self) -> None:
        """Initialize the cache with statistics."""
        self.stats = CacheStats()

    def reset_stats(self) -> None:
        """Reset cache statistics to zero."""
        self.stats = CacheStats()

    @abstractmethod
    def get_or_create(self, key: Hashable, factory: Callable[[], Any]) -> Any:
        """Return the shared instance for key, creating it on first request.

        Args:
            key: Hashable key derived only from intrinsic attributes.
            factory: Zero-argument callable, invoked at most once per key.

        Returns:
            The shared instance stored under key.

        Raises:
            ConfigurationError: If factory is None or not callable.
        """
        ...

    @abstractmethod
    def get(self, key: Hashable) -> Any:
        """Return the shared instance for key without creating it.

        Raises:
            KeyError: If no instance exists for key.
        """
        ...

    @abstractmethod
    def keys(self) -> Iterator[Hashable]:
        """Iterate over the cached keys."""
        ...

    @abstractmethod
    def size(self) -> int:
        """Return the number of distinct keys currently cached."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry and reset statistics."""
        ...

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        try:
            self.get(key)  # type: ignore[arg-type]
        except KeyError:
            return False
        return True


def check_factory(factory: Any) -> None:
    """Reject a missing or non-callable factory before it is needed.

    Raises:
        ConfigurationError: If factory is None or not callable.
    """
    if factory is None:
        raise ConfigurationError("get_or_create() requires a factory, got None")
    if not callable(factory):
        raise ConfigurationError(
            f"factory must be a zero-argument callable, got {type(factory).__name__}"
        )
