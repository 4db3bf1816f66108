"""IComponent Protocol definition."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IComponent(Protocol):
    """Protocol for anything that can sit in a decorator chain.

    A component exposes two dual operations. Every stage wrapping a component
    must make ``read()`` undo what its ``write()`` did, so that a full chain
    satisfies the round-trip law: ``write(x)`` followed by ``read()`` yields
    ``x`` again.
    """

    def write(self, data: Any) -> None:
        """Store a payload, transforming it on the way down.

        Args:
            data: The opaque text or bytes payload to store.
        """
        ...

    def read(self) -> Any:
        """Return the stored payload with every transform undone.

        Reading must not change stored state: two reads without an
        intervening write return equal values.
        """
        ...
