"""Base classes for decorator chains: components and stages."""

import logging
import threading
import warnings
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from patternkit.errors import (
    ConfigurationError,
    TransformMismatchError,
    TransformMismatchWarning,
)
from patternkit.protocol import IComponent

logger = logging.getLogger(__name__)

# Called as hook(stage, payload) when a stage cannot invert a payload
MismatchHook = Callable[[Any, Any], None]


class Component(ABC):
    """Abstract base class for decorator chain components."""

    @abstractmethod
    def write(self, data: Any) -> None:
        """Store data, transforming it on the way down the chain."""
        ...

    @abstractmethod
    def read(self) -> Any:
        """Return stored data with every transform of the chain undone."""
        ...


class BaseComponent(Component):
    """Innermost component of a chain: holds the raw stored payload.

    write() and read() are each a single critical section, so concurrent
    callers never observe a partially written payload.

    The initial payload counts as already framed: until the first write(),
    stages read it through unchanged instead of trying to invert it.
    """

    def __init__(self, initial: Any = "") -> None:
        """Initialize the component.

        Args:
            initial: Payload returned by read() before the first write().
        """
        self._payload = initial
        self._written = False
        self._lock = threading.Lock()

    @property
    def payload(self) -> Any:
        """The raw stored value, with every transform still applied."""
        with self._lock:
            return self._payload

    @property
    def written(self) -> bool:
        """Whether write() has been called since construction."""
        return self._written

    def write(self, data: Any) -> None:
        with self._lock:
            self._payload = data
            self._written = True

    def read(self) -> Any:
        with self._lock:
            return self._payload

    def __repr__(self) -> str:
        return f"BaseComponent({self._payload!r})"


class Stage(Component):
    """One wrapping layer of a decorator chain.

    A stage owns exactly one inner component. write() applies the stage's
    forward transform and hands the result to the inner component; read()
    asks the inner component first and then applies the inverse transform.

    When inverse() is given a payload that this stage did not produce, it
    must call mismatch() and return the payload unchanged. What mismatch()
    does beyond that is configurable:

    - default: emit TransformMismatchWarning and a debug log record
    - on_mismatch: additionally call on_mismatch(stage, payload)
    - strict=True: raise TransformMismatchError instead
    """

    #: Stage name used in descriptions, envelopes and diagnostics.
    name: str = "stage"

    def __init__(
        self,
        inner: IComponent,
        *,
        strict: bool = False,
        on_mismatch: MismatchHook | None = None,
    ) -> None:
        """Wrap an inner component.

        Args:
            inner: The component this stage wraps.
            strict: Raise TransformMismatchError on mismatch instead of
                passing the payload through.
            on_mismatch: Optional callback invoked as on_mismatch(stage, payload)
                whenever a mismatch is detected.

        Raises:
            ConfigurationError: If inner is None or not a component, or
                on_mismatch is not callable.
        """
        if inner is None:
            raise ConfigurationError(f"{type(self).__name__} needs an inner component")
        if not isinstance(inner, IComponent):
            raise ConfigurationError(
                f"{type(self).__name__} can only wrap a component with write() and "
                f"read(), got {type(inner).__name__}"
            )
        if on_mismatch is not None and not callable(on_mismatch):
            raise ConfigurationError("on_mismatch must be callable")
        self._inner = inner
        self.strict = strict
        self.on_mismatch = on_mismatch

    @property
    def inner(self) -> IComponent:
        """The wrapped component. Fixed at construction."""
        return self._inner

    @abstractmethod
    def forward(self, data: Any) -> Any:
        """Transform a payload on its way to storage."""
        ...

    @abstractmethod
    def inverse(self, data: Any) -> Any:
        """Undo forward(); pass foreign payloads through via mismatch()."""
        ...

    def write(self, data: Any) -> None:
        self._inner.write(self.forward(data))

    @property
    def written(self) -> bool:
        """Whether the base of this chain has been written to."""
        return getattr(self._inner, "written", True)

    def read(self) -> Any:
        # written only goes False -> True; unchanged across the read means
        # the data is still the unframed initial payload
        if not self.written:
            data = self._inner.read()
            if not self.written:
                return data
        return self.inverse(self._inner.read())

    def mismatch(self, data: Any) -> Any:
        """Report that inverse() met a payload without this stage's marker.

        Returns:
            data, unchanged.

        Raises:
            TransformMismatchError: If the stage was built with strict=True.
        """
        if self.strict:
            raise TransformMismatchError(f"{self.name} stage cannot invert payload {data!r}")
        logger.debug("%s stage cannot invert payload %r; passing it through", self.name, data)
        if self.on_mismatch is not None:
            self.on_mismatch(self, data)
        warnings.warn(
            f"{self.name} stage cannot invert payload {data!r}; passing it through",
            TransformMismatchWarning,
            stacklevel=3,
        )
        return data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._inner!r})"
