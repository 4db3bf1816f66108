"""Typed envelopes: stage bookkeeping without string markers.

An EnvelopeStage does not guess from the payload's text whether it applied a
transform. Instead, write() wraps the payload in an Envelope that records the
names of applied stages in order, and read() only inverts when the most
recently applied stage is this one.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from patternkit.decorator.base import MismatchHook, Stage
from patternkit.errors import ConfigurationError
from patternkit.protocol import IComponent


def _identity(data: Any) -> Any:
    return data


@dataclass(frozen=True)
class Envelope:
    """A payload plus the names of the stages applied to it, outermost first."""

    payload: Any
    applied: tuple[str, ...] = field(default_factory=tuple)

    def push(self, name: str, payload: Any) -> "Envelope":
        """Return a new envelope with one more stage applied."""
        return Envelope(payload=payload, applied=(*self.applied, name))

    def pop(self, payload: Any) -> "Envelope":
        """Return a new envelope with the last applied stage removed."""
        return Envelope(payload=payload, applied=self.applied[:-1])

    @property
    def top(self) -> str | None:
        """Name of the most recently applied stage, if any."""
        return self.applied[-1] if self.applied else None


class EnvelopeStage(Stage):
    """Stage that tracks its own application in an Envelope.

    The outermost envelope stage of a chain turns a raw payload into an
    Envelope; the same stage unwraps it again on read once every stage has
    been undone, so callers only ever see raw payloads.
    """

    def __init__(
        self,
        inner: IComponent,
        name: str,
        forward: Callable[[Any], Any] | None = None,
        inverse: Callable[[Any], Any] | None = None,
        *,
        strict: bool = False,
        on_mismatch: MismatchHook | None = None,
    ) -> None:
        """Wrap an inner component.

        Args:
            inner: The component this stage wraps.
            name: Name recorded in the envelope. Must be non-empty.
            forward: Optional payload transform applied on write.
            inverse: Inverse of forward, applied on read.
            strict: Raise on mismatch instead of passing through.
            on_mismatch: Optional mismatch callback.

        Raises:
            ConfigurationError: If name is empty, or only one of forward and
                inverse is given.
        """
        if not name:
            raise ConfigurationError("EnvelopeStage name cannot be empty")
        if (forward is None) != (inverse is None):
            raise ConfigurationError(
                f"EnvelopeStage '{name}' needs both forward and inverse, or neither"
            )
        super().__init__(inner, strict=strict, on_mismatch=on_mismatch)
        self.name = name
        self._forward = forward or _identity
        self._inverse = inverse or _identity

    def forward(self, data: Any) -> Envelope:
        envelope = data if isinstance(data, Envelope) else Envelope(payload=data)
        return envelope.push(self.name, self._forward(envelope.payload))

    def inverse(self, data: Any) -> Any:
        if not isinstance(data, Envelope) or data.top != self.name:
            return self.mismatch(data)
        envelope = data.pop(self._inverse(data.payload))
        # Last stage undone: hand back the bare payload
        if not envelope.applied:
            return envelope.payload
        return envelope
