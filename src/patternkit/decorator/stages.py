"""Concrete decorator stages.

MarkerStage frames a text or bytes payload as ``[TAG]payload[/TAG]`` on
write and strips the frame on read. EncryptionStage and CompressionStage are the two
marker stages used by the file chaining demos. TransformStage turns any
forward/inverse function pair into a stage.
"""

from collections.abc import Callable
from typing import Any

from patternkit.decorator.base import MismatchHook, Stage
from patternkit.errors import ConfigurationError
from patternkit.protocol import IComponent


class MarkerStage(Stage):
    """Stage that wraps str or bytes payloads in bracket markers.

    bytes payloads get UTF-8 encoded byte markers, so the payload type is
    preserved. Any other payload type is rejected on write with TypeError.

    The inverse only strips the frame when the payload both starts with the
    opening marker and ends with the closing marker. Anything else is a
    mismatch and passes through unchanged.
    """

    def __init__(
        self,
        inner: IComponent,
        tag: str,
        *,
        strict: bool = False,
        on_mismatch: MismatchHook | None = None,
    ) -> None:
        if not tag:
            raise ConfigurationError("MarkerStage tag cannot be empty")
        super().__init__(inner, strict=strict, on_mismatch=on_mismatch)
        self.tag = tag
        self.name = tag.lower()

    @property
    def opening(self) -> str:
        return f"[{self.tag}]"

    @property
    def closing(self) -> str:
        return f"[/{self.tag}]"

    def _markers(self, data: Any) -> tuple[Any, Any] | None:
        """Opening and closing markers matching the payload type, if supported."""
        if isinstance(data, str):
            return self.opening, self.closing
        if isinstance(data, bytes):
            return self.opening.encode("utf-8"), self.closing.encode("utf-8")
        return None

    def forward(self, data: Any) -> str | bytes:
        """Frame the payload.

        Raises:
            TypeError: If data is neither str nor bytes.
        """
        markers = self._markers(data)
        if markers is None:
            raise TypeError(
                f"{self.name} stage can only frame str or bytes, got {type(data).__name__}"
            )
        opening, closing = markers
        return opening + data + closing

    def inverse(self, data: Any) -> Any:
        markers = self._markers(data)
        if markers is not None:
            opening, closing = markers
            if (
                len(data) >= len(opening) + len(closing)
                and data.startswith(opening)
                and data.endswith(closing)
            ):
                return data[len(opening) : len(data) - len(closing)]
        return self.mismatch(data)


class EncryptionStage(MarkerStage):
    """Simulated encryption: frames the payload as [ENCRYPTED]...[/ENCRYPTED]."""

    def __init__(
        self,
        inner: IComponent,
        *,
        strict: bool = False,
        on_mismatch: MismatchHook | None = None,
    ) -> None:
        super().__init__(inner, "ENCRYPTED", strict=strict, on_mismatch=on_mismatch)


class CompressionStage(MarkerStage):
    """Simulated compression: frames the payload as [COMPRESSED]...[/COMPRESSED]."""

    def __init__(
        self,
        inner: IComponent,
        *,
        strict: bool = False,
        on_mismatch: MismatchHook | None = None,
    ) -> None:
        super().__init__(inner, "COMPRESSED", strict=strict, on_mismatch=on_mismatch)


class TransformStage(Stage):
    """Stage built from an arbitrary forward/inverse function pair.

    The inverse function signals "not my payload" by raising ValueError or
    TypeError; the stage then treats it as a mismatch. Whether the pair is
    really inverse is the caller's responsibility.
    """

    def __init__(
        self,
        inner: IComponent,
        name: str,
        forward: Callable[[Any], Any],
        inverse: Callable[[Any], Any],
        *,
        strict: bool = False,
        on_mismatch: MismatchHook | None = None,
    ) -> None:
        if not name:
            raise ConfigurationError("TransformStage name cannot be empty")
        if not callable(forward) or not callable(inverse):
            raise ConfigurationError(
                f"TransformStage '{name}' needs callable forward and inverse functions"
            )
        super().__init__(inner, strict=strict, on_mismatch=on_mismatch)
        self.name = name
        self._forward = forward
        self._inverse = inverse

    def forward(self, data: Any) -> Any:
        return self._forward(data)

    def inverse(self, data: Any) -> Any:
        try:
            return self._inverse(data)
        except (ValueError, TypeError):
            return self.mismatch(data)
