"""DecoratorChain: ordered composition of stages around a base component."""

import logging
from collections.abc import Callable, Iterator, Sequence
from functools import partial
from typing import Any

from patternkit.decorator.base import BaseComponent, Component, Stage
from patternkit.decorator.stages import TransformStage
from patternkit.errors import ConfigurationError
from patternkit.protocol import IComponent

logger = logging.getLogger(__name__)

# A stage spec is anything that turns an inner component into a stage:
# a Stage subclass, a callable such as functools.partial(MarkerStage, tag="X"),
# or a (name, forward, inverse) transform pair.
StageSpec = (
    Callable[[IComponent], IComponent]
    | tuple[str, Callable[[Any], Any], Callable[[Any], Any]]
)


def transform_pair(
    name: str,
    forward: Callable[[Any], Any],
    inverse: Callable[[Any], Any],
    **options: Any,
) -> Callable[[IComponent], TransformStage]:
    """Return a stage spec for a forward/inverse function pair.

    Args:
        name: Stage name.
        forward: Transform applied on write.
        inverse: Transform applied on read.
        **options: Passed to TransformStage (strict, on_mismatch).
    """
    return partial(TransformStage, name=name, forward=forward, inverse=inverse, **options)


def _make_stage(spec: StageSpec, inner: IComponent, position: int) -> IComponent:
    if isinstance(spec, tuple):
        if len(spec) != 3:
            raise ConfigurationError(
                f"Stage spec #{position} must be (name, forward, inverse), got {len(spec)} items"
            )
        name, forward, inverse = spec
        return TransformStage(inner, name, forward, inverse)

    if not callable(spec):
        raise ConfigurationError(
            f"Stage spec #{position} must be a Stage class, a callable or a "
            f"(name, forward, inverse) tuple; got {type(spec).__name__}"
        )

    try:
        stage = spec(inner)
    except TypeError as exc:
        raise ConfigurationError(
            f"Stage spec #{position} cannot wrap a component: {exc}"
        ) from exc
    if not isinstance(stage, IComponent):
        raise ConfigurationError(
            f"Stage spec #{position} returned {type(stage).__name__}, not a component"
        )
    return stage


def build(base: IComponent | None, stages: Sequence[StageSpec]) -> IComponent:
    """Wrap base with each stage in list order.

    The first spec wraps base directly, the last spec becomes the outermost
    wrapper. Writes through the result therefore run the last stage's
    forward transform first; reads undo the first stage last.

    Args:
        base: The innermost component that stores the payload.
        stages: Ordered stage specs, innermost first. May be empty, in which
            case base itself is returned.

    Returns:
        The outermost component of the chain.

    Raises:
        ConfigurationError: If base is missing or not a component, stages is
            None, or a spec cannot produce a component.
    """
    if base is None:
        raise ConfigurationError("build() needs a base component to wrap")
    if not isinstance(base, IComponent):
        raise ConfigurationError(
            f"base must have write() and read(), got {type(base).__name__}"
        )
    if stages is None:
        raise ConfigurationError("build() needs a sequence of stage specs, got None")

    component = base
    for position, spec in enumerate(stages):
        component = _make_stage(spec, component, position)
    logger.debug("Built chain: %s", " -> ".join(describe(component)))
    return component


def layers(component: IComponent) -> Iterator[IComponent]:
    """Walk a chain from the outermost component down to the base."""
    current: IComponent | None = component
    while current is not None:
        yield current
        current = current.inner if isinstance(current, Stage) else None


def innermost(component: IComponent) -> IComponent:
    """Return the base component at the bottom of a chain."""
    for layer in layers(component):
        last = layer
    return last


def describe(component: IComponent) -> list[str]:
    """Names of the chain's stages, outermost first, ending with the base type."""
    return [
        layer.name if isinstance(layer, Stage) else type(layer).__name__
        for layer in layers(component)
    ]


class DecoratorChain(Component):
    """A built chain together with its base component.

    Convenience wrapper around build(): keeps a handle on the base so the raw
    stored payload can be inspected, and delegates write()/read() to the
    outermost stage.
    """

    def __init__(self, base: IComponent | None, stages: Sequence[StageSpec]) -> None:
        """Build the chain.

        Raises:
            ConfigurationError: See build().
        """
        self.outer = build(base, stages)
        self.base = innermost(self.outer)

    @classmethod
    def over(cls, stages: Sequence[StageSpec], initial: Any = "") -> "DecoratorChain":
        """Build a chain over a fresh BaseComponent."""
        return cls(BaseComponent(initial), stages)

    @property
    def stored(self) -> Any:
        """The raw payload held by the base, with every transform applied."""
        if isinstance(self.base, BaseComponent):
            return self.base.payload
        return self.base.read()

    @property
    def stage_names(self) -> list[str]:
        """Stage names from outermost to innermost (base excluded)."""
        return describe(self.outer)[:-1]

    def write(self, data: Any) -> None:
        self.outer.write(data)

    def read(self) -> Any:
        return self.outer.read()

    def __repr__(self) -> str:
        return f"DecoratorChain({' -> '.join(describe(self.outer))})"
