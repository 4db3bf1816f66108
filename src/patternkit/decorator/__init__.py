"""Decorator chains: invertible stages composed around a base component."""

from patternkit.decorator.base import BaseComponent, Component, Stage
from patternkit.decorator.chain import (
    DecoratorChain,
    StageSpec,
    build,
    describe,
    innermost,
    layers,
    transform_pair,
)
from patternkit.decorator.envelope import Envelope, EnvelopeStage
from patternkit.decorator.stages import (
    CompressionStage,
    EncryptionStage,
    MarkerStage,
    TransformStage,
)

__all__ = [
    "BaseComponent",
    "Component",
    "CompressionStage",
    "DecoratorChain",
    "EncryptionStage",
    "Envelope",
    "EnvelopeStage",
    "MarkerStage",
    "Stage",
    "StageSpec",
    "TransformStage",
    "build",
    "describe",
    "innermost",
    "layers",
    "transform_pair",
]
