"""patternkit: flyweight caches and invertible decorator chains."""

from importlib.metadata import PackageNotFoundError, version

from patternkit.cache import CacheStats, FlyweightCache, LockedCache, MemoryCache
from patternkit.decorator import (
    BaseComponent,
    CompressionStage,
    DecoratorChain,
    EncryptionStage,
    Envelope,
    EnvelopeStage,
    MarkerStage,
    Stage,
    TransformStage,
    build,
    transform_pair,
)
from patternkit.errors import (
    ConfigurationError,
    TransformMismatchError,
    TransformMismatchWarning,
)
from patternkit.keys import digest_key, intrinsic_key, joined_key
from patternkit.protocol import IComponent

try:
    __version__ = version("patternkit")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

__all__ = [
    "BaseComponent",
    "CacheStats",
    "CompressionStage",
    "ConfigurationError",
    "DecoratorChain",
    "EncryptionStage",
    "Envelope",
    "EnvelopeStage",
    "FlyweightCache",
    "IComponent",
    "LockedCache",
    "MarkerStage",
    "MemoryCache",
    "Stage",
    "TransformMismatchError",
    "TransformMismatchWarning",
    "TransformStage",
    "build",
    "digest_key",
    "intrinsic_key",
    "joined_key",
    "transform_pair",
    "__version__",
]
