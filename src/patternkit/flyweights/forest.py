"""Forest: many trees sharing a few TreeType flyweights.

TreeType carries the intrinsic state (name, color) and is shared through a
flyweight cache keyed on ``name + "_" + color``. Tree carries the extrinsic
state (x, y) and is created per planting.
"""

import logging
from dataclasses import dataclass

from patternkit.cache.base import FlyweightCache
from patternkit.cache.memory import MemoryCache
from patternkit.keys import joined_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeType:
    """Shared intrinsic state of a tree."""

    name: str
    color: str

    def draw(self, x: int, y: int) -> str:
        """Render this tree type at a caller-supplied position."""
        return f"Tree drawn at ({x},{y}) - {self.name} with color {self.color}."


@dataclass(frozen=True)
class Tree:
    """Extrinsic state (position) plus a reference to a shared TreeType."""

    x: int
    y: int
    type: TreeType

    def draw(self) -> str:
        return self.type.draw(self.x, self.y)


def tree_type_key(name: str, color: str) -> str:
    """Cache key for a tree type: ``name + "_" + color``."""
    return joined_key(name, color)


class Forest:
    """A collection of trees whose types come from a flyweight cache."""

    def __init__(self, cache: FlyweightCache | None = None) -> None:
        """Initialize an empty forest.

        Args:
            cache: Flyweight cache for tree types. A private MemoryCache is
                created when omitted.
        """
        self.cache = cache if cache is not None else MemoryCache()
        self.trees: list[Tree] = []

    def get_tree_type(self, name: str, color: str) -> TreeType:
        return self.cache.get_or_create(
            tree_type_key(name, color), lambda: TreeType(name, color)
        )

    def plant_tree(self, x: int, y: int, name: str, color: str) -> Tree:
        """Plant a tree at (x, y), reusing the shared type for (name, color)."""
        tree = Tree(x, y, self.get_tree_type(name, color))
        self.trees.append(tree)
        return tree

    @property
    def tree_types(self) -> int:
        """Number of distinct tree types shared by this forest's cache."""
        return self.cache.size()

    def draw(self) -> list[str]:
        lines = [tree.draw() for tree in self.trees]
        logger.debug("Drew %d trees using %d tree types", len(lines), self.tree_types)
        return lines
