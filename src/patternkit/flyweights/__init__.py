"""Flyweight clients built on patternkit caches."""

from patternkit.flyweights.forest import Forest, Tree, TreeType, tree_type_key
from patternkit.flyweights.glyphs import CharacterGlyph, GlyphFactory, render_text

__all__ = [
    "CharacterGlyph",
    "Forest",
    "GlyphFactory",
    "Tree",
    "TreeType",
    "render_text",
    "tree_type_key",
]
