"""Text rendering with shared character glyphs."""

from dataclasses import dataclass

from patternkit.cache.base import FlyweightCache
from patternkit.cache.memory import MemoryCache


@dataclass(frozen=True)
class CharacterGlyph:
    """Flyweight holding a single symbol; position is passed in on draw."""

    symbol: str

    def draw(self, row: int, column: int) -> str:
        return f"Drawing '{self.symbol}' at ({row},{column})"


class GlyphFactory:
    """Hands out one shared CharacterGlyph per symbol."""

    def __init__(self, cache: FlyweightCache | None = None) -> None:
        self.cache = cache if cache is not None else MemoryCache()

    def get_glyph(self, symbol: str) -> CharacterGlyph:
        """Return the shared glyph for a single-character symbol.

        Raises:
            ValueError: If symbol is not exactly one character.
        """
        if len(symbol) != 1:
            raise ValueError(f"A glyph holds exactly one character, got {symbol!r}")
        return self.cache.get_or_create(symbol, lambda: CharacterGlyph(symbol))


def render_text(
    text: str, row: int = 0, factory: GlyphFactory | None = None
) -> list[str]:
    """Draw each non-space character of text on one row.

    Spaces advance the column but are not drawn.

    Args:
        text: The text to render.
        row: Row passed to every glyph as extrinsic state.
        factory: Glyph factory to draw from; a fresh one when omitted.

    Returns:
        One rendered line per drawn character.
    """
    factory = factory if factory is not None else GlyphFactory()
    return [
        factory.get_glyph(char).draw(row, column)
        for column, char in enumerate(text)
        if char != " "
    ]
