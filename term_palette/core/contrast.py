"""Contrast cache and minimum-contrast foreground lookup.

Renderers ask for the foreground to paint for a given (background,
foreground) pair many times per frame, so adjusted colours are cached per
pair. Results depend on the minimum contrast ratio and on every themed
colour, which is why ColorManager clears the whole cache whenever either
changes.
"""

from term_palette.core.color import ensure_contrast_ratio, to_channels, to_css
from term_palette.core.types import Color, ColorSet


class ColorContrastCache:
    """Two caches keyed by (bg rgba, fg rgba): one of Colors, one of css strings."""

    def __init__(self) -> None:
        self._color: dict[tuple[int, int], Color] = {}
        self._css: dict[tuple[int, int], str] = {}

    def clear(self) -> None:
        self._color.clear()
        self._css.clear()

    def set_css(self, bg: int, fg: int, value: str) -> None:
        self._css[(bg, fg)] = value

    def get_css(self, bg: int, fg: int) -> str | None:
        return self._css.get((bg, fg))

    def set_color(self, bg: int, fg: int, value: Color) -> None:
        self._color[(bg, fg)] = value

    def get_color(self, bg: int, fg: int) -> Color | None:
        return self._color.get((bg, fg))

    def __len__(self) -> int:
        return len(self._color) + len(self._css)


def minimum_contrast_color(colors: ColorSet, bg: Color, fg: Color, ratio: float) -> Color:
    """Return fg, or the nearest colour to it that reaches ratio against bg.

    A ratio of 1 or less disables adjustment. Results are cached in
    colors.contrast_cache; a pair that already meets the ratio caches fg itself.
    """
    if ratio <= 1:
        return fg

    cache = colors.contrast_cache
    cached = cache.get_color(bg.rgba, fg.rgba)
    if cached is not None:
        return cached

    adjusted = ensure_contrast_ratio(bg.rgba, fg.rgba, ratio)
    if adjusted is None:
        result = fg
    else:
        r, g, b, _ = to_channels(adjusted)
        result = Color(css=to_css(r, g, b), rgba=adjusted)
    cache.set_color(bg.rgba, fg.rgba, result)
    cache.set_css(bg.rgba, fg.rgba, result.css)
    return result
