"""Colour arithmetic on packed 0xRRGGBBAA integers.

Pure functions only: packing and unpacking channels, CSS hex formatting,
alpha blending, opacity changes and WCAG contrast ratios.

Rounding follows the half-up convention (76.5 -> 77) rather than Python's
banker's rounding, so 0.3 opacity is always 0x4d.
"""

import math

from term_palette.core.types import Color


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _hex2(c: int) -> str:
    return f'{c:02x}'


def to_css(r: int, g: int, b: int, a: int | None = None) -> str:
    """Format channels as '#rrggbb', or '#rrggbbaa' when alpha is given."""
    if a is not None:
        return f'#{_hex2(r)}{_hex2(g)}{_hex2(b)}{_hex2(a)}'
    return f'#{_hex2(r)}{_hex2(g)}{_hex2(b)}'


def to_rgba(r: int, g: int, b: int, a: int = 0xFF) -> int:
    return ((r << 24) | (g << 16) | (b << 8) | a) & 0xFFFFFFFF


def to_channels(rgba: int) -> tuple[int, int, int, int]:
    return (rgba >> 24) & 0xFF, (rgba >> 16) & 0xFF, (rgba >> 8) & 0xFF, rgba & 0xFF


def css_to_color(css: str) -> Color:
    """Build a Color from a '#rrggbb' or '#rrggbbaa' literal."""
    if not css.startswith('#') or len(css) not in (7, 9):
        raise ValueError(f'css_to_color expects #rrggbb or #rrggbbaa, got {css!r}')
    r, g, b = int(css[1:3], 16), int(css[3:5], 16), int(css[5:7], 16)
    a = int(css[7:9], 16) if len(css) == 9 else 0xFF
    return Color(css=css, rgba=to_rgba(r, g, b, a))


def is_opaque(color: Color) -> bool:
    return (color.rgba & 0xFF) == 0xFF


def blend(bg: Color, fg: Color) -> Color:
    """Composite fg over bg using fg's alpha. The result is opaque."""
    a = (fg.rgba & 0xFF) / 255
    if a == 1:
        return Color(css=fg.css, rgba=fg.rgba)
    fg_r, fg_g, fg_b, _ = to_channels(fg.rgba)
    bg_r, bg_g, bg_b, _ = to_channels(bg.rgba)
    r = bg_r + round_half_up((fg_r - bg_r) * a)
    g = bg_g + round_half_up((fg_g - bg_g) * a)
    b = bg_b + round_half_up((fg_b - bg_b) * a)
    return Color(css=to_css(r, g, b), rgba=to_rgba(r, g, b))


def opacity(color: Color, alpha: float) -> Color:
    """Return color with its alpha channel replaced by alpha (0.0 - 1.0)."""
    a = round_half_up(alpha * 0xFF)
    r, g, b, _ = to_channels(color.rgba)
    return Color(css=to_css(r, g, b, a), rgba=to_rgba(r, g, b, a))


def relative_luminance(r: int, g: int, b: int) -> float:
    """WCAG 2.0 relative luminance of an sRGB colour."""

    def _linear(c: int) -> float:
        s = c / 255
        return s / 12.92 if s <= 0.03928 else ((s + 0.055) / 1.055) ** 2.4

    return _linear(r) * 0.2126 + _linear(g) * 0.7152 + _linear(b) * 0.0722


def rgba_luminance(rgba: int) -> float:
    r, g, b, _ = to_channels(rgba)
    return relative_luminance(r, g, b)


def contrast_ratio(l1: float, l2: float) -> float:
    """Contrast ratio between two luminances, always >= 1."""
    if l1 < l2:
        return (l2 + 0.05) / (l1 + 0.05)
    return (l1 + 0.05) / (l2 + 0.05)


def _reduce_luminance(bg_rgba: int, fg_rgba: int, ratio: float) -> int:
    fg_r, fg_g, fg_b, _ = to_channels(fg_rgba)
    bg_l = rgba_luminance(bg_rgba)
    cr = contrast_ratio(relative_luminance(fg_r, fg_g, fg_b), bg_l)
    while cr < ratio and (fg_r > 0 or fg_g > 0 or fg_b > 0):
        # Darken by 10% of the remaining distance to black
        fg_r -= max(0, math.ceil(fg_r * 0.1))
        fg_g -= max(0, math.ceil(fg_g * 0.1))
        fg_b -= max(0, math.ceil(fg_b * 0.1))
        cr = contrast_ratio(relative_luminance(fg_r, fg_g, fg_b), bg_l)
    return to_rgba(fg_r, fg_g, fg_b)


def _increase_luminance(bg_rgba: int, fg_rgba: int, ratio: float) -> int:
    fg_r, fg_g, fg_b, _ = to_channels(fg_rgba)
    bg_l = rgba_luminance(bg_rgba)
    cr = contrast_ratio(relative_luminance(fg_r, fg_g, fg_b), bg_l)
    while cr < ratio and (fg_r < 0xFF or fg_g < 0xFF or fg_b < 0xFF):
        # Lighten by 10% of the remaining distance to white
        fg_r = min(0xFF, fg_r + math.ceil((0xFF - fg_r) * 0.1))
        fg_g = min(0xFF, fg_g + math.ceil((0xFF - fg_g) * 0.1))
        fg_b = min(0xFF, fg_b + math.ceil((0xFF - fg_b) * 0.1))
        cr = contrast_ratio(relative_luminance(fg_r, fg_g, fg_b), bg_l)
    return to_rgba(fg_r, fg_g, fg_b)


def ensure_contrast_ratio(bg_rgba: int, fg_rgba: int, ratio: float) -> int | None:
    """Return an adjusted fg rgba that meets ratio against bg, or None if fg already does.

    Moves fg away from bg's luminance first; if that direction cannot reach
    the ratio, tries the other direction and keeps whichever got closer.
    """
    bg_l = rgba_luminance(bg_rgba)
    fg_l = rgba_luminance(fg_rgba)
    if contrast_ratio(bg_l, fg_l) >= ratio:
        return None

    if fg_l < bg_l:
        first, second = _reduce_luminance, _increase_luminance
    else:
        first, second = _increase_luminance, _reduce_luminance

    result_a = first(bg_rgba, fg_rgba, ratio)
    ratio_a = contrast_ratio(bg_l, rgba_luminance(result_a))
    if ratio_a >= ratio:
        return result_a
    result_b = second(bg_rgba, fg_rgba, ratio)
    ratio_b = contrast_ratio(bg_l, rgba_luminance(result_b))
    return result_a if ratio_a > ratio_b else result_b
