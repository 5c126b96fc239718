"""Colour validation surface: ask an engine whether a string is a colour and what it means.

A surface behaves like a 1x1 canvas:

    surface.reset()
    surface.fill_style = 'SteelBlue'   # invalid strings are ignored
    surface.fill_style                 # '#4682b4', or None if never accepted
    surface.fill_rect()
    surface.get_pixel()                # (70, 130, 180, 255)

PillowSurface is the default engine. It understands everything
PIL.ImageColor does (hex in 3/4/6/8 digit forms, hsv(), named colours)
plus the CSS functions rgb(), rgba(), hsl() and hsla() and the keyword
transparent. Function alphas are 0-1 or a percentage, and out-of-range
arguments are clamped as browsers do. Surrounding whitespace is ignored.
Translucent colours serialise to 'rgba(r, g, b, a)' with a 0-1 alpha,
opaque ones to lowercase '#rrggbb'.

The pixel is stored un-premultiplied but read back through Pillow's
premultiplied RGBa mode, so translucent channels come back with the same
precision loss a real canvas shows. That is why resolve_color only trusts
read-back channels for opaque colours.
"""

import logging
import re
from typing import Protocol

import numpy as np
from PIL import Image, ImageColor

from term_palette.core.color import round_half_up, to_rgba
from term_palette.core.types import Color

logger = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]

# rgb(), rgba(), hsl() and hsla() with an optional fourth (alpha) argument
_CSS_FUNCTION = re.compile(
    r'(rgba?|hsla?)\(\s*([-+.\d]+%?)\s*,\s*([-+.\d]+%?)\s*,\s*([-+.\d]+%?)\s*(?:,\s*([-+.\d]+%?)\s*)?\)$',
    re.IGNORECASE,
)


class ColorSurface(Protocol):
    """The host facility parse_color validates against."""

    @property
    def fill_style(self) -> str | None: ...

    @fill_style.setter
    def fill_style(self, spec: str) -> None: ...

    def reset(self) -> None: ...

    def fill_rect(self) -> None: ...

    def get_pixel(self) -> RGBA: ...


def _format_alpha(a: int) -> str:
    text = f'{a / 255:.3f}'.rstrip('0').rstrip('.')
    return text or '0'


def serialize(rgba: RGBA) -> str:
    """Canonical string for a channel tuple: '#rrggbb' if opaque, else 'rgba(r, g, b, a)'."""
    r, g, b, a = rgba
    if a == 0xFF:
        return f'#{r:02x}{g:02x}{b:02x}'
    return f'rgba({r}, {g}, {b}, {_format_alpha(a)})'


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _number(text: str, scale: float) -> float:
    """A number, or a percentage of scale. Raises ValueError."""
    if text.endswith('%'):
        return float(text[:-1]) * scale / 100
    return float(text)


def _percent(text: str) -> float:
    if not text.endswith('%'):
        raise ValueError(f'expected a percentage: {text}')
    return _clamp(float(text[:-1]), 0, 100)


def _parse_function(name: str, args: tuple[str, str, str], alpha: str | None) -> RGBA:
    """Channels for a CSS colour function. Out-of-range values are clamped. Raises ValueError."""
    a = 0xFF if alpha is None else round_half_up(_clamp(_number(alpha, 1), 0, 1) * 255)
    if name.startswith('rgb'):
        r, g, b = (round_half_up(_clamp(_number(t, 255), 0, 255)) for t in args)
    else:
        hue = float(args[0]) % 360
        r, g, b = ImageColor.getrgb(f'hsl({hue:.4f}, {_percent(args[1]):.4f}%, {_percent(args[2]):.4f}%)')
    return r, g, b, a


def _parse_spec(spec: str) -> RGBA | None:
    """Resolve a colour string to channels, or None if it is not a colour."""
    spec = spec.strip()
    if spec.lower() == 'transparent':
        return 0, 0, 0, 0
    try:
        m = _CSS_FUNCTION.match(spec)
        if m:
            return _parse_function(m.group(1).lower(), m.group(2, 3, 4), m.group(5))
        return tuple(ImageColor.getcolor(spec, 'RGBA'))
    except ValueError:
        return None


class PillowSurface:
    """1x1 Pillow image used as a colour validation oracle."""

    def __init__(self) -> None:
        self._image = Image.new('RGBA', (1, 1))
        self._fill: RGBA | None = None
        self._fill_style: str | None = None

    @property
    def fill_style(self) -> str | None:
        return self._fill_style

    @fill_style.setter
    def fill_style(self, spec: str) -> None:
        rgba = _parse_spec(spec)
        if rgba is None:
            # Unparseable values are ignored; the previous fill stays
            return
        self._fill = rgba
        self._fill_style = serialize(rgba)

    def reset(self) -> None:
        self._fill = None
        self._fill_style = None

    def fill_rect(self) -> None:
        self._image.putpixel((0, 0), self._fill or (0, 0, 0, 0))

    def get_pixel(self) -> RGBA:
        stored = self._image.convert('RGBa').convert('RGBA')
        px = np.asarray(stored)[0, 0]
        return int(px[0]), int(px[1]), int(px[2]), int(px[3])


def resolve_color(surface: ColorSurface, css: str, allow_transparency: bool) -> Color | None:
    """Resolve css to a Color through surface, or None if it is invalid or disallowed.

    Opaque results use the read-back pixel for rgba and the canonical string
    for css. Translucent results (when allowed) take their channels from the
    canonical string and keep the caller's original css text.
    """
    surface.reset()
    if isinstance(css, str):
        surface.fill_style = css
    canonical = surface.fill_style
    if not isinstance(canonical, str):
        logger.warning('Color: %s is invalid', css)
        return None

    surface.fill_rect()
    r, g, b, a = surface.get_pixel()

    if a != 0xFF:
        if not allow_transparency:
            # Premultiplied storage makes the channels of a translucent pixel
            # unreliable on their own, so the alpha cannot simply be dropped
            logger.warning('Color: %s is using transparency, but allowTransparency is false', css)
            return None

        cr, cg, cb, alpha = (float(c) for c in canonical[5:-1].split(','))
        return Color(css=css, rgba=to_rgba(int(cr), int(cg), int(cb), round_half_up(alpha * 255)))

    return Color(css=canonical, rgba=to_rgba(r, g, b, a))


def parse_color(surface: ColorSurface, css: str | None, fallback: Color, allow_transparency: bool) -> Color:
    """Resolve css to a Color, or return fallback. Never raises."""
    if css is None:
        return fallback
    color = resolve_color(surface, css, allow_transparency)
    if color is None:
        logger.debug('Color: using fallback %s for %s', fallback.css, css)
        return fallback
    return color
