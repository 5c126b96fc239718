"""Built-in colours: role defaults and the 256-entry ANSI palette.

Palette layout (indices are what SGR 38;5;N / 48;5;N address):

    0-15     the sixteen base colours (Tango), 8 dark then 8 bright
    16-231   6x6x6 colour cube, red major, blue minor
    232-255  24-step greyscale ramp, 8 to 238 in steps of 10

DEFAULT_ANSI_COLORS is computed once at import and is a tuple, so callers
can copy it into a list but never mutate the shared instance.
"""

import numpy as np

from term_palette.core.color import css_to_color, to_css, to_rgba
from term_palette.core.types import Color

DEFAULT_FOREGROUND = css_to_color('#ffffff')
DEFAULT_BACKGROUND = css_to_color('#000000')
DEFAULT_CURSOR = css_to_color('#ffffff')
DEFAULT_CURSOR_ACCENT = css_to_color('#000000')
DEFAULT_SELECTION = Color(css='rgba(255, 255, 255, 0.3)', rgba=0xFFFFFF4D)

# Theme field names for palette slots 0-15, in slot order
ANSI_ROLE_NAMES = (
    'black',
    'red',
    'green',
    'yellow',
    'blue',
    'magenta',
    'cyan',
    'white',
    'bright_black',
    'bright_red',
    'bright_green',
    'bright_yellow',
    'bright_blue',
    'bright_magenta',
    'bright_cyan',
    'bright_white',
)

BASE_COLORS = (
    # dark
    '#2e3436',
    '#cc0000',
    '#4e9a06',
    '#c4a000',
    '#3465a4',
    '#75507b',
    '#06989a',
    '#d3d7cf',
    # bright
    '#555753',
    '#ef2929',
    '#8ae234',
    '#fce94f',
    '#729fcf',
    '#ad7fa8',
    '#34e2e2',
    '#eeeeec',
)

CUBE_STEPS = np.array([0x00, 0x5F, 0x87, 0xAF, 0xD7, 0xFF])


def _cube_channels() -> np.ndarray:
    """(216, 3) array of r, g, b for the colour cube."""
    i = np.arange(216)
    return np.stack([CUBE_STEPS[(i // 36) % 6], CUBE_STEPS[(i // 6) % 6], CUBE_STEPS[i % 6]], axis=1)


def _grey_levels() -> np.ndarray:
    return 8 + np.arange(24) * 10


def generate_default_palette() -> tuple[Color, ...]:
    """Build the 256-entry default palette. Pure: every call returns equal values."""
    colors = [css_to_color(css) for css in BASE_COLORS]

    for r, g, b in _cube_channels().tolist():
        colors.append(Color(css=to_css(r, g, b), rgba=to_rgba(r, g, b)))

    for c in _grey_levels().tolist():
        colors.append(Color(css=to_css(c, c, c), rgba=to_rgba(c, c, c)))

    return tuple(colors)


DEFAULT_ANSI_COLORS = generate_default_palette()
