"""Contrast ratio between a foreground and background, and the adjusted foreground.

Prints the WCAG contrast ratio of FG on BG. If it is below the minimum
ratio, also prints the nearest foreground (lightened or darkened in 10%
steps) that meets it, the same adjustment a renderer applies when the
minimumContrastRatio option is set.

The ratio defaults to TERM_PALETTE_MINIMUM_CONTRAST_RATIO, or 4.5 (WCAG
AA for normal text) when that is unset. An explicit --ratio always wins;
--ratio 1 turns adjustment off.

Example:
    uv run term-palette contrast '#777777' '#000000'
    uv run term-palette contrast red black --ratio 7 --json
"""

import json
import sys

from term_palette.core.color import contrast_ratio, rgba_luminance
from term_palette.core.contrast import minimum_contrast_color
from term_palette.core.manager import ColorManager
from term_palette.core.report import color_to_dict
from term_palette.core.surface import resolve_color
from term_palette.core.types import Command

command = Command(
    name='contrast',
    help='Contrast ratio of a colour pair and the foreground adjusted to a minimum ratio.',
)

DEFAULT_RATIO = 4.5


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('fg', help='Foreground colour')
    parser.add_argument('bg', help='Background colour')
    parser.add_argument('-r', '--ratio', type=float, default=None, help='Minimum contrast ratio')
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')


def _ratio(fg_rgba: int, bg_rgba: int) -> float:
    return round(contrast_ratio(rgba_luminance(fg_rgba), rgba_luminance(bg_rgba)), 2)


@command.run
def run(manager: ColorManager, args) -> None:
    fg = resolve_color(manager.surface, args.fg, False)
    bg = resolve_color(manager.surface, args.bg, False)
    for name, value in (('fg', fg), ('bg', bg)):
        if value is None:
            print(f'Error: {name} must be an opaque colour: {getattr(args, name)}', file=sys.stderr)
            sys.exit(1)

    if args.ratio is not None:
        manager.on_options_change('minimumContrastRatio', args.ratio)
        ratio = args.ratio
    elif manager.minimum_contrast_ratio > 1:
        ratio = manager.minimum_contrast_ratio
    else:
        ratio = DEFAULT_RATIO

    adjusted = minimum_contrast_color(manager.colors, bg, fg, ratio)
    result = {
        'fg': color_to_dict(fg),
        'bg': color_to_dict(bg),
        'ratio': _ratio(fg.rgba, bg.rgba),
        'minimum': ratio,
        'adjusted': color_to_dict(adjusted),
        'adjusted_ratio': _ratio(adjusted.rgba, bg.rgba),
    }

    if args.json:
        print(json.dumps(result, indent=2))
        return
    mark = '✓' if result['ratio'] >= ratio else '✗'
    print(f'{fg.css} on {bg.css}: {result["ratio"]}:1 (minimum {ratio}:1) {mark}')
    if adjusted != fg:
        print(f'adjusted: {adjusted.css}  {result["adjusted_ratio"]}:1')
