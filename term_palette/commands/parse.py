"""Run one colour string through the validation surface.

Shows what a theme entry would resolve to: the canonical css string and
the packed rgba value, or the fallback when the string is not a colour or
is translucent while transparency is disallowed.

Accepted syntax is whatever the surface understands: #rgb, #rgba,
#rrggbb, #rrggbbaa, rgb(), rgba() with a 0-1 alpha, hsl(), hsv() and
named colours.

Example:
    uv run term-palette parse SteelBlue
    uv run term-palette parse '#ff000080' --allow-transparency --json
"""

import json
import sys

from term_palette.core.manager import ColorManager
from term_palette.core.report import color_to_dict
from term_palette.core.surface import parse_color, resolve_color
from term_palette.core.types import Command

command = Command(
    name='parse',
    help='Validate and normalise a single colour string.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('spec', help='Colour string, e.g. "#336699" or "rgba(0, 0, 0, 0.5)"')
    parser.add_argument('-f', '--fallback', default='#000000', help='Colour used when spec is rejected')
    parser.add_argument(
        '-a',
        '--allow-transparency',
        action='store_true',
        default=None,
        help='Accept translucent colours (default: $TERM_PALETTE_ALLOW_TRANSPARENCY)',
    )
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')


@command.run
def run(manager: ColorManager, args) -> None:
    fallback = resolve_color(manager.surface, args.fallback, True)
    if fallback is None:
        print(f'Error: fallback is not a colour: {args.fallback}', file=sys.stderr)
        sys.exit(1)

    allow = manager.allow_transparency if args.allow_transparency is None else args.allow_transparency
    color = parse_color(manager.surface, args.spec, fallback, allow)
    used_fallback = color is fallback

    if args.json:
        print(json.dumps({'input': args.spec, **color_to_dict(color), 'fallback': used_fallback}, indent=2))
        return
    note = '  (fallback)' if used_fallback else ''
    print(f'{args.spec} -> {color.css}  0x{color.rgba:08x}{note}')
