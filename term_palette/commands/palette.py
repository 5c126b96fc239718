"""Print the 256-entry ANSI palette.

Slots 0-15 are the base colours, 16-231 the 6x6x6 colour cube and
232-255 the greyscale ramp. With --theme, the theme is applied first, so
the output shows what SGR 38;5;N would paint with that theme.

--swatch adds a block painted with the terminal's own colour N next to
each entry, handy for comparing the computed value with what the
terminal actually shows.

Example:
    uv run term-palette palette
    uv run term-palette palette --theme themes/solarized.json --json
"""

import json

from term_palette.commands.theme import apply_theme
from term_palette.core.manager import ColorManager
from term_palette.core.report import color_to_dict
from term_palette.core.types import Command

command = Command(
    name='palette',
    help='Print the 256-entry ANSI palette, optionally after applying a theme.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('-t', '--theme', help='Theme JSON file to apply first (default: $TERM_PALETTE_THEME)')
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')
    parser.add_argument('-s', '--swatch', action='store_true', help='Show a colour block using SGR 48;5;N')


@command.run
def run(manager: ColorManager, args) -> None:
    apply_theme(manager, args.theme or args.settings.theme)
    ansi = manager.colors.ansi

    if args.json:
        print(json.dumps([{'index': i, **color_to_dict(c)} for i, c in enumerate(ansi)], indent=2))
        return

    for i, c in enumerate(ansi):
        swatch = f' \x1b[48;5;{i}m    \x1b[0m' if args.swatch else ''
        print(f'{i:>3}  {c.css:<9} 0x{c.rgba:08x}{swatch}')
