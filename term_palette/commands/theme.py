"""Apply a theme file and print the resulting colour set.

Reads a JSON theme (see term_palette.core.theme_file for the format),
applies it with the same rules a terminal uses: invalid colours fall back
to the built-in default for their role, opaque selection colours are
forced to 30% opacity, and extendedAnsi fills palette slots 16 and up.

Without FILE, uses TERM_PALETTE_THEME. Without either, prints the
built-in defaults.

Example:
    uv run term-palette theme themes/tomorrow-night.json
    uv run term-palette theme themes/tomorrow-night.json --json
"""

import logging

from term_palette.core.manager import ColorManager
from term_palette.core.report import format_json, format_text
from term_palette.core.theme_file import load_theme_file
from term_palette.core.types import Command

logger = logging.getLogger(__name__)

command = Command(
    name='theme',
    help='Apply a theme file and print the resulting colour set.',
)


def apply_theme(manager: ColorManager, path: str | None) -> None:
    """Load path (if any) and apply it to manager. Raises ThemeFileError for unreadable files."""
    if not path:
        return
    logger.info('Applying theme %s', path)
    manager.set_theme(load_theme_file(path))


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('file', nargs='?', help='Theme JSON file (default: $TERM_PALETTE_THEME)')
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')


@command.run
def run(manager: ColorManager, args) -> None:
    apply_theme(manager, args.file or args.settings.theme)
    if args.json:
        print(format_json(manager.colors))
    else:
        print(format_text(manager.colors))
