"""term-palette — inspect a terminal colour model: palette, themes, colour parsing, contrast.

Usage: uv run term-palette <command> [options]

Commands are auto-discovered from term_palette/commands/.
Each command module's docstring is its documentation.
Run `term-palette help <command>` for full module docs.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, term-palette looks for a .env file starting from
  the current directory and walking up, stopping at the nearest .git boundary.
  Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import logging
import sys

from term_palette import registry
from term_palette.core.env import load_settings
from term_palette.core.manager import ColorManager, SurfaceUnavailableError
from term_palette.core.theme_file import ThemeFileError


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'term_palette.commands.{name}')


def _short_help(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  term-palette palette --swatch\n'
        '  term-palette theme themes/tomorrow-night.json --json\n'
        "  term-palette parse '#ff000080' --allow-transparency\n"
        "  term-palette contrast '#777777' '#000000' --ratio 4.5\n"
        '  term-palette help theme\n'
        '\n'
        'Settings (set in .env or environment):\n'
        '  TERM_PALETTE_ALLOW_TRANSPARENCY      true/false\n'
        '  TERM_PALETTE_MINIMUM_CONTRAST_RATIO  e.g. 4.5\n'
        '  TERM_PALETTE_THEME                   default theme file\n'
        '  TERM_PALETTE_LOG_LEVEL               DEBUG, INFO, WARNING, ...\n'
    )
    parser = argparse.ArgumentParser(
        prog='term-palette',
        description='Inspect a terminal colour model: palette, themes, colour parsing, contrast.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        default=None,
        help='Logging level (default: $TERM_PALETTE_LOG_LEVEL or WARNING)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_help(name, cmd.help))
        cmd.configure(p)

    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_help(name, cmd.help)}')
        print('\nRun: term-palette help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_command_module(topic).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {topic!r})')
        return
    print(doc)


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Load .env before anything else; OS env vars always win
    settings = load_settings(env_file=args.env_file)
    level = (args.log_level or settings.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        parser.error(f'unknown log level: {args.log_level}')
    logging.basicConfig(
        level=level,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )
    args.settings = settings

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(args.topic)
        return

    try:
        manager = ColorManager(allow_transparency=settings.allow_transparency)
    except SurfaceUnavailableError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)
    manager.on_options_change('minimumContrastRatio', settings.minimum_contrast_ratio)

    cmd = registry.get(args.command)
    try:
        cmd.execute(manager, args)
    except ThemeFileError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
