"""Shared types for term-palette: Color, ColorSet, Theme, ColorIndex, Command."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from term_palette.core.contrast import ColorContrastCache
    from term_palette.core.manager import ColorManager


@dataclass(frozen=True)
class Color:
    """An immutable colour: canonical CSS string plus packed 0xRRGGBBAA integer.

    Two colours are equal when their rgba values are equal. The css string is
    only a display form and may be formatted differently for the same value.
    """

    css: str = field(compare=False)
    rgba: int


class ColorIndex(IntEnum):
    """Restore slots for the structural colours, just past the 256 palette slots."""

    FOREGROUND = 256
    BACKGROUND = 257
    CURSOR = 258


@dataclass
class ColorSet:
    """The live colours of a terminal. Owned and mutated by ColorManager."""

    foreground: Color
    background: Color
    cursor: Color
    cursor_accent: Color
    selection_transparent: Color
    selection_opaque: Color
    ansi: list[Color]
    contrast_cache: ColorContrastCache
    selection_foreground: Color | None = None  # None: derive from contrast at render time


@dataclass
class Theme:
    """A (possibly partial) set of colour strings supplied by the host application."""

    foreground: str | None = None
    background: str | None = None
    cursor: str | None = None
    cursor_accent: str | None = None
    selection: str | None = None
    selection_foreground: str | None = None
    black: str | None = None
    red: str | None = None
    green: str | None = None
    yellow: str | None = None
    blue: str | None = None
    magenta: str | None = None
    cyan: str | None = None
    white: str | None = None
    bright_black: str | None = None
    bright_red: str | None = None
    bright_green: str | None = None
    bright_yellow: str | None = None
    bright_blue: str | None = None
    bright_magenta: str | None = None
    bright_cyan: str | None = None
    bright_white: str | None = None
    extended_ansi: list[str] | None = None  # palette slots 16 and up


class Command:
    """A self-registering CLI command.

    Usage in a command module:

        command = Command(name='palette', help='Print the 256-colour palette')

        @command.arguments
        def arguments(parser):
            parser.add_argument('--json', action='store_true')

        @command.run
        def run(manager, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None
        self._arguments_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def arguments(self, fn: Callable) -> Callable:
        """Decorator to register the function that adds this command's CLI arguments."""
        self._arguments_fn = fn
        return fn

    def configure(self, parser: Any) -> None:
        if self._arguments_fn is not None:
            self._arguments_fn(parser)

    def execute(self, manager: ColorManager, args: Any) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(manager, args)
