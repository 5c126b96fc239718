"""Registry of CLI commands.

A command is any public module in term_palette.commands that defines a
module-level `command` of type Command. The package is scanned with
pkgutil on first use and the result is kept for the process.
"""

import functools
import importlib
import pkgutil
from collections.abc import Iterable
from types import ModuleType

from term_palette import commands as commands_package
from term_palette.core.types import Command


def collect(modules: Iterable[ModuleType]) -> dict[str, Command]:
    """Commands defined by modules, keyed by name. Modules without one are skipped."""
    found: dict[str, Command] = {}
    for module in modules:
        cmd = getattr(module, 'command', None)
        if isinstance(cmd, Command):
            found[cmd.name] = cmd
    return found


def _command_modules() -> Iterable[ModuleType]:
    prefix = commands_package.__name__ + '.'
    for info in pkgutil.iter_modules(commands_package.__path__, prefix):
        if not info.name.removeprefix(prefix).startswith('_'):
            yield importlib.import_module(info.name)


@functools.cache
def all_commands() -> dict[str, Command]:
    """Every command in term_palette.commands, keyed by name."""
    return collect(_command_modules())


def get(name: str) -> Command:
    commands = all_commands()
    if name not in commands:
        raise KeyError(f'Unknown command: {name}. Available: {", ".join(sorted(commands))}')
    return commands[name]
