"""CLI commands, one per module.

Each public module defines a `command` object and documents itself in its
module docstring, which `term-palette help <command>` prints.
"""
