"""term-palette — the source of truth for a terminal's colours."""

__version__ = '0.1.0'
