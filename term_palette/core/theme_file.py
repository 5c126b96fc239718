"""Theme files: JSON objects mapping colour roles to colour strings.

Keys may be written the way terminal front-ends usually spell them
(camelCase: cursorAccent, brightBlack, extendedAnsi) or in snake_case.
Unknown keys and values of the wrong type are skipped with a warning, so a
theme written for a newer front-end still loads. Colour strings are not
validated here; ColorManager.set_theme does that.

Example:

    {
      "foreground": "#c5c8c6",
      "background": "#1d1f21",
      "selection": "rgba(255, 255, 255, 0.25)",
      "brightBlack": "#666666",
      "extendedAnsi": ["#000087", "#0000af"]
    }
"""

import json
import logging
import re
from dataclasses import fields

from term_palette.core.types import Theme

logger = logging.getLogger(__name__)

_FIELDS = {f.name for f in fields(Theme)}


class ThemeFileError(ValueError):
    """A theme file could not be read as a JSON object."""


def _snake_case(key: str) -> str:
    return re.sub(r'(?<!^)(?=[A-Z])', '_', key).lower()


def theme_from_dict(data: dict) -> Theme:
    """Build a Theme from a decoded JSON object."""
    values: dict = {}
    for key, value in data.items():
        name = _snake_case(key)
        if name not in _FIELDS:
            logger.warning('Theme: ignoring unknown key %r', key)
            continue
        if name == 'extended_ansi':
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                logger.warning('Theme: %r must be a list of colour strings, ignoring', key)
                continue
        elif not isinstance(value, str):
            logger.warning('Theme: %r must be a colour string, got %s, ignoring', key, type(value).__name__)
            continue
        values[name] = value
    return Theme(**values)


def parse_theme_string(text: str) -> Theme:
    """Parse a theme from JSON text."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ThemeFileError(f'Theme is not valid JSON: {e}') from e
    if not isinstance(data, dict):
        raise ThemeFileError(f'Theme must be a JSON object, got {type(data).__name__}')
    return theme_from_dict(data)


def load_theme_file(path: str) -> Theme:
    """Parse a theme file from disk."""
    try:
        with open(path, encoding='utf-8') as f:
            text = f.read()
    except OSError as e:
        raise ThemeFileError(f'Cannot read theme file {path}: {e.strerror}') from e
    return parse_theme_string(text)
