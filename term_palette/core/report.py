"""Report builder — text and JSON output for colour sets and palettes."""

import json
from typing import Any

from term_palette.core.palette import ANSI_ROLE_NAMES
from term_palette.core.types import Color, ColorSet

STRUCTURAL_ROLES = (
    'foreground',
    'background',
    'cursor',
    'cursor_accent',
    'selection_transparent',
    'selection_opaque',
    'selection_foreground',
)


def color_to_dict(color: Color) -> dict[str, str]:
    return {'css': color.css, 'rgba': f'0x{color.rgba:08x}'}


def _line(label: str, color: Color | None) -> str:
    if color is None:
        return f'  {label:<22} (derived)'
    return f'  {label:<22} {color.css:<28} 0x{color.rgba:08x}'


def format_palette_text(ansi: list[Color], per_row: int = 6) -> str:
    """Slots 16 and up as a grid, six per row so each cube row lines up."""
    lines = []
    for start in range(16, len(ansi), per_row):
        row = ansi[start : start + per_row]
        cells = ' '.join(f'{c.rgba >> 8:06x}' for c in row)
        lines.append(f'  {start:>3}: {cells}')
    return '\n'.join(lines)


def format_text(colors: ColorSet) -> str:
    """Format a colour set as human-readable text."""
    lines = ['── roles']
    for role in STRUCTURAL_ROLES:
        lines.append(_line(role, getattr(colors, role)))

    lines.append('')
    lines.append('── ansi 0-15')
    for i, role in enumerate(ANSI_ROLE_NAMES):
        lines.append(_line(f'{i:>2} {role}', colors.ansi[i]))

    lines.append('')
    lines.append(f'── ansi 16-{len(colors.ansi) - 1}')
    lines.append(format_palette_text(colors.ansi))
    return '\n'.join(lines)


def format_json(colors: ColorSet) -> str:
    """Format a colour set as JSON."""
    obj: dict[str, Any] = {}
    for role in STRUCTURAL_ROLES:
        color = getattr(colors, role)
        obj[role] = color_to_dict(color) if color is not None else None
    obj['ansi'] = [color_to_dict(c) for c in colors.ansi]
    return json.dumps(obj, indent=2)
