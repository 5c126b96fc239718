"""ColorManager — the source of truth for a terminal's colours.

Owns the live ColorSet, applies themes through the validation surface,
keeps a snapshot of the last applied theme for restore requests, and
clears the contrast cache whenever themed colours or the minimum contrast
ratio change.

Not thread-safe: the colour set and snapshot are mutated in place.
"""

import logging
from collections.abc import Callable

from term_palette.core.color import blend, is_opaque, opacity
from term_palette.core.contrast import ColorContrastCache
from term_palette.core.palette import (
    ANSI_ROLE_NAMES,
    DEFAULT_ANSI_COLORS,
    DEFAULT_BACKGROUND,
    DEFAULT_CURSOR,
    DEFAULT_CURSOR_ACCENT,
    DEFAULT_FOREGROUND,
    DEFAULT_SELECTION,
)
from term_palette.core.surface import ColorSurface, PillowSurface, parse_color, resolve_color
from term_palette.core.types import Color, ColorIndex, ColorSet, Theme

logger = logging.getLogger(__name__)

# Opaque selection colours are forced to this alpha so text stays visible
SELECTION_OPACITY = 0.3


class SurfaceUnavailableError(RuntimeError):
    """The host could not provide a colour validation surface."""


class ColorManager:
    """Manages the source of truth for a terminal's colours."""

    def __init__(
        self,
        allow_transparency: bool = False,
        surface_factory: Callable[[], ColorSurface | None] = PillowSurface,
        contrast_cache: ColorContrastCache | None = None,
    ):
        try:
            surface = surface_factory()
        except Exception as e:
            raise SurfaceUnavailableError(f'Could not get rendering context: {e}') from e
        if surface is None:
            raise SurfaceUnavailableError('Could not get rendering context')
        self._surface = surface

        self.allow_transparency = allow_transparency
        self.minimum_contrast_ratio: float = 1
        self._contrast_cache = contrast_cache if contrast_cache is not None else ColorContrastCache()
        self.colors = ColorSet(
            foreground=DEFAULT_FOREGROUND,
            background=DEFAULT_BACKGROUND,
            cursor=DEFAULT_CURSOR,
            cursor_accent=DEFAULT_CURSOR_ACCENT,
            selection_transparent=DEFAULT_SELECTION,
            selection_opaque=blend(DEFAULT_BACKGROUND, DEFAULT_SELECTION),
            selection_foreground=None,
            ansi=list(DEFAULT_ANSI_COLORS),
            contrast_cache=self._contrast_cache,
        )
        self._update_restore_colors()

    @property
    def surface(self) -> ColorSurface:
        """The validation surface colour strings are resolved against."""
        return self._surface

    def on_options_change(self, key: str, value: object) -> None:
        """React to a terminal option change. Unknown keys are ignored."""
        if key == 'minimumContrastRatio':
            self._contrast_cache.clear()
            try:
                self.minimum_contrast_ratio = float(value)
            except (TypeError, ValueError):
                logger.warning('minimumContrastRatio %r is not a number, keeping %s', value, self.minimum_contrast_ratio)
        elif key == 'allowTransparency':
            self.allow_transparency = bool(value)
        else:
            logger.debug('Ignoring option %s', key)

    def set_theme(self, theme: Theme | None = None) -> None:
        """Set the terminal's theme.

        Fields missing from a partial theme fall back to the built-in
        defaults. Invalid colour strings are logged and replaced by the
        default for their role; this never raises. Every field is resolved
        before any is written to the live colour set.
        """
        theme = theme or Theme()

        foreground = self._parse_color(theme.foreground, DEFAULT_FOREGROUND)
        background = self._parse_color(theme.background, DEFAULT_BACKGROUND)
        cursor = self._parse_color(theme.cursor, DEFAULT_CURSOR, True)
        cursor_accent = self._parse_color(theme.cursor_accent, DEFAULT_CURSOR_ACCENT, True)
        selection = self._parse_color(theme.selection, DEFAULT_SELECTION, True)
        selection_opaque = blend(background, selection)

        selection_foreground = None
        if theme.selection_foreground:
            selection_foreground = resolve_color(self._surface, theme.selection_foreground, self.allow_transparency)

        if is_opaque(selection):
            selection = opacity(selection, SELECTION_OPACITY)

        ansi = list(self.colors.ansi)
        for i, role in enumerate(ANSI_ROLE_NAMES):
            ansi[i] = self._parse_color(getattr(theme, role), DEFAULT_ANSI_COLORS[i])
        if theme.extended_ansi is not None:
            self._resolve_extended_ansi(ansi, theme.extended_ansi)

        colors = self.colors
        colors.foreground = foreground
        colors.background = background
        colors.cursor = cursor
        colors.cursor_accent = cursor_accent
        colors.selection_transparent = selection
        colors.selection_opaque = selection_opaque
        colors.selection_foreground = selection_foreground
        colors.ansi[:] = ansi

        self._contrast_cache.clear()
        self._update_restore_colors()

    def restore_color(self, slot: int | None = None) -> None:
        """Restore colours from the last applied theme.

        No slot restores all 256 palette entries. ColorIndex slots restore
        foreground, background or cursor. 0-255 restores one palette entry.
        Anything else raises IndexError.
        """
        restore = self._restore_colors
        if slot is None:
            for i, c in enumerate(restore['ansi']):
                self.colors.ansi[i] = c
            return

        if slot == ColorIndex.FOREGROUND:
            self.colors.foreground = restore['foreground']
        elif slot == ColorIndex.BACKGROUND:
            self.colors.background = restore['background']
        elif slot == ColorIndex.CURSOR:
            self.colors.cursor = restore['cursor']
        elif 0 <= slot < len(restore['ansi']):
            self.colors.ansi[slot] = restore['ansi'][slot]
        else:
            raise IndexError(f'No colour slot {slot}')

    def _resolve_extended_ansi(self, ansi: list[Color], extended: list[str]) -> None:
        palette_size = len(DEFAULT_ANSI_COLORS)
        if len(extended) + 16 > palette_size:
            logger.warning(
                'Theme has %d extended ANSI colors; only the first %d fit the palette',
                len(extended),
                palette_size - 16,
            )
        for i in range(16, palette_size):
            css = extended[i - 16] if i - 16 < len(extended) else None
            ansi[i] = self._parse_color(css, DEFAULT_ANSI_COLORS[i])

    def _update_restore_colors(self) -> None:
        self._restore_colors = {
            'foreground': self.colors.foreground,
            'background': self.colors.background,
            'cursor': self.colors.cursor,
            'ansi': tuple(self.colors.ansi),
        }

    def _parse_color(self, css: str | None, fallback: Color, allow_transparency: bool | None = None) -> Color:
        if allow_transparency is None:
            allow_transparency = self.allow_transparency
        return parse_color(self._surface, css, fallback, allow_transparency)
