"""
Theme System - Color palettes for the terminal interface.

Each theme is a small palette that is expanded into a Rich ``Theme`` so
commands style output through semantic names (``title``, ``muted``,
``status.watching``) instead of raw colors.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from rich.theme import Theme


class ThemeName(str, Enum):
    """Available theme names."""
    DEFAULT = "default"
    DARK = "dark"
    LIGHT = "light"


@dataclass(frozen=True)
class ColorPalette:
    """Color palette definition for a theme."""

    primary: str
    secondary: str
    accent: str

    success: str
    warning: str
    error: str
    info: str

    text_muted: str
    border: str


_PALETTES: Dict[ThemeName, ColorPalette] = {
    ThemeName.DEFAULT: ColorPalette(
        primary="blue", secondary="cyan", accent="magenta",
        success="green", warning="yellow", error="red", info="blue",
        text_muted="dim white", border="blue",
    ),
    ThemeName.DARK: ColorPalette(
        primary="bright_blue", secondary="bright_cyan", accent="bright_magenta",
        success="bright_green", warning="bright_yellow", error="bright_red", info="bright_blue",
        text_muted="bright_black", border="grey37",
    ),
    ThemeName.LIGHT: ColorPalette(
        primary="navy_blue", secondary="dark_cyan", accent="dark_magenta",
        success="dark_green", warning="dark_orange", error="dark_red", info="navy_blue",
        text_muted="grey37", border="grey70",
    ),
}


class ThemeManager:
    """Tracks the active theme and builds Rich themes from palettes."""

    def __init__(self):
        self._current_theme = ThemeName.DEFAULT

    def get_palette(self, theme_name: Optional[ThemeName] = None) -> ColorPalette:
        """Palette of the given theme, or of the active one."""
        return _PALETTES.get(theme_name or self._current_theme, _PALETTES[ThemeName.DEFAULT])

    def set_theme(self, theme_name: ThemeName) -> None:
        if theme_name not in _PALETTES:
            raise ValueError(f"Unknown theme: {theme_name}")
        self._current_theme = theme_name

    def create_rich_theme(self, theme_name: Optional[ThemeName] = None) -> Theme:
        """
        Create a Rich Theme object from a color palette.

        Args:
            theme_name: Theme to create Rich theme for

        Returns:
            Rich Theme object
        """
        palette = self.get_palette(theme_name)

        styles = {
            "panel.border": palette.border,
            "table.header": f"bold {palette.secondary}",

            "success": palette.success,
            "warning": palette.warning,
            "error": palette.error,
            "info": palette.info,

            "primary": palette.primary,
            "secondary": palette.secondary,
            "accent": palette.accent,
            "muted": palette.text_muted,
            "title": f"bold {palette.primary}",
            "highlight": f"bold {palette.accent}",
            "link": f"underline {palette.primary}",

            # Watch status indicators
            "status.plan": palette.info,
            "status.watching": palette.success,
            "status.completed": palette.secondary,
            "status.hold": palette.warning,
            "status.dropped": palette.error,
        }

        return Theme(styles)


# Global theme manager instance
_theme_manager = ThemeManager()


def get_theme(theme_name: Optional[ThemeName] = None) -> Theme:
    """Get a Rich Theme object for the given or active theme."""
    return _theme_manager.create_rich_theme(theme_name)


def set_theme(theme_name: ThemeName) -> None:
    """Set the global theme."""
    _theme_manager.set_theme(theme_name)


# Export theme system components
__all__ = [
    "ThemeName",
    "ColorPalette",
    "ThemeManager",
    "get_theme",
    "set_theme",
]
