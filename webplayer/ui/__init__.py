"""
UI Layer - Themes, console and Rich components.

This module contains the theme management, the shared console and the Rich
tables and panels that give every CLI command the same look.
"""

from webplayer.ui.components import UIComponents
from webplayer.ui.themes import ThemeManager, ThemeName, get_theme, set_theme
from webplayer.ui.error_handler import ErrorHandler, handle_error, display_warning, display_info
from webplayer.ui.progress import status_spinner
from webplayer.ui.console import get_console, setup_console, update_console_theme

__all__ = [
    # Core UI Components
    "UIComponents",
    # Theme System
    "ThemeManager",
    "ThemeName",
    "get_theme",
    "set_theme",
    # Error Handling
    "ErrorHandler",
    "handle_error",
    "display_warning",
    "display_info",
    # Progress
    "status_spinner",
    # Console Management
    "get_console",
    "setup_console",
    "update_console_theme",
]
