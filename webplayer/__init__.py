"""
WebPlayer - Media discovery client for anime and movie sources.

A command-line tool that searches upstream anime APIs, resolves playable
stream links from inconsistent JSON payloads and scrapes listing pages of
arbitrary sites, built on aiohttp, BeautifulSoup, Typer and Rich.
"""

__version__ = "0.1.0"
__author__ = "WebPlayer Team"

# Package metadata
__title__ = "webplayer"
__description__ = "Media discovery client for anime and movie sources"
__license__ = "MIT"

# Version info tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split(".")))

# Export main components for easy importing
from webplayer.core.models import FavoriteItem, ScrapedItem, StreamLink
from webplayer.cli.main import cli_main

__all__ = [
    "__version__",
    "__author__",
    "FavoriteItem",
    "ScrapedItem",
    "StreamLink",
    "cli_main",
]
