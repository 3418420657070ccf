"""
Scrape Command - Extract items from arbitrary pages.

This module implements the scrape and recent commands. Every scraped URL is
remembered in the recent URL list before the page is fetched.
"""

import asyncio
import logging
from typing import List
from urllib.parse import urlparse

import typer
from rich.markup import escape

from webplayer.cli.context import get_config_manager, get_recent_urls
from webplayer.core.config_schemas import NetworkSettings
from webplayer.core.exceptions import WebPlayerError
from webplayer.core.models import ScrapedItem
from webplayer.scrapers import ScrapePipeline, normalize_url
from webplayer.ui import (
    UIComponents,
    display_info,
    display_warning,
    get_console,
    handle_error,
    status_spinner,
)


logger = logging.getLogger(__name__)


async def _scrape(url: str, network: NetworkSettings) -> List[ScrapedItem]:
    async with ScrapePipeline(network=network) as pipeline:
        return await pipeline.scrape(url)


def run_scrape(url: str) -> None:
    """
    Scrape a page and render the extracted items.

    Args:
        url: Page URL as typed by the user
    """
    settings = get_config_manager().settings
    console = get_console()

    try:
        normalized = normalize_url(url)
        get_recent_urls().add(normalized)

        with status_spinner(f"Scraping {normalized}..."):
            items = asyncio.run(_scrape(normalized, settings.network))

    except WebPlayerError as e:
        handle_error(e, "While scraping page")
        raise typer.Exit(1)

    if not items:
        display_warning(
            f"No items found on {normalized}.\n\n"
            "The page may load its content with JavaScript, or its layout is\n"
            "not recognized by any extraction strategy.",
            "🕸️  No Items Found"
        )
        return

    host = urlparse(normalized).hostname or ""
    console.print(UIComponents().create_scraped_items_table(items, host))
    console.print(f"\n[muted]{len(items)} items[/muted]")


def show_recent(clear: bool = False) -> None:
    """List recently scraped URLs, most recent first."""
    recent = get_recent_urls()

    if clear:
        recent.clear()
        display_info("Recent URL history cleared.", "🧹 Cleared")
        return

    urls = recent.urls
    if not urls:
        display_info("No recent URLs yet. Try [cyan]webplayer scrape <url>[/cyan].", "🕘 Recent URLs")
        return

    console = get_console()
    for i, url in enumerate(urls, 1):
        console.print(f"[muted]{i:>2}.[/muted] [link]{escape(url)}[/link]")


__all__ = ["run_scrape", "show_recent"]
