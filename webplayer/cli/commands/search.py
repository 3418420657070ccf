"""
Search Command - One-shot and live anime search.

This module implements the search command, which queries one upstream API
and renders a results table, and the live command, which feeds every line of
standard input to the debounced query coordinator and prints the accepted
suggestion lists.
"""

import asyncio
import logging
import sys
from typing import List, Optional

import typer
from rich.markup import escape

from webplayer.api.models import WeebSearchResult
from webplayer.cli.context import get_config_manager
from webplayer.cli.search_engine import SearchEngine, SearchResult
from webplayer.core.config_schemas import AppSettings
from webplayer.core.coordinator import DebouncedQueryCoordinator
from webplayer.core.exceptions import WebPlayerError
from webplayer.ui import (
    UIComponents,
    display_warning,
    get_console,
    handle_error,
    status_spinner,
)


logger = logging.getLogger(__name__)


async def _perform_search(settings: AppSettings, query: str, source: Optional[str]) -> List[SearchResult]:
    engine = SearchEngine(settings)
    try:
        engine.resolve_source(source)
        with status_spinner(f"Searching for '{query}'..."):
            return await engine.search(query, source)
    finally:
        await engine.close()


def run_search(query: str, source: Optional[str] = None) -> None:
    """
    Search one source and render the results.

    Args:
        query: Search query
        source: ``official`` or ``weeb``; defaults to the configured source
    """
    settings = get_config_manager().settings
    query = query.strip()

    min_query_length = settings.search.min_query_length
    if len(query) < min_query_length:
        display_warning(
            f"Search query must be at least {min_query_length} characters long.",
            "⚠️  Query Too Short"
        )
        raise typer.Exit(1)

    try:
        results = asyncio.run(_perform_search(settings, query, source))
    except WebPlayerError as e:
        handle_error(e, "During anime search")
        raise typer.Exit(1)

    if not results:
        display_warning(
            f"No results found for '{query}'.\n\n"
            "Try:\n"
            "• Different search terms or keywords\n"
            "• Another source with [cyan]--source[/cyan]",
            "🔍 No Results Found"
        )
        return

    ui = UIComponents()
    console = get_console()
    if isinstance(results[0], WeebSearchResult):
        console.print(ui.create_weeb_results_table(results))
    else:
        console.print(ui.create_anime_table(results))


def _print_suggestions(engine: SearchEngine, query: str, results: List[SearchResult]) -> None:
    console = get_console()
    titles = engine.suggestions(results)

    console.print(f"[highlight]🔎 {escape(query)}[/highlight]")
    if not titles:
        console.print("   [muted]no suggestions[/muted]")
    for i, title in enumerate(titles, 1):
        console.print(f"   [muted]{i}.[/muted] {escape(title)}")


async def _live_session(settings: AppSettings, source: Optional[str]) -> Optional[Exception]:
    engine = SearchEngine(settings)
    data_source = engine.resolve_source(source)

    async def search(query: str) -> List[SearchResult]:
        return await engine.search(query, data_source.value)

    coordinator = DebouncedQueryCoordinator(
        search,
        quiet_period=settings.search.quiet_period,
        on_results=lambda query, results: _print_suggestions(engine, query, results),
    )
    loop = asyncio.get_running_loop()

    try:
        while True:
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line:
                break
            coordinator.on_input(line.strip())

        await coordinator.wait_idle()
        return coordinator.error
    finally:
        await coordinator.close()
        await engine.close()


def run_live(source: Optional[str] = None) -> None:
    """
    Run a line-driven live search.

    Each line read from standard input replaces the current query. Searches
    are issued only after the configured quiet period and results of
    superseded queries are never printed.
    """
    settings = get_config_manager().settings

    try:
        error = asyncio.run(_live_session(settings, source))
    except WebPlayerError as e:
        handle_error(e, "During live search")
        raise typer.Exit(1)

    if error is not None:
        handle_error(error, "During live search")
        raise typer.Exit(1)


__all__ = ["run_search", "run_live"]
