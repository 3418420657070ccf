"""
Anime Commands - Browse the HiAnime and Weeb APIs.

This module implements the home, details, episodes, servers and stream
commands. Stream links are resolved through the tolerant stream decoder, so
every payload layout the server is known to send yields the same file URL.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

import typer
from rich.markup import escape

from webplayer.cli.context import get_config_manager
from webplayer.cli.search_engine import SearchEngine
from webplayer.core.exceptions import WebPlayerError
from webplayer.core.models import DataSource
from webplayer.ui import (
    UIComponents,
    display_warning,
    get_console,
    handle_error,
    status_spinner,
)


logger = logging.getLogger(__name__)

R = TypeVar("R")

HOME_SECTION_LIMIT = 10


def _run(action: Callable[[SearchEngine], Awaitable[R]], message: str, context: str) -> R:
    """Run one API call with a spinner, rendering WebPlayer errors as panels."""
    settings = get_config_manager().settings

    async def runner() -> Any:
        engine = SearchEngine(settings)
        try:
            with status_spinner(message):
                return await action(engine)
        finally:
            await engine.close()

    try:
        return asyncio.run(runner())
    except WebPlayerError as e:
        handle_error(e, context)
        raise typer.Exit(1)


def show_home() -> None:
    """Render the spotlight and card sections of the home page."""
    home = _run(lambda engine: engine.hianime.get_home(), "Loading home page...", "While loading home page")
    console = get_console()
    ui = UIComponents()

    for spotlight in home.spotlight:
        console.print(f"[highlight]#{spotlight.rank}[/highlight] [title]{escape(spotlight.title)}[/title] "
                      f"[muted]({escape(spotlight.id)})[/muted]")

    for title, cards in home.sections().items():
        if cards:
            console.print(ui.create_anime_table(cards[:HOME_SECTION_LIMIT], title=title))


def show_details(anime_id: str, source: Optional[str] = None) -> None:
    """
    Render full details of one anime.

    Args:
        anime_id: HiAnime id, or Weeb site link when the source is weeb
        source: ``official`` or ``weeb``
    """
    settings = get_config_manager().settings
    ui = UIComponents()
    console = get_console()

    try:
        data_source = SearchEngine(settings).resolve_source(source)
    except WebPlayerError as e:
        handle_error(e, "While loading details")
        raise typer.Exit(1)

    if data_source is DataSource.WEEB:
        data = _run(lambda engine: engine.weeb.get_full_data(anime_id), "Loading details...", "While loading details")
        console.print(ui.create_weeb_details_panel(data))
        return

    details = _run(lambda engine: engine.hianime.get_details(anime_id), "Loading details...", "While loading details")
    console.print(ui.create_details_panel(details))


def show_episodes(anime_id: str) -> None:
    episodes = _run(
        lambda engine: engine.hianime.get_episodes(anime_id),
        "Loading episodes...",
        "While loading episodes"
    )

    if not episodes:
        display_warning(f"No episodes listed for '{anime_id}'.", "📺 No Episodes")
        return

    get_console().print(UIComponents().create_episodes_table(episodes))


def show_servers(episode_id: str) -> None:
    servers = _run(
        lambda engine: engine.hianime.get_servers(episode_id),
        "Loading servers...",
        "While loading servers"
    )

    if not servers.sub and not servers.dub:
        display_warning(f"No servers available for '{episode_id}'.", "🖥️  No Servers")
        return

    get_console().print(UIComponents().create_servers_table(servers))


def resolve_stream(episode_id: str, server: str, server_type: str) -> None:
    """
    Resolve and print the playable file URL of an episode.

    The URL is printed on its own line so it can be piped to a player.
    """
    link = _run(
        lambda engine: engine.hianime.get_stream_link(episode_id, server, server_type),
        "Resolving stream...",
        "While resolving stream link"
    )
    get_console().print(link.file, markup=False, highlight=False, soft_wrap=True)


__all__ = [
    "show_home",
    "show_details",
    "show_episodes",
    "show_servers",
    "resolve_stream",
]
