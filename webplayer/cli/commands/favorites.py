"""
Favorites Command - Manage saved favorites and watch status.

This module implements the favorites command group. Favorites are stored as
full records so they can be listed without contacting any upstream source.
"""

import logging
from typing import Optional

import typer
from pydantic import ValidationError

from webplayer.cli.context import get_favorites
from webplayer.core.exceptions import WebPlayerError
from webplayer.core.models import ContentType, FavoriteItem, WatchStatus
from webplayer.ui import (
    UIComponents,
    display_info,
    display_warning,
    get_console,
    handle_error,
)

# Create favorites command group
app = typer.Typer(
    name="favorites",
    help="⭐ Manage favorites and watch status",
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


def parse_watch_status(value: str) -> WatchStatus:
    """
    Parse a watch status from user input.

    Accepts the display value ("On Hold") or a slug ("on-hold", "on_hold"),
    case-insensitively.

    Raises:
        typer.BadParameter: If the value names no status
    """
    wanted = value.strip().lower().replace("-", " ").replace("_", " ")
    for status in WatchStatus:
        if wanted in (status.value.lower(), status.name.lower().replace("_", " ")):
            return status

    choices = ", ".join(status.value for status in WatchStatus)
    raise typer.BadParameter(f"Unknown watch status '{value}'. Choose from: {choices}")


@app.command(name="list")
def list_favorites() -> None:
    """📋 List saved favorites."""
    try:
        favorites = get_favorites().list()
    except WebPlayerError as e:
        handle_error(e, "While reading favorites")
        raise typer.Exit(1)

    if not favorites:
        display_info("No favorites saved yet.", "⭐ Favorites")
        return

    get_console().print(UIComponents().create_favorites_table(favorites))


@app.command(name="add")
def add_favorite(
    favorite_id: str = typer.Argument(..., help="Favorite identifier, e.g. anime_21"),
    title: str = typer.Argument(..., help="Display title"),
    image_url: Optional[str] = typer.Option(None, "--image", help="Poster image URL"),
    content_type: ContentType = typer.Option(ContentType.ANIME, "--type", "-t", help="Media kind"),
    mal_id: Optional[int] = typer.Option(None, "--mal-id", help="MyAnimeList id"),
    tmdb_id: Optional[int] = typer.Option(None, "--tmdb-id", help="TMDB id"),
    status: str = typer.Option(WatchStatus.PLAN_TO_WATCH.value, "--status", "-s", help="Watch status"),
) -> None:
    """
    ➕ Save a favorite.

    An existing favorite with the same id is replaced.

    Examples:

        webplayer favorites add anime_21 "One Piece" --mal-id 21 --status watching
    """
    watch_status = parse_watch_status(status)

    try:
        item = FavoriteItem(
            id=favorite_id,
            title=title,
            image_url=image_url,
            content_type=content_type,
            mal_id=mal_id,
            tmdb_id=tmdb_id,
            watch_status=watch_status,
        )
        get_favorites().add(item)
    except (ValidationError, WebPlayerError) as e:
        handle_error(e, "While saving favorite")
        raise typer.Exit(1)

    get_console().print(f"[success]⭐ Added[/success] {item}")


@app.command(name="remove")
def remove_favorite(
    favorite_id: str = typer.Argument(..., help="Favorite identifier"),
) -> None:
    """🗑️  Remove a favorite."""
    try:
        removed = get_favorites().remove(favorite_id)
    except WebPlayerError as e:
        handle_error(e, "While removing favorite")
        raise typer.Exit(1)

    if not removed:
        display_warning(f"No favorite with id '{favorite_id}'.", "⭐ Not Found")
        raise typer.Exit(1)

    get_console().print(f"[success]🗑️  Removed[/success] {favorite_id}")


@app.command(name="status")
def set_status(
    favorite_id: str = typer.Argument(..., help="Favorite identifier"),
    status: str = typer.Argument(..., help="Plan to Watch, Watching, Completed, On Hold or Dropped"),
) -> None:
    """🏷️  Change the watch status of a favorite."""
    watch_status = parse_watch_status(status)

    try:
        updated = get_favorites().update_status(favorite_id, watch_status)
    except WebPlayerError as e:
        handle_error(e, "While updating favorite")
        raise typer.Exit(1)

    if updated is None:
        display_warning(f"No favorite with id '{favorite_id}'.", "⭐ Not Found")
        raise typer.Exit(1)

    get_console().print(f"[success]🏷️  Updated[/success] {updated}")


__all__ = ["app", "parse_watch_status"]
