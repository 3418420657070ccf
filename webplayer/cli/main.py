"""
CLI Main Application - Typer app entry point.

This module provides the main CLI application entry point: global options,
logging and theme setup, configuration loading and command registration.
"""

import sys
import logging
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import typer
from rich.traceback import install as install_rich_traceback

from webplayer import __version__
from webplayer.core import ConfigManager, create_default_config_files
from webplayer.core.config_schemas import LoggingSettings
from webplayer.core.exceptions import WebPlayerError, ConfigurationError
from webplayer.ui import (
    setup_console,
    get_console,
    ThemeName,
    set_theme,
    handle_error,
    display_info,
)
from webplayer.cli.context import get_config_manager, set_config_manager


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class SourceChoice(str, Enum):
    """Searchable upstream APIs."""
    OFFICIAL = "official"
    WEEB = "weeb"


class ServerType(str, Enum):
    """Audio track of a streaming server."""
    SUB = "sub"
    DUB = "dub"


# Create main Typer application
app = typer.Typer(
    name="webplayer",
    help="🎬 Find anime and movies, resolve stream links and scrape listing pages",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
    if value:
        get_console().print(f"[bold blue]WebPlayer[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version information and exit",
        callback=_version_callback,
        is_eager=True,
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory path",
        exists=False,
        file_okay=False,
        dir_okay=True,
    ),
    theme: Optional[ThemeName] = typer.Option(
        None,
        "--theme",
        help="UI color theme",
        case_sensitive=False,
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode with detailed logging",
    ),
    no_banner: bool = typer.Option(
        False,
        "--no-banner",
        help="Disable startup banner",
    ),
) -> None:
    """
    🎬 WebPlayer - Media discovery from the command line.

    Search anime APIs, resolve playable stream links, keep favorites and
    scrape listing pages of supported and unknown sites.
    """
    try:
        _initialize_application(
            config_dir=config_dir,
            theme=theme,
            debug=debug,
            show_banner=not no_banner,
        )
    except WebPlayerError as e:
        handle_error(e, "During application initialization")
        raise typer.Exit(1)


def _initialize_application(
    config_dir: Optional[Path] = None,
    theme: Optional[ThemeName] = None,
    debug: bool = False,
    show_banner: bool = True,
) -> None:
    """
    Initialize the application with configuration and UI setup.

    Args:
        config_dir: Configuration directory override
        theme: Theme override
        debug: Enable debug mode
        show_banner: Whether to show startup banner
    """
    install_rich_traceback(show_locals=debug)

    if config_dir is None:
        config_dir = Path("config")

    if not config_dir.exists():
        create_default_config_files(config_dir)

    try:
        config_manager = ConfigManager(config_dir)
    except OSError as e:
        raise ConfigurationError(f"Failed to load configuration: {e}", str(config_dir))
    set_config_manager(config_manager)

    settings = config_manager.settings
    _setup_logging(debug, settings.logging, config_dir)
    _setup_ui(theme, debug)

    console = get_console()
    if show_banner and settings.ui.show_banner and console.is_terminal:
        console.print(f"[title]🎬 WebPlayer[/title] [muted]v{__version__}[/muted]")


def _setup_logging(debug: bool, settings: LoggingSettings, config_dir: Path) -> None:
    """
    Set up application logging.

    Args:
        debug: Enable debug logging regardless of settings
        settings: Logging settings
        config_dir: Base directory for relative log file paths
    """
    level = logging.DEBUG if debug else getattr(logging, settings.level)

    handlers = [logging.StreamHandler(sys.stderr)]

    if settings.file:
        log_path = Path(settings.file).expanduser()
        if not log_path.is_absolute():
            log_path = config_dir / log_path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_path,
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding="utf-8",
        ))

    # Reconfigure on every invocation so handlers never point at stale streams
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)

    # Reduce noise from third-party libraries
    if not debug:
        logging.getLogger("aiohttp").setLevel(logging.WARNING)
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def _setup_ui(theme_override: Optional[ThemeName] = None, debug: bool = False) -> None:
    """
    Set up UI console and theme.

    Args:
        theme_override: Theme to use (overrides configuration)
        debug: Enable debug mode
    """
    if theme_override:
        theme = theme_override
    else:
        try:
            theme = ThemeName(get_config_manager().settings.ui.color_theme)
        except (RuntimeError, ValueError):
            theme = ThemeName.DEFAULT

    set_theme(theme)
    setup_console(theme_name=theme)

    if debug:
        display_info(f"UI initialized with theme: {theme.value}")


def _register_commands() -> None:
    """Register command groups with the main app."""
    # Import commands here to avoid circular imports
    from webplayer.cli.commands import config, favorites

    app.add_typer(favorites.app, name="favorites", help="⭐ Manage favorites and watch status")
    app.add_typer(config.app, name="config", help="⚙️  Manage configuration")


# Register commands at module level to ensure they're available for help
_register_commands()


@app.command(name="scrape")
def scrape(
    url: str = typer.Argument(..., help="Page URL; https:// is assumed when no scheme is given"),
) -> None:
    """
    🕸️  Scrape a page for titles, links and images.

    Known hosts (animepahe, hurawatch) use dedicated extraction rules; any
    other site falls back to a best-effort link scan.

    Examples:

        webplayer scrape animepahe.ru

        webplayer scrape https://hurawatch.cc/home
    """
    from webplayer.cli.commands.scrape import run_scrape

    run_scrape(url)


@app.command(name="recent")
def recent(
    clear: bool = typer.Option(False, "--clear", help="Forget all recent URLs"),
) -> None:
    """🕘 Show recently scraped URLs."""
    from webplayer.cli.commands.scrape import show_recent

    show_recent(clear)


@app.command(name="search")
def search(
    query: str = typer.Argument(..., help="Anime title to search for"),
    source: Optional[SourceChoice] = typer.Option(
        None,
        "--source",
        "-s",
        help="API to search (defaults to search.default_source)",
        case_sensitive=False,
    ),
) -> None:
    """
    🔍 Search for anime by title.

    Examples:

        webplayer search "one piece"

        webplayer search naruto --source weeb
    """
    from webplayer.cli.commands.search import run_search

    run_search(query, source.value if source else None)


@app.command(name="live")
def live(
    source: Optional[SourceChoice] = typer.Option(
        None,
        "--source",
        "-s",
        help="API to search (defaults to search.default_source)",
        case_sensitive=False,
    ),
) -> None:
    """
    ⌨️  Live search driven by standard input.

    Every input line replaces the current query. A search is issued once the
    input has been quiet for search.quiet_period_ms and only suggestions for
    the latest query are printed.

    Example:

        printf 'one\\none pi\\none piece\\n' | webplayer live
    """
    from webplayer.cli.commands.search import run_live

    run_live(source.value if source else None)


@app.command(name="home")
def home() -> None:
    """🏠 Show spotlight and trending anime."""
    from webplayer.cli.commands.anime import show_home

    show_home()


@app.command(name="details")
def details(
    anime_id: str = typer.Argument(..., help="Anime id (Weeb: site link)"),
    source: Optional[SourceChoice] = typer.Option(
        None,
        "--source",
        "-s",
        help="API to query (defaults to search.default_source)",
        case_sensitive=False,
    ),
) -> None:
    """📋 Show details of one anime."""
    from webplayer.cli.commands.anime import show_details

    show_details(anime_id, source.value if source else None)


@app.command(name="episodes")
def episodes(
    anime_id: str = typer.Argument(..., help="Anime id"),
) -> None:
    """📺 List the episodes of an anime."""
    from webplayer.cli.commands.anime import show_episodes

    show_episodes(anime_id)


@app.command(name="servers")
def servers(
    episode_id: str = typer.Argument(..., help="Episode id"),
) -> None:
    """🖥️  List streaming servers of an episode."""
    from webplayer.cli.commands.anime import show_servers

    show_servers(episode_id)


@app.command(name="stream")
def stream(
    episode_id: str = typer.Argument(..., help="Episode id"),
    server: str = typer.Option(..., "--server", help="Server name as listed by 'servers'"),
    server_type: ServerType = typer.Option(ServerType.SUB, "--type", "-t", help="Audio track"),
) -> None:
    """
    ▶️  Resolve the playable file URL of an episode.

    Example:

        webplayer stream "one-piece-100?ep=2142" --server hd-1 --type sub
    """
    from webplayer.cli.commands.anime import resolve_stream

    resolve_stream(episode_id, server, server_type.value)


def cli_main() -> None:
    """
    Main CLI entry point for the webplayer command.

    This function is called when the user runs 'webplayer' from the command line.
    """
    try:
        app()
    except KeyboardInterrupt:
        console = get_console()
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)  # Standard exit code for SIGINT
    except Exception as e:
        handle_error(e, "Unexpected error in CLI")
        sys.exit(1)


# Export main components
__all__ = [
    "app",
    "cli_main",
]
