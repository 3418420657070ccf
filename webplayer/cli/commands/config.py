"""
Configuration Command - Settings management functionality.

This module implements the config command group for inspecting and changing
settings with validation. Values given on the command line are converted to
the type of the setting they replace.
"""

import logging
from typing import Any, Dict

import typer

from webplayer.cli.context import get_config_manager
from webplayer.core.exceptions import ConfigurationError, WebPlayerError
from webplayer.ui import (
    UIComponents,
    display_info,
    get_console,
    handle_error,
)

# Create config command group
app = typer.Typer(
    name="config",
    help="⚙️  Manage application configuration and settings",
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)

TRUE_VALUES = ('true', '1', 'yes', 'on', 'enabled')
FALSE_VALUES = ('false', '0', 'no', 'off', 'disabled')


def flatten_settings(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested settings into dot-notation keys."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(flatten_settings(value, f"{path}."))
        else:
            flat[path] = value
    return flat


def convert_value(raw: str, current: Any) -> Any:
    """
    Convert a command-line string to the type of the current value.

    Raises:
        ConfigurationError: If the string cannot be converted
    """
    try:
        if isinstance(current, bool):
            lowered = raw.lower()
            if lowered in TRUE_VALUES:
                return True
            if lowered in FALSE_VALUES:
                return False
            raise ValueError(f"expected one of {', '.join(TRUE_VALUES + FALSE_VALUES)}")
        if isinstance(current, int):
            return int(raw)
        if isinstance(current, float):
            return float(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid value '{raw}' for {type(current).__name__} setting",
            details=str(e)
        )
    return raw


@app.command(name="show")
def show_config(
    section: str = typer.Argument(
        "",
        help="Configuration section to display (network, search, api, storage, ui, logging)"
    ),
) -> None:
    """📋 Display current configuration."""
    config_manager = get_config_manager()
    settings = flatten_settings(config_manager.settings.model_dump(mode='json'))

    if section:
        prefix = f"{section}."
        settings = {key: value for key, value in settings.items() if key.startswith(prefix)}
        if not settings:
            handle_error(ConfigurationError(f"Unknown configuration section: {section}"))
            raise typer.Exit(1)

    console = get_console()
    console.print(UIComponents().create_settings_table(settings))
    console.print(f"\n[muted]Settings file: {config_manager.settings_file}[/muted]")


@app.command(name="set")
def set_config(
    key: str = typer.Argument(..., help="Configuration key (dot notation)"),
    value: str = typer.Argument(..., help="New value for the setting"),
) -> None:
    """
    🔧 Set a configuration value.

    Set a specific configuration value using dot notation.
    Example: webplayer config set search.quiet_period_ms 300
    """
    config_manager = get_config_manager()
    missing = object()

    try:
        current = config_manager.get_setting(key, missing)
        if current is missing or isinstance(current, dict):
            raise ConfigurationError(f"Invalid setting path: {key}")

        config_manager.update_setting(key, convert_value(value, current))
    except WebPlayerError as e:
        handle_error(e, f"Failed to set configuration value '{key}'")
        raise typer.Exit(1)

    get_console().print(f"[success]✅ {key}[/success] = {config_manager.get_setting(key)}")


@app.command(name="reset")
def reset_config(
    confirm: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    ),
) -> None:
    """🔄 Reset configuration to defaults."""
    if not confirm:
        from rich.prompt import Confirm
        if not Confirm.ask(
            "[bold red]⚠️  This will reset ALL configuration to defaults. Continue?[/bold red]",
            default=False
        ):
            display_info("Configuration reset cancelled.", "ℹ️  Cancelled")
            return

    try:
        get_config_manager().reset_to_defaults()
    except WebPlayerError as e:
        handle_error(e, "Failed to reset configuration")
        raise typer.Exit(1)

    display_info("Configuration has been reset to default values.", "✅ Configuration Reset")


__all__ = ["app", "flatten_settings", "convert_value"]
