"""Configuration management commands."""

from typing import Optional

import typer
from pydantic import ValidationError
from rich.prompt import Confirm

from tasklens.config import get_config_manager
from tasklens.errors import TaskLensError
from tasklens.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from tasklens.utils.ui.console import get_console
from tasklens.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


@app.command("view")
@command_wrapper
def view_config(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """View current configuration."""
    config_manager = get_config_manager(profile)
    format_output(config_manager.config.model_dump(), "json")


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., search.threshold)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Get a configuration value."""
    value = get_config_manager(profile).get(key)
    if value is None:
        raise TaskLensError(
            f"Configuration key '{key}' not found", exit_code=ERROR_NOT_FOUND
        )
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., search.threshold)"),
    value: str = typer.Argument(..., help="Configuration value"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Set a configuration value. Values are coerced by the config schema."""
    try:
        get_config_manager(profile).set(key, value)
    except KeyError as e:
        raise TaskLensError(
            f"Configuration key '{key}' not found", exit_code=ERROR_NOT_FOUND
        ) from e
    except ValidationError as e:
        raise TaskLensError(
            f"Invalid value for '{key}': {value}", exit_code=ERROR_INVALID_ARGS
        ) from e
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        target = f"'{key}'" if key else "all configuration"
        if not Confirm.ask(f"Reset {target} to defaults?"):
            console.print("[yellow]Cancelled[/yellow]")
            raise typer.Exit(0)

    get_config_manager(profile).reset(key)
    format_success(f"Reset {key or 'configuration'} to defaults")


@app.command("list")
@command_wrapper
def list_profiles(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """List all configuration profiles."""
    profiles = get_config_manager(profile).list_profiles()

    if not profiles:
        console.print("[yellow]No profiles found[/yellow]")
        return

    for prof in profiles:
        marker = " *" if prof == profile else ""
        console.print(f"{prof}{marker}")
