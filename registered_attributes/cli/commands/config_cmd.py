"""Config command for viewing and managing registration configuration."""

import typer

from ..app import app, console
from ...config import (
    CONFIG_FILE,
    UNKNOWN_OPTION_POLICIES,
    get_config,
    parse_bool,
    reset_config,
)


VALID_KEYS = {
    "registration.unknown_options",
    "registration.strip_whitespace",
}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. registration.unknown_options)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify registration configuration.

    Examples:
        registered-attributes config show
        registered-attributes config set registration.unknown_options ignore
        registered-attributes config set registration.strip_whitespace false
        registered-attributes config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] registered-attributes config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]Registered Attributes Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Registration[/bold cyan]")
    console.print(f"  unknown_options  = {config.registration.unknown_options}")
    console.print(f"  strip_whitespace = {config.registration.strip_whitespace}")

    console.print()
    if CONFIG_FILE.exists():
        console.print(f"Config file: {CONFIG_FILE}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({CONFIG_FILE})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    config = get_config()
    _, field_name = key.split(".", 1)

    if field_name == "unknown_options":
        if value not in UNKNOWN_OPTION_POLICIES:
            console.print(
                f"[red]Invalid policy:[/red] {value} "
                f"(expected one of: {', '.join(UNKNOWN_OPTION_POLICIES)})"
            )
            raise typer.Exit(1)
        config.registration.unknown_options = value
    else:
        try:
            config.registration.strip_whitespace = parse_bool(value)
        except ValueError:
            console.print(f"[red]Invalid boolean value:[/red] {value}")
            raise typer.Exit(1)

    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {key} = {value}")
    console.print(f"  Saved to {CONFIG_FILE}")


def _reset_config():
    """Reset config to defaults."""
    if CONFIG_FILE.exists():
        CONFIG_FILE.unlink()
        reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {CONFIG_FILE}")
    else:
        console.print("Config already at defaults (no config file exists)")
