"""Config command for viewing and managing mapattrs configuration."""

import typer
from rich.markup import escape

from ..app import app, console
from ...config import (
    CLI_MODES,
    CONFIG_FILE,
    LOG_LEVELS,
    get_config,
    reset_config,
)


VALID_KEYS = {
    "resolver.defaults_file",
    "data.path",
    "cli.mode",
    "cli.log_level",
}

CHOICE_FIELDS = {
    "cli.mode": CLI_MODES,
    "cli.log_level": LOG_LEVELS,
}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. resolver.defaults_file, data.path)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify mapattrs configuration.

    Examples:
        mapattrs config show
        mapattrs config set data.path ./map.yaml
        mapattrs config set resolver.defaults_file ./defaults.yaml
        mapattrs config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] mapattrs config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {escape(action)}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]mapattrs Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Resolver[/bold cyan]")
    defaults_file = (
        escape(config.resolver.defaults_file)
        if config.resolver.defaults_file
        else "[dim](built-in)[/dim]"
    )
    console.print(f"  defaults_file = {defaults_file}")

    console.print()
    console.print("[bold cyan]Data[/bold cyan]")
    data_path = escape(config.data.path) if config.data.path else "[dim](not set)[/dim]"
    console.print(f"  path = {data_path}")

    console.print()
    console.print("[bold cyan]CLI[/bold cyan]")
    console.print(f"  mode      = {config.cli.mode}")
    console.print(f"  log_level = {config.cli.log_level}")

    console.print()
    if CONFIG_FILE.exists():
        console.print(f"Config file: {escape(str(CONFIG_FILE))}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({escape(str(CONFIG_FILE))})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {escape(key)}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    choices = CHOICE_FIELDS.get(key)
    if key == "cli.log_level":
        value = value.upper()
    if choices and value not in choices:
        console.print(
            f"[red]Invalid value:[/red] {escape(value)} (expected one of: {', '.join(choices)})"
        )
        raise typer.Exit(1)

    config = get_config()
    section, field_name = key.split(".", 1)
    setattr(getattr(config, section), field_name, value)

    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {key} = {escape(value)}")
    console.print(f"  Saved to {escape(str(CONFIG_FILE))}")


def _reset_config():
    """Reset config to defaults."""
    if CONFIG_FILE.exists():
        CONFIG_FILE.unlink()
        reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
    else:
        console.print("[dim]No config file to reset[/dim]")
