"""Config command for viewing and managing cryptoplug configuration."""

import typer

from ..app import app, console
from ...config import (
    CONFIG_FILE,
    env_var_for,
    get_config,
    parse_bool,
    plugin_setting,
    reset_config,
)
from ...plugins import BUILTIN_PLUGINS


# Per-plugin options and whether they are boolean
PLUGIN_OPTIONS = {
    "use_rng": True,
}


def _known_keys() -> list[str]:
    return [
        plugin_setting(plugin, option)
        for plugin in BUILTIN_PLUGINS
        for option in PLUGIN_OPTIONS
    ]


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, unset, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Setting key relative to the namespace (e.g. plugins.cryptography.use_rng)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify cryptoplug configuration.

    Examples:
        cryptoplug config show
        cryptoplug config set plugins.cryptography.use_rng no
        cryptoplug config unset plugins.cryptography.use_rng
        cryptoplug config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] cryptoplug config set <key> <value>")
            console.print()
            _print_known_keys()
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "unset":
        if not key:
            console.print("[red]Usage:[/red] cryptoplug config unset <key>")
            raise typer.Exit(1)
        _unset_config(key)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, unset, reset")
        raise typer.Exit(1)


def _print_known_keys():
    console.print("Available keys:")
    for k in _known_keys():
        console.print(f"  {k}")


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]cryptoplug Configuration[/bold]")
    console.print("─" * 40)
    console.print(f"  namespace = {config.namespace}")

    console.print()
    console.print("[bold cyan]Plugin settings[/bold cyan]")
    for key in _known_keys():
        full_key = config.qualify(key)
        if full_key in config.settings:
            console.print(f"  {full_key} = {config.settings[full_key]}")
        else:
            console.print(f"  {full_key} = [dim](default)[/dim]")
        console.print(f"    [dim]env: {env_var_for(config, key)}[/dim]")

    others = sorted(
        k for k in config.settings if k not in {config.qualify(x) for x in _known_keys()}
    )
    if others:
        console.print()
        console.print("[bold cyan]Other settings[/bold cyan]")
        for k in others:
            console.print(f"  {k} = {config.settings[k]}")

    console.print()
    if CONFIG_FILE.exists():
        console.print(f"Config file: {CONFIG_FILE}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({CONFIG_FILE})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    config = get_config()
    relative = key.removeprefix(f"{config.namespace}.")

    if relative not in _known_keys():
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        _print_known_keys()
        raise typer.Exit(1)

    option = relative.rsplit(".", 1)[-1]
    stored: str | bool = value
    if PLUGIN_OPTIONS[option]:
        try:
            stored = parse_bool(value)
        except ValueError:
            console.print(
                f"[red]Invalid boolean:[/red] {value} "
                "(use yes/no, true/false, enabled/disabled, 1/0)"
            )
            raise typer.Exit(1)

    config.set(relative, stored)
    config.save()
    console.print(f"[green]Set[/green] {config.qualify(relative)} = {stored}")


def _unset_config(key: str):
    config = get_config()
    if config.unset(key):
        config.save()
        console.print(f"[green]Removed[/green] {config.qualify(key)}")
    else:
        console.print(f"[dim]{config.qualify(key)} was not set[/dim]")


def _reset_config():
    """Reset config to defaults."""
    if CONFIG_FILE.exists():
        CONFIG_FILE.unlink()
        console.print(f"[green]Removed[/green] {CONFIG_FILE}")
    else:
        console.print("[dim]No config file to remove[/dim]")
    reset_config()
    console.print("Config reset to defaults.")
