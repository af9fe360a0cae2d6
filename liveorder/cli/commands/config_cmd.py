"""Config command for viewing and managing liveorder configuration."""

import typer

from ..app import app, console
from ...config import (
    CONFIG_FILE,
    OUTPUT_FORMATS,
    get_config,
    reset_config,
)
from ...style import DEFAULT_POLICIES


VALID_KEYS = {
    "styles.enabled",
    "styles.synthesize_moduledoc",
    "output.format",
}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. styles.enabled, output.format)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify liveorder configuration.

    Examples:
        liveorder config show
        liveorder config set styles.enabled live_view,live_component
        liveorder config set styles.synthesize_moduledoc false
        liveorder config set output.format json
        liveorder config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] liveorder config set <key> <value>")
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
    console.print("[bold]liveorder Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Styles[/bold cyan]")
    console.print(f"  enabled              = {', '.join(config.styles.enabled)}")
    console.print(
        f"  synthesize_moduledoc = {str(config.styles.synthesize_moduledoc).lower()}"
    )

    console.print()
    console.print("[bold cyan]Output[/bold cyan]")
    console.print(f"  format = {config.output.format}")

    console.print()
    if CONFIG_FILE.exists():
        console.print(f"Config file: {CONFIG_FILE}")
    else:
        console.print(f"Config file: [dim]{CONFIG_FILE} (not created yet)[/dim]")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and persist it."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print("Valid keys: " + ", ".join(sorted(VALID_KEYS)))
        raise typer.Exit(1)

    config = get_config()
    if key == "styles.enabled":
        names = [v.strip() for v in value.split(",") if v.strip()]
        known = {p.sentinel for p in DEFAULT_POLICIES}
        unknown = [n for n in names if n not in known]
        if unknown:
            console.print(f"[red]Unknown style:[/red] {', '.join(unknown)}")
            console.print("Valid styles: " + ", ".join(sorted(known)))
            raise typer.Exit(1)
        config.styles.enabled = names
    elif key == "styles.synthesize_moduledoc":
        lowered = value.strip().lower()
        if lowered not in {"true", "false"}:
            console.print(f"[red]Invalid boolean:[/red] {value}")
            raise typer.Exit(1)
        config.styles.synthesize_moduledoc = lowered == "true"
    elif key == "output.format":
        if value not in OUTPUT_FORMATS:
            console.print(f"[red]Invalid format:[/red] {value}")
            console.print("Valid formats: " + ", ".join(OUTPUT_FORMATS))
            raise typer.Exit(1)
        config.output.format = value

    config.save()
    reset_config()
    console.print(f"[green]✓[/green] Set {key} = {value}")
    console.print(f"  Saved to {CONFIG_FILE}")


def _reset_config():
    """Delete the config file, reverting to defaults."""
    if CONFIG_FILE.exists():
        CONFIG_FILE.unlink()
        console.print(f"[green]✓[/green] Removed {CONFIG_FILE}")
    else:
        console.print("[dim]No config file to reset[/dim]")
    reset_config()

