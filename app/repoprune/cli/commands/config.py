"""Settings file commands.

Provides commands to show the effective settings and to write a default
settings file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from repoprune.core.config import (
    CleanupSettings,
    SettingsError,
    load_settings,
    save_settings,
)
from repoprune.core.paths import get_config_path
from repoprune.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize the settings file.",
    no_args_is_help=True,
)


def _config_path(ctx: typer.Context) -> Path:
    """Resolve the settings file path from the global --config option."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    return obj.get("config_path") or get_config_path()


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective settings."""
    path = _config_path(ctx)

    try:
        settings = load_settings(path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = str(path) if path.exists() else f"{path} (not found, using defaults)"
    table = Table(
        title="Effective Settings",
        caption=source,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value")
    table.add_column("Description", style="muted")

    for name, field in CleanupSettings.model_fields.items():
        value = getattr(settings, name)
        if name == "repository_root":
            value = settings.effective_repository_root
        table.add_row(name, "-" if value is None else str(value), field.description or "")

    console.print(table)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with default values."""
    path = _config_path(ctx)

    if path.exists() and not force:
        print_error(f"Settings file already exists: {path}")
        print_info("Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        saved = save_settings(CleanupSettings(), path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written: {saved}")
