"""
Main CLI entry point for feedcache.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from feedcache import __version__
from feedcache.cli.commands.cache import app as cache_app

console = Console()

app = typer.Typer(
    name="feedcache",
    help="Offline image cache for your feed reader",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Add subcommands
app.add_typer(cache_app, name="cache", help="Image cache commands")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel(
            f"[bold blue]feedcache[/bold blue] v{__version__}",
            title="Version",
            border_style="blue",
        )
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-V", help="Show version and exit"
    ),
) -> None:
    """
    feedcache - Offline image cache for your feed reader.

    Pre-downloads thumbnails, enclosures and article images so they are
    available without a network connection.
    """
    if version:
        console.print(f"feedcache v{__version__}")
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        console.print("[yellow]Use 'feedcache --help' for available commands[/yellow]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
