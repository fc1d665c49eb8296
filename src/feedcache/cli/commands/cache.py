"""
CLI commands for managing the local image cache.

Provides the ``feedcache cache warm`` command, which runs the image cache
job once in the foreground with a progress display and graceful
interrupt handling, plus ``status`` and ``purge`` for inspecting and
clearing the cache.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from feedcache.config.database import db_manager
from feedcache.config.settings import settings
from feedcache.container import container
from feedcache.exceptions import (
    EXIT_CODE_INTERRUPTED,
    EXIT_CODE_JOB_FAILED,
    EXIT_CODE_PARTIAL_FAILURE,
    ContentStoreError,
    GracefulShutdownException,
)
from feedcache.models.enums import RunStatus
from feedcache.models.precache import FetchOutcome, FetchSuccess, RunSummary
from feedcache.services.shutdown_handler import ShutdownHandler

console = Console()

app = typer.Typer(
    name="cache",
    help="Manage the local image cache.",
    no_args_is_help=True,
)


def _generate_timestamp() -> str:
    return datetime.now().strftime("%Y%m%d-%H%M%S")


def _setup_file_logging(verbose: bool = False) -> Path:
    """
    Set up file logging for an image cache run.

    Creates a log file at ``{logs_dir}/image-cache-{timestamp}.log``.

    Parameters
    ----------
    verbose : bool, optional
        If True, log at DEBUG level and also log to the console.

    Returns
    -------
    Path
        Path to the created log file
    """
    log_dir = settings.logs_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"image-cache-{_generate_timestamp()}.log"

    log_level = logging.DEBUG if verbose else getattr(logging, settings.log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger("feedcache")
    root_logger.addHandler(file_handler)
    root_logger.setLevel(log_level)

    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    return log_file


def _format_size(size_bytes: int) -> str:
    """Convert bytes to human-readable format."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f} GB"


@app.command(name="warm")
def warm(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Only discover image URLs and report counts; download nothing",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every image at DEBUG level, also to the console",
    ),
) -> None:
    """
    Pre-download every image referenced by stored feed items.

    Thumbnails, image enclosures and images embedded in stored articles
    are fetched into the on-disk cache. Images already cached are served
    from disk and not downloaded again. Ctrl+C stops after the current
    image.

    Examples:
        feedcache cache warm
        feedcache cache warm --dry-run
    """
    log_file = _setup_file_logging(verbose=verbose)
    console.print(f"[dim]Logging to {log_file}[/dim]")

    if dry_run:
        console.print("[yellow]Dry run - no images will be downloaded.[/yellow]\n")
        try:
            asyncio.run(_discover_async())
        except ContentStoreError as exc:
            console.print(f"[red]Error: {exc.message}[/red]")
            raise typer.Exit(code=EXIT_CODE_JOB_FAILED)
        return

    handler = ShutdownHandler()
    handler.install()
    try:
        summary = asyncio.run(_warm_async(handler))
        _display_summary(summary)
        handler.check_shutdown()
    except GracefulShutdownException as exc:
        console.print(
            f"\n[yellow]Cache warming interrupted ({exc.signal_received})[/yellow]"
        )
        raise typer.Exit(code=EXIT_CODE_INTERRUPTED)
    finally:
        handler.uninstall()

    if summary.status is RunStatus.FAILED:
        console.print(f"[red]Error: {summary.error}[/red]")
        raise typer.Exit(code=EXIT_CODE_JOB_FAILED)
    if summary.fail_count > 0:
        raise typer.Exit(code=EXIT_CODE_PARTIAL_FAILURE)


async def _discover_async() -> None:
    """Async implementation of ``warm --dry-run``."""
    job = container.create_image_cache_job()
    try:
        aggregated = await job.discover()
    finally:
        await db_manager.close()

    table = Table(title="Images Found")
    table.add_column("Source", style="cyan")
    table.add_column("URLs", style="green", justify="right")
    table.add_row("Thumbnails / enclosures", str(aggregated.direct_count))
    table.add_row("Article markup", str(aggregated.blob_count))
    table.add_row("[bold]Unique[/bold]", f"[bold]{aggregated.unique_count}[/bold]")
    console.print(table)


async def _warm_async(handler: ShutdownHandler) -> RunSummary:
    """Async implementation of the cache warm command.

    Parameters
    ----------
    handler : ShutdownHandler
        Installed shutdown handler whose token cancels the run.
    """
    job = container.create_image_cache_job()

    cached_count = 0
    failed_count = 0

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Images", total=None)

            def image_callback(url: str, outcome: FetchOutcome) -> None:
                nonlocal cached_count, failed_count
                if isinstance(outcome, FetchSuccess):
                    cached_count += 1
                else:
                    failed_count += 1
                progress.update(
                    task,
                    advance=1,
                    description=f"Images ({cached_count} cached, {failed_count} failed)",
                )

            summary = await job.run(handler.token, progress_callback=image_callback)
            progress.update(task, total=summary.total_urls)
    finally:
        await db_manager.close()

    return summary


def _display_summary(summary: RunSummary) -> None:
    """Display a summary table of a warm run."""
    console.print()

    table = Table(title="Cache Warm Summary")
    table.add_column("Status", style="cyan")
    table.add_column("Cached", style="green", justify="right")
    table.add_column("Failed", style="red", justify="right")
    table.add_column("Unique URLs", style="bold", justify="right")
    table.add_column("Elapsed", justify="right")
    table.add_row(
        summary.status.value,
        str(summary.success_count),
        str(summary.fail_count),
        str(summary.total_urls),
        f"{summary.elapsed_ms / 1000:.1f}s",
    )
    console.print(table)


@app.command(name="status")
def status() -> None:
    """
    Display cache statistics.

    Examples:
        feedcache cache status
    """
    try:
        asyncio.run(_status_async())
    except KeyboardInterrupt:
        console.print("\n[yellow]Status check interrupted by user[/yellow]")
        raise typer.Exit(code=EXIT_CODE_INTERRUPTED)


async def _status_async() -> None:
    """Async implementation of the cache status command."""
    stats = await container.image_cache_service.get_stats()

    table = Table(title="Image Cache Status")
    table.add_column("Cached Images", style="green", justify="right")
    table.add_column("Size", style="blue", justify="right")
    table.add_row(f"{stats.image_count:,}", _format_size(stats.total_size_bytes))

    console.print()
    console.print(table)
    console.print()
    console.print(f"  Cache directory: {settings.images_dir}")
    if stats.oldest_file is not None:
        console.print(f"  Oldest file:     {stats.oldest_file.strftime('%Y-%m-%d')}")
    if stats.newest_file is not None:
        console.print(f"  Newest file:     {stats.newest_file.strftime('%Y-%m-%d')}")
    console.print()


@app.command(name="purge")
def purge(
    force: bool = typer.Option(
        False,
        "--force",
        help="Skip confirmation prompt",
    ),
) -> None:
    """
    Delete every cached image.

    Examples:
        feedcache cache purge
        feedcache cache purge --force
    """
    if not force:
        confirmation = typer.confirm(
            "Are you sure you want to purge all cached images?",
            default=False,
        )
        if not confirmation:
            console.print("[yellow]Purge cancelled by user[/yellow]")
            raise typer.Exit(code=1)

    bytes_freed = asyncio.run(container.image_cache_service.purge())

    console.print()
    console.print(f"[green]Purge complete: freed {_format_size(bytes_freed)}[/green]")
    console.print()
