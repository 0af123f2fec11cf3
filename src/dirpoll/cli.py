"""
Command line entry point.

Usage:
    dirpoll snapshot ROOT [--ignore TEXT]... [--ignore-regex TEXT]...
    dirpoll watch ROOT [--interval SECONDS] [--duration SECONDS] [--suppress-initial-adds]
"""

import asyncio
import logging
import logging.config
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from dirpoll.config import WatcherSettings
from dirpoll.models import BaseError, Entry, FileChange
from dirpoll.monitoring import PollingWatcher, ScanStats

console = Console()


def _build_settings(ignore: tuple[str, ...], ignore_regex: tuple[str, ...], **overrides) -> WatcherSettings:
    # Command line rules extend the ones configured through the environment
    base = WatcherSettings(**overrides)
    return WatcherSettings(
        **overrides,
        ignore_patterns=[*base.ignore_patterns, *ignore],
        ignore_regexes=[*base.ignore_regexes, *ignore_regex],
    )


def create_scan_stats_table(stats: ScanStats) -> Table:
    """Create a rich table for scan statistics."""
    table = Table(title="Scan Statistics", show_header=True)
    table.add_column("Metric", style="cyan", width=20)
    table.add_column("Value", style="white", width=15)

    table.add_row("Directories", str(stats.directories))
    table.add_row("Files", str(stats.files))
    table.add_row("Added", str(stats.added))
    table.add_row("Changed", str(stats.changed))
    table.add_row("Ignored", str(stats.ignored))
    table.add_row("Errors", str(stats.errors))
    table.add_row("Duration", f"{stats.duration_seconds:.3f}s")

    return table


def _print_add(entry: Entry) -> None:
    console.print(f"[green]add[/green]    {entry.path}")


def _print_change(change: FileChange) -> None:
    console.print(f"[yellow]change[/yellow] {change.path}")


def _print_error(error: BaseError) -> None:
    console.print(f"[red]error[/red]  {error.message}")


async def run_snapshot(root: Path, settings: WatcherSettings) -> PollingWatcher:
    """Collect ``root`` once and return the populated watcher."""
    watcher = PollingWatcher(root, settings)
    watcher.on("error", _print_error)
    await watcher.collect()
    return watcher


async def run_watch(root: Path, settings: WatcherSettings, duration: float | None) -> None:
    """Collect ``root`` and poll it until ``duration`` elapses or the task is cancelled."""
    watcher = PollingWatcher(root, settings)
    watcher.on("add", _print_add).on("change", _print_change).on("error", _print_error)

    await watcher.collect()
    console.print(f"Watching [cyan]{watcher.root}[/cyan] ({len(watcher.files)} files)")
    watcher.watch()

    try:
        if duration is None:
            await asyncio.Event().wait()
        else:
            await asyncio.sleep(duration)
    finally:
        await watcher.aclose()


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def main(verbose: bool):
    """Poll a directory tree for added and changed files."""
    settings = WatcherSettings()
    logging.config.dictConfig(settings.get_log_config())
    if verbose:
        logging.getLogger("dirpoll").setLevel(logging.DEBUG)
        for handler in logging.getLogger("dirpoll").handlers:
            handler.setLevel(logging.DEBUG)


@main.command()
@click.argument('root', type=click.Path(path_type=Path))
@click.option('--ignore', '-i', multiple=True, help='Literal substring to ignore (repeatable)')
@click.option('--ignore-regex', '-r', multiple=True, help='Regular expression to ignore (repeatable)')
def snapshot(root: Path, ignore: tuple[str, ...], ignore_regex: tuple[str, ...]):
    """Scan ROOT once and print every file found."""
    try:
        settings = _build_settings(ignore, ignore_regex, suppress_initial_adds=True)
        watcher = asyncio.run(run_snapshot(root, settings))
    except BaseError as e:
        console.print(f"[red]Scan failed:[/red] {e.message}")
        raise SystemExit(1) from e

    # No scan ran: the root was missing and the error is already printed
    if watcher.last_scan is None:
        raise SystemExit(1)

    watcher.print(console)
    console.print(create_scan_stats_table(watcher.last_scan))


@main.command()
@click.argument('root', type=click.Path(path_type=Path))
@click.option('--interval', '-n', type=float, default=None, help='Seconds between polls')
@click.option('--duration', '-t', type=float, default=None, help='Stop after this many seconds')
@click.option('--ignore', '-i', multiple=True, help='Literal substring to ignore (repeatable)')
@click.option('--ignore-regex', '-r', multiple=True, help='Regular expression to ignore (repeatable)')
@click.option('--suppress-initial-adds', '-s', is_flag=True, help='Do not report files found by the first scan')
def watch(
    root: Path,
    interval: float | None,
    duration: float | None,
    ignore: tuple[str, ...],
    ignore_regex: tuple[str, ...],
    suppress_initial_adds: bool,
):
    """Watch ROOT and print add and change events as they are detected."""
    overrides = {}
    if suppress_initial_adds:
        overrides["suppress_initial_adds"] = True
    if interval is not None:
        overrides["poll_interval_seconds"] = interval

    try:
        settings = _build_settings(ignore, ignore_regex, **overrides)
        asyncio.run(run_watch(root, settings, duration))
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped[/yellow]")
    except BaseError as e:
        console.print(f"[red]Watch failed:[/red] {e.message}")
        raise SystemExit(1) from e


if __name__ == '__main__':
    main()
