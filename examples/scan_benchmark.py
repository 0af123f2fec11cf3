#!/usr/bin/env python3
"""
Benchmark for cold and warm scans.

The first collect() lists every directory; later ones are served from the
listing cache for directories whose mtime did not move. This script times
both and shows the cache counters.

Usage:
    python examples/scan_benchmark.py [--root PATH] [--rounds N]
"""

import asyncio
import logging
import statistics
import time
from pathlib import Path

import click
from dirpoll import PollingWatcher, WatcherSettings
from rich.console import Console
from rich.table import Table

logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

console = Console()


async def time_collects(root: Path, rounds: int, settings: WatcherSettings) -> tuple[float, list[float], PollingWatcher]:
    """Run one cold collect followed by ``rounds`` warm ones."""
    watcher = PollingWatcher(root, settings)

    started = time.perf_counter()
    await watcher.collect()
    cold = time.perf_counter() - started

    warm = []
    for _ in range(rounds):
        started = time.perf_counter()
        await watcher.collect()
        warm.append(time.perf_counter() - started)

    return cold, warm, watcher


@click.command()
@click.option('--root', '-d', type=click.Path(path_type=Path, exists=True), default=Path('.'), help='Tree to scan')
@click.option('--rounds', '-n', type=int, default=10, help='Number of warm scans')
@click.option('--ignore', '-i', multiple=True, default=['.git', 'node_modules'], help='Literal patterns to skip')
def main(root: Path, rounds: int, ignore: tuple[str, ...]):
    """Time cold versus cached scans of a directory tree."""
    settings = WatcherSettings(suppress_initial_adds=True, ignore_patterns=list(ignore))
    cold, warm, watcher = asyncio.run(time_collects(root, rounds, settings))

    table = Table(title=f"Scan benchmark: {watcher.root}", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Files", str(len(watcher.files)))
    table.add_row("Cold collect", f"{cold * 1000:.1f} ms")
    if warm:
        table.add_row("Warm collect (median)", f"{statistics.median(warm) * 1000:.1f} ms")
        table.add_row("Warm collect (best)", f"{min(warm) * 1000:.1f} ms")
    table.add_row("Listing cache hits", str(watcher.listing_cache.hits))
    table.add_row("Listing cache misses", str(watcher.listing_cache.misses))

    console.print(table)


if __name__ == '__main__':
    main()
