"""Burrow application — the build and dev entry points.

``build`` runs one generation pass for every artifact and exits.  ``dev``
does the same, then keeps watching the routes directories and regenerates
the affected artifact on every change until interrupted.
"""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

from burrow._errors import BurrowError
from burrow.config_loader import load_config
from burrow.observability import EventLog, GenerationCollector, compute_aggregate_stats
from burrow.plugin import RoutesPlugin

if TYPE_CHECKING:
    from burrow.generator import GenerationResult
    from burrow.watcher import RouteWatcher


def _print_summary(results: tuple[GenerationResult, ...], duration_ms: float) -> None:
    """Print build completion summary to stderr."""
    written = sum(1 for r in results if r.written)
    lines = [
        "─" * 41,
        f"  {written} of {len(results)} artifact{'s' if len(results) != 1 else ''} updated",
        f"  Done in {duration_ms:.0f}ms",
    ]
    print("\n".join(lines), file=sys.stderr)


def _print_session_stats(log: EventLog) -> None:
    """Print event and pass-latency totals of a dev session to stderr."""
    stats = log.stats()
    lines = [f"\n  Stopped after {stats['total']} generation events"]
    aggregate = compute_aggregate_stats(log)
    if aggregate["count"]:
        totals = aggregate["total_ms"]
        lines.append(
            f"  {aggregate['count']} passes: p50 {totals['p50']}ms, "
            f"p95 {totals['p95']}ms, max {totals['max']}ms"
        )
    print("\n".join(lines), file=sys.stderr)


def _collect_warnings(results: tuple[GenerationResult, ...]) -> list[str]:
    return [warning for result in results for warning in result.warnings]


async def _consume_events(watcher: RouteWatcher, plugin: RoutesPlugin) -> None:
    """Feed watcher batches to the plugin until the watcher stops.

    Every root touched by a batch is regenerated once.  A failed pass is reported and the loop keeps going; the previous
    artifact stays in place until the next successful pass.
    """
    async for batch in watcher.batches():
        try:
            plugin.handle_changes(event.path for event in batch)
        except BurrowError as exc:
            names = ", ".join(sorted({event.path.name for event in batch}))
            print(f"  Generation error ({names}): {exc}", file=sys.stderr)
            continue
        if any(event.category == "config" for event in batch):
            watcher.update_config(plugin.config)


async def _run_dev_loop(watcher: RouteWatcher, plugin: RoutesPlugin) -> None:
    watcher.start()
    try:
        await _consume_events(watcher, plugin)
    finally:
        watcher.stop()


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def build(project: str | Path = ".", **kwargs: object) -> tuple[GenerationResult, ...]:
    """Generate every route artifact once.

    Args:
        project: Project directory (holds ``burrow.yaml`` if any).
        **kwargs: Override BurrowConfig fields.

    Raises:
        BurrowError: Generation failed; no artifact was written.

    """
    from burrow.banner import print_banner

    project_path = Path(project).resolve()
    config = load_config(project_path, **kwargs)
    t0 = time.perf_counter()

    plugin = RoutesPlugin(config, project=project_path)
    results = plugin.build_start()

    load_ms = (time.perf_counter() - t0) * 1000
    print_banner(
        config, mode="build",
        route_count=sum(r.route_count for r in results),
        root_count=len(results),
        load_ms=load_ms,
        warnings=_collect_warnings(results),
    )
    _print_summary(results, load_ms)
    return results


def dev(project: str | Path = ".", *, verbose: bool = False, **kwargs: object) -> None:
    """Generate every route artifact, then regenerate on change.

    Args:
        project: Project directory (holds ``burrow.yaml`` if any).
        verbose: Print per-stage timings for every pass.
        **kwargs: Override BurrowConfig fields.

    """
    from burrow.banner import print_banner
    from burrow.watcher import RouteWatcher

    project_path = Path(project).resolve()
    config = load_config(project_path, **kwargs)
    t0 = time.perf_counter()

    collector = GenerationCollector(EventLog())
    plugin = RoutesPlugin(config, collector=collector, project=project_path, verbose=verbose)

    try:
        results = plugin.build_start()
    except BurrowError as exc:
        # Keep watching so the next save can fix it
        print(f"  Generation error: {exc}", file=sys.stderr)
        results = ()

    print_banner(
        config, mode="dev",
        route_count=sum(r.route_count for r in results),
        root_count=len(config.generation_roots()),
        load_ms=(time.perf_counter() - t0) * 1000,
        warnings=_collect_warnings(results),
    )

    watcher = RouteWatcher(config, project=project_path)
    try:
        asyncio.run(_run_dev_loop(watcher, plugin))
    except KeyboardInterrupt:
        _print_session_stats(collector.log)
