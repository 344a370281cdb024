"""Generation profiler — per-stage timing of a generation pass.

Records how long each stage of a pass took and emits a
``GenerationProfile`` event to the ``EventLog``.

Thread Safety:
    A profiler instance belongs to one pass at a time (single-writer).
    Aggregate queries are protected by the underlying ``EventLog`` lock.

"""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from burrow.observability.events import GenerationProfile, now_ns

if TYPE_CHECKING:
    from burrow.observability.log import EventLog

STAGES: tuple[str, ...] = ("scan", "merge", "order", "emit", "write")


@dataclass(slots=True)
class _Timer:
    """Accumulates timing for a named stage."""

    name: str
    _start: float = 0.0
    elapsed_ms: float = 0.0

    def start(self) -> None:
        self._start = time.perf_counter()

    def stop(self) -> None:
        if self._start > 0:
            self.elapsed_ms = (time.perf_counter() - self._start) * 1000
            self._start = 0.0


class GenerationProfiler:
    """Records per-stage timing for one generation pass.

    Usage::

        profiler = GenerationProfiler(event_log)

        profiler.begin("main")
        profiler.start("scan")
        # ... scan ...
        profiler.stop("scan")
        profiler.finish(routes=12)

    After ``finish()``, a ``GenerationProfile`` event is appended to the log
    and, when verbose, a one-line summary is printed to stderr.

    """

    __slots__ = ("_log", "_root", "_t0", "_timers", "_verbose")

    def __init__(self, log: EventLog, *, verbose: bool = False) -> None:
        self._log = log
        self._verbose = verbose
        self._root = ""
        self._t0 = 0.0
        self._timers: dict[str, _Timer] = {name: _Timer(name=name) for name in STAGES}

    def begin(self, root: str) -> None:
        """Start profiling a new pass."""
        self._root = root
        self._t0 = time.perf_counter()
        for timer in self._timers.values():
            timer.elapsed_ms = 0.0

    def start(self, stage: str) -> None:
        """Start timing a named stage."""
        timer = self._timers.get(stage)
        if timer is not None:
            timer.start()

    def stop(self, stage: str) -> None:
        """Stop timing a named stage."""
        timer = self._timers.get(stage)
        if timer is not None:
            timer.stop()

    def finish(self, *, routes: int = 0) -> GenerationProfile:
        """Finish profiling and emit the ``GenerationProfile`` event.

        Returns the profile for testing / inspection.

        """
        total_ms = (time.perf_counter() - self._t0) * 1000 if self._t0 > 0 else 0.0

        profile = GenerationProfile(
            root=self._root,
            routes=routes,
            scan_ms=self._timers["scan"].elapsed_ms,
            merge_ms=self._timers["merge"].elapsed_ms,
            order_ms=self._timers["order"].elapsed_ms,
            emit_ms=self._timers["emit"].elapsed_ms,
            write_ms=self._timers["write"].elapsed_ms,
            total_ms=total_ms,
            timestamp_ns=now_ns(),
        )

        self._log.append(profile)

        if self._verbose:
            self._print_summary(profile)

        return profile

    def _print_summary(self, p: GenerationProfile) -> None:
        """Print a one-line timing summary to stderr."""
        routes = "route" if p.routes == 1 else "routes"
        stages = ", ".join(
            f"{name}: {getattr(p, f'{name}_ms'):.0f}ms" for name in STAGES
        )
        print(
            f"  [{p.total_ms:.0f}ms] {p.root} -> {p.routes} {routes} ({stages})",
            file=sys.stderr,
        )


def compute_aggregate_stats(
    log: EventLog,
    *,
    limit: int = 100,
) -> dict:
    """Compute aggregate latency statistics from recent ``GenerationProfile`` events.

    Returns a dict with p50, p95, p99, and per-stage averages.

    """
    profiles = log.query(event_type=GenerationProfile, limit=limit)
    if not profiles:
        return {"count": 0}

    totals = sorted(p.total_ms for p in profiles)
    count = len(totals)

    def percentile(data: list[float], pct: float) -> float:
        idx = int(len(data) * pct / 100)
        return data[min(idx, len(data) - 1)]

    return {
        "count": count,
        "total_ms": {
            "p50": round(percentile(totals, 50), 1),
            "p95": round(percentile(totals, 95), 1),
            "p99": round(percentile(totals, 99), 1),
            "min": round(totals[0], 1),
            "max": round(totals[-1], 1),
        },
        "avg_by_stage_ms": {
            name: round(sum(getattr(p, f"{name}_ms") for p in profiles) / count, 1)
            for name in STAGES
        },
    }
