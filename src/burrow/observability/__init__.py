"""Generation observability — what each pass scanned, wrote and spent.

Events:
- ``TreeScanned``: a routes directory was walked
- ``RoutesGenerated``: an artifact was rendered (and written if changed)
- ``GenerationFailed``: a pass aborted, previous artifact kept
- ``GenerationProfile``: per-stage timing of a pass

All events are frozen dataclasses with nanosecond timestamps, safe to
produce from the watcher thread.

Quick Start:
    >>> from burrow.observability import EventLog, GenerationCollector
    >>> collector = GenerationCollector(EventLog())
    >>> # pass collector to burrow.generator.generate(...)

"""

from burrow.observability.collector import GenerationCollector
from burrow.observability.events import (
    BurrowEvent,
    GenerationFailed,
    GenerationProfile,
    RoutesGenerated,
    TreeScanned,
    now_ns,
)
from burrow.observability.log import EventLog
from burrow.observability.profiler import GenerationProfiler, compute_aggregate_stats

__all__ = [
    "BurrowEvent",
    "EventLog",
    "GenerationCollector",
    "GenerationFailed",
    "GenerationProfile",
    "GenerationProfiler",
    "RoutesGenerated",
    "TreeScanned",
    "compute_aggregate_stats",
    "now_ns",
]
