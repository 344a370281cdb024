"""Event model for generation observability.

Every generation pass emits events describing what it scanned, what it
wrote and how long each stage took.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class TreeScanned:
    """A routes directory was scanned into route nodes.

    Attributes:
        root: Generation root name (``"main"`` or a mount path).
        routes_path: Directory that was scanned.
        files: Number of page files found.
        directories: Number of non-empty directories found.
        scan_ms: Time spent scanning in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    root: str
    routes_path: str
    files: int
    directories: int
    scan_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RoutesGenerated:
    """An artifact was rendered (and written when its text changed).

    Attributes:
        root: Generation root name.
        output: Artifact file path.
        routes: Number of route records in the artifact.
        imports: Number of page modules imported.
        written: False when the file on disk was already up to date.
        duration_ms: Wall-clock time of the whole pass.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    root: str
    output: str
    routes: int
    imports: int
    written: bool
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class GenerationFailed:
    """A generation pass aborted; the previous artifact was left untouched.

    Attributes:
        root: Generation root name.
        error_type: Exception class name.
        message: Exception message.
        trigger_path: File change that started the pass, if any.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    root: str
    error_type: str
    message: str
    trigger_path: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class GenerationProfile:
    """Per-stage timing for one generation pass.

    Attributes:
        root: Generation root name.
        routes: Number of route records produced.
        scan_ms: Directory scan.
        merge_ms: Record merge and collapse.
        order_ms: Sibling ordering.
        emit_ms: Artifact rendering.
        write_ms: Comparison with the file on disk and atomic write.
        total_ms: Wall-clock total.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    root: str
    routes: int
    scan_ms: float
    merge_ms: float
    order_ms: float
    emit_ms: float
    write_ms: float
    total_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

BurrowEvent: TypeAlias = (
    TreeScanned
    | RoutesGenerated
    | GenerationFailed
    | GenerationProfile
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
