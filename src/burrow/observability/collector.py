"""Generation collector — records generation events into the event log.

One collector is shared by every generation pass of a session (the initial
build and each watch-triggered regeneration), so the log holds the whole
session history.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.

"""

from __future__ import annotations

from burrow.observability.events import (
    GenerationFailed,
    GenerationProfile,
    RoutesGenerated,
    TreeScanned,
    now_ns,
)
from burrow.observability.log import EventLog


class GenerationCollector:
    """Event collector for generation passes.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_scan(
        self,
        root: str,
        routes_path: str,
        *,
        files: int = 0,
        directories: int = 0,
        scan_ms: float = 0.0,
    ) -> None:
        """Record a directory scan."""
        self._log.append(
            TreeScanned(
                root=root,
                routes_path=routes_path,
                files=files,
                directories=directories,
                scan_ms=scan_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_generated(
        self,
        root: str,
        output: str,
        *,
        routes: int = 0,
        imports: int = 0,
        written: bool = True,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a rendered artifact."""
        self._log.append(
            RoutesGenerated(
                root=root,
                output=output,
                routes=routes,
                imports=imports,
                written=written,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_failure(
        self,
        root: str,
        error: BaseException,
        *,
        trigger_path: str = "",
    ) -> None:
        """Record an aborted generation pass."""
        self._log.append(
            GenerationFailed(
                root=root,
                error_type=type(error).__name__,
                message=str(error),
                trigger_path=trigger_path,
                timestamp_ns=now_ns(),
            )
        )

    def record_profile(self, profile: GenerationProfile) -> None:
        """Record a finished stage profile."""
        self._log.append(profile)
