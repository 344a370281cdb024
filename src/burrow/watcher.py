"""File watcher — triggers route regeneration on page changes.

Monitors every routes directory (main app and sub-routers) plus the project
config file.  Changes are categorized so the dev loop can pick a path:

- Page file changed -> regenerate the root that owns it
- Config changed -> reload config and regenerate every root
"""

from __future__ import annotations

import asyncio
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from watchfiles import Change, watch

from burrow.config_loader import CONFIG_FILES

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from burrow.config import BurrowConfig

ChangeCategory: TypeAlias = Literal["route", "config"]


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.
        category: What kind of file changed.

    """

    path: Path
    kind: Literal["created", "modified", "deleted"]
    category: ChangeCategory


# Mapping from watchfiles Change enum to our kind literals.
_CHANGE_KIND_MAP: dict[Change, Literal["created", "modified", "deleted"]] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def categorize_change(
    path: Path,
    config: BurrowConfig,
    project: Path | None = None,
) -> ChangeCategory | None:
    """Determine the category of a changed file based on its location.

    Returns None for files outside every routes directory (including the
    generated artifacts themselves) and for hidden files.

    """
    if path.name.startswith("."):
        return None

    if project is not None and path.parent == project and path.name in CONFIG_FILES:
        return "config"

    for root in config.generation_roots():
        try:
            path.relative_to(root.routes_path)
        except ValueError:
            continue
        return "route"

    return None


class RouteWatcher:
    """Watches routes directories and queues categorized changes.

    The watcher runs watchfiles in a background thread and bridges events
    to an asyncio queue for consumption by the dev loop.

    Args:
        config: Project configuration.
        project: Directory holding the config file, watched for config
            changes when given.

    """

    def __init__(self, config: BurrowConfig, project: Path | None = None) -> None:
        self._config = config
        self._project = project
        self._queue: asyncio.Queue[tuple[ChangeEvent, ...]] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    def update_config(self, config: BurrowConfig) -> None:
        """Categorize later changes against a reloaded config.

        A running watcher is restarted when the reload changes the watched
        directories.

        """
        previous = self.watch_paths()
        self._config = config
        if self.is_running and self.watch_paths() != previous:
            self.stop()
            self.start()

    def watch_paths(self) -> list[Path]:
        """Directories handed to watchfiles."""
        paths = [self._config.root]
        if self._project is not None and not self._project.is_relative_to(self._config.root):
            paths.append(self._project)
        return [p for p in paths if p.exists()]

    def start(self) -> None:
        """Start watching for file changes in a background thread."""
        if self.is_running:
            return

        if not self._config.root.exists():
            print(f"  ! Source root {self._config.root} does not exist", file=sys.stderr)
        if not self.watch_paths():
            print("  ! Nothing to watch, file changes will not be picked up", file=sys.stderr)
            return

        try:
            self._loop = asyncio.get_running_loop()
        except RuntimeError:
            self._loop = None

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop,
            name="burrow-watcher",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the watcher to stop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    async def batches(self) -> AsyncIterator[tuple[ChangeEvent, ...]]:
        """Async iterator over the events of each debounced watchfiles batch.

        Blocks until a batch is available or the watcher is stopped.

        """
        while self.is_running or not self._queue.empty():
            try:
                batch = await asyncio.wait_for(self._queue.get(), timeout=0.5)
            except TimeoutError:
                continue
            yield batch

    async def changes(self) -> AsyncIterator[ChangeEvent]:
        """Async iterator that yields ChangeEvent objects one at a time."""
        async for batch in self.batches():
            for event in batch:
                yield event

    def _events_for(self, raw_changes: set[tuple[Change, str]]) -> list[ChangeEvent]:
        events: list[ChangeEvent] = []
        for change_type, path_str in sorted(raw_changes, key=lambda c: c[1]):
            path = Path(path_str)
            category = categorize_change(path, self._config, self._project)
            if category is None:
                continue
            kind = _CHANGE_KIND_MAP.get(change_type, "modified")
            events.append(ChangeEvent(path=path, kind=kind, category=category))
        return events

    def _enqueue(self, batch: tuple[ChangeEvent, ...]) -> None:
        # asyncio.Queue is not thread-safe; hand off to the owning loop
        if self._loop is not None and not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._queue.put_nowait, batch)
        else:
            self._queue.put_nowait(batch)

    def _watch_loop(self) -> None:
        """Background thread: run watchfiles and push events to the queue."""
        paths = self.watch_paths()
        if not paths:
            return

        for raw_changes in watch(
            *paths,
            stop_event=self._stop_event,
            debounce=300,
            step=100,
        ):
            events = self._events_for(raw_changes)
            if events:
                self._enqueue(tuple(events))
