"""Build lifecycle hooks — full generation at startup, per-root on change.

``RoutesPlugin`` is what a bundler integration (or the ``burrow dev`` loop)
drives: ``build_start()`` once, then ``handle_changes(paths)`` for every
batch of file events.  A change regenerates only the root whose routes directory contains
the file; a config change reloads the config and regenerates everything.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from burrow._errors import ConfigError
from burrow.config_loader import CONFIG_FILES, load_config
from burrow.generator import generate, generate_all

if TYPE_CHECKING:
    from collections.abc import Iterable

    from burrow.config import BurrowConfig, GenerationRoot
    from burrow.generator import GenerationResult
    from burrow.observability.collector import GenerationCollector


class RoutesPlugin:
    """Route generation driven by build and watch events.

    Args:
        config: Project configuration.
        collector: Optional observability collector.
        project: Directory holding the config file; needed to reload it on
            change.
        verbose: Print per-stage timings for every pass.
        quiet: Suppress the ``Generated <path>`` lines.

    """

    __slots__ = ("_collector", "_project", "_quiet", "_verbose", "config")

    def __init__(
        self,
        config: BurrowConfig,
        *,
        collector: GenerationCollector | None = None,
        project: Path | None = None,
        verbose: bool = False,
        quiet: bool = False,
    ) -> None:
        self.config = config
        self._collector = collector
        self._project = project
        self._verbose = verbose
        self._quiet = quiet

    def build_start(self) -> tuple[GenerationResult, ...]:
        """Generate every artifact.  Nothing is written if any root fails."""
        results = generate_all(self.config, collector=self._collector, verbose=self._verbose)
        self._report(results)
        return results

    def roots_for(self, path: Path) -> tuple[GenerationRoot, ...]:
        """Generation roots whose routes directory contains *path*."""
        path = Path(path)
        return tuple(
            root
            for root in self.config.generation_roots()
            if path == root.routes_path or path.is_relative_to(root.routes_path)
        )

    def is_config_file(self, path: Path) -> bool:
        """Whether *path* is this project's config file."""
        path = Path(path)
        return (
            self._project is not None
            and path.parent == self._project
            and path.name in CONFIG_FILES
        )

    def reload_config(self) -> BurrowConfig:
        """Re-read the config file of the project.

        Raises:
            ConfigError: The project directory is unknown or the file is
                malformed.  The previous config stays active.

        """
        if self._project is None:
            msg = "Cannot reload configuration without a project directory"
            raise ConfigError(msg)
        self.config = load_config(self._project)
        return self.config

    def handle_change(self, path: Path) -> tuple[GenerationResult, ...]:
        """Regenerate whatever *path* affects.

        Returns the results of the passes that ran; an empty tuple when the
        file belongs to no routes directory.

        Raises:
            BurrowError: A pass failed.  Its previous artifact is untouched.

        """
        return self.handle_changes([path])

    def handle_changes(self, paths: Iterable[Path]) -> tuple[GenerationResult, ...]:
        """Regenerate whatever a batch of changed *paths* affects.

        Each affected root runs one pass however many of its files changed.

        Raises:
            BurrowError: A pass failed.  Its previous artifact is untouched.

        """
        changed = [Path(p) for p in paths]
        if any(self.is_config_file(p) for p in changed):
            self.reload_config()
            return self.build_start()

        affected: dict[str, tuple[GenerationRoot, Path]] = {}
        for path in changed:
            for root in self.roots_for(path):
                affected.setdefault(root.name, (root, path))

        results = tuple(
            generate(
                root,
                self.config,
                collector=self._collector,
                trigger_path=str(path),
                verbose=self._verbose,
            )
            for root, path in affected.values()
        )
        self._report(results)
        return results

    def _report(self, results: tuple[GenerationResult, ...]) -> None:
        if self._quiet:
            return
        for result in results:
            if result.written:
                print(f"  Generated {result.output_path}", file=sys.stderr)
            for warning in result.warnings:
                print(f"  ! {warning}", file=sys.stderr)
