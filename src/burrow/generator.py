"""Generation passes — scan, merge, order, emit and write one artifact.

A pass always rebuilds its artifact from a fresh directory scan; nothing is
patched incrementally.  Writes are atomic (temporary file + ``os.replace``)
and skipped when the rendered text matches the file on disk, so an
unchanged tree never touches the artifact.  Any error leaves the previous
artifact exactly as it was.
"""

from __future__ import annotations

import os
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from burrow._errors import BurrowError, EmitError
from burrow.emit.imports import ImportTable
from burrow.emit.module import render_root_module, render_sub_module
from burrow.observability.profiler import GenerationProfiler
from burrow.routes.merge import RouteMerger, relativize
from burrow.routes.ordering import order_routes
from burrow.routes.tree import build_tree

if TYPE_CHECKING:
    from collections.abc import Sequence

    from burrow.config import BurrowConfig, GenerationRoot
    from burrow.observability.collector import GenerationCollector
    from burrow.routes.merge import MergeRecord
    from burrow.routes.tree import RouteNode


@dataclass(frozen=True, slots=True)
class RenderedArtifact:
    """An artifact rendered in memory, not yet written.

    Attributes:
        root: The generation root it belongs to.
        text: Complete module source.
        routes: Ordered top-level route records.
        route_count: Number of records, nested ones included.
        import_count: Number of page modules imported.
        files: Page files scanned.
        directories: Non-empty directories scanned.
        warnings: Non-fatal merge warnings.

    """

    root: GenerationRoot
    text: str
    routes: tuple[MergeRecord, ...]
    route_count: int
    import_count: int
    files: int
    directories: int
    warnings: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Outcome of one generation pass.

    Attributes:
        root: Generation root name (``"main"`` or a mount path).
        output_path: Artifact file.
        route_count: Number of route records, nested ones included.
        import_count: Number of page modules imported.
        written: False when the artifact on disk was already up to date.
        warnings: Non-fatal merge warnings.
        duration_ms: Wall-clock time of the pass.

    """

    root: str
    output_path: Path
    route_count: int
    import_count: int
    written: bool
    warnings: tuple[str, ...]
    duration_ms: float


def count_routes(records: Sequence[MergeRecord]) -> int:
    """Count *records* and all their descendants."""
    return sum(1 + count_routes(record.children) for record in records)


def _count_nodes(nodes: Sequence[RouteNode]) -> tuple[int, int]:
    files = directories = 0
    for node in nodes:
        if node.children is not None:
            directories += 1
            sub_files, sub_dirs = _count_nodes(node.children)
            files += sub_files
            directories += sub_dirs
        else:
            files += 1
    return files, directories


def render(
    root: GenerationRoot,
    config: BurrowConfig,
    *,
    profiler: GenerationProfiler | None = None,
) -> RenderedArtifact:
    """Render the artifact for *root* without touching the filesystem output.

    Raises:
        ConventionError: A page file breaks the naming conventions.
        RouteCollisionError: A mount collides with a page route, or two
            modules bind the same identifier.

    """
    convention = config.convention
    imports = ImportTable(handle_export=convention.handle_export)

    if profiler is not None:
        profiler.start("scan")
    nodes = build_tree(
        root.routes_path,
        convention,
        import_prefix="./" + PurePosixPath(config.routes_dir).as_posix(),
    )
    if profiler is not None:
        profiler.stop("scan")

    if profiler is not None:
        profiler.start("merge")
    merger = RouteMerger(imports, convention)
    merger.collect(nodes)
    merger.resolve()
    if root.mounts:
        merger.inject_mounts(root.mounts, config.mount_import)
    routes = merger.finish()
    if profiler is not None:
        profiler.stop("merge")

    if profiler is not None:
        profiler.start("order")
    routes = order_routes(routes)
    if profiler is not None:
        profiler.stop("order")

    if profiler is not None:
        profiler.start("emit")
    if root.is_root:
        text = render_root_module(routes, imports)
    else:
        text = render_sub_module(
            relativize(routes), imports, router_package=convention.router_package,
        )
    if profiler is not None:
        profiler.stop("emit")

    files, directories = _count_nodes(nodes)
    return RenderedArtifact(
        root=root,
        text=text,
        routes=tuple(routes),
        route_count=count_routes(routes),
        import_count=len(imports),
        files=files,
        directories=directories,
        warnings=tuple(merger.warnings),
    )


def write_artifact(path: Path, text: str) -> bool:
    """Atomically replace *path* with *text*.

    Returns False (and leaves the file untouched) when *path* already holds
    exactly *text*.

    Raises:
        EmitError: If the file cannot be written.  The previous file, if
            any, is left in place.

    """
    try:
        if path.is_file() and path.read_text(encoding="utf-8") == text:
            return False
    except (OSError, UnicodeDecodeError):
        pass  # Unreadable old artifact: overwrite it

    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(text)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        msg = f"Failed to write {path}: {exc}"
        raise EmitError(msg) from exc
    return True


def _commit(
    artifact: RenderedArtifact,
    *,
    t0: float,
    profiler: GenerationProfiler | None,
    collector: GenerationCollector | None,
) -> GenerationResult:
    root = artifact.root
    if profiler is not None:
        profiler.start("write")
    written = write_artifact(root.output_path, artifact.text)
    if profiler is not None:
        profiler.stop("write")
        profiler.finish(routes=artifact.route_count)

    duration_ms = (time.perf_counter() - t0) * 1000
    if collector is not None:
        collector.record_generated(
            root.name,
            str(root.output_path),
            routes=artifact.route_count,
            imports=artifact.import_count,
            written=written,
            duration_ms=duration_ms,
        )

    return GenerationResult(
        root=root.name,
        output_path=root.output_path,
        route_count=artifact.route_count,
        import_count=artifact.import_count,
        written=written,
        warnings=artifact.warnings,
        duration_ms=duration_ms,
    )


def _render_recorded(
    root: GenerationRoot,
    config: BurrowConfig,
    *,
    collector: GenerationCollector | None,
    profiler: GenerationProfiler | None,
    trigger_path: str,
) -> RenderedArtifact:
    t_scan = time.perf_counter()
    try:
        artifact = render(root, config, profiler=profiler)
    except BurrowError as exc:
        if collector is not None:
            collector.record_failure(root.name, exc, trigger_path=trigger_path)
        raise
    if collector is not None:
        collector.record_scan(
            root.name,
            str(root.routes_path),
            files=artifact.files,
            directories=artifact.directories,
            scan_ms=(time.perf_counter() - t_scan) * 1000,
        )
    return artifact


def generate(
    root: GenerationRoot,
    config: BurrowConfig,
    *,
    collector: GenerationCollector | None = None,
    trigger_path: str = "",
    verbose: bool = False,
) -> GenerationResult:
    """Run one full pass for *root*: render, then write if changed.

    Args:
        root: The artifact to regenerate.
        config: Project configuration.
        collector: Optional event collector for observability.
        trigger_path: File change that started the pass, for the event log.
        verbose: Print a per-stage timing line to stderr.

    Raises:
        BurrowError: On any convention, collision or write failure.  The
            previous artifact is left untouched.

    """
    t0 = time.perf_counter()
    profiler = None
    if collector is not None:
        profiler = GenerationProfiler(collector.log, verbose=verbose)
        profiler.begin(root.name)

    artifact = _render_recorded(
        root, config, collector=collector, profiler=profiler, trigger_path=trigger_path,
    )
    try:
        return _commit(artifact, t0=t0, profiler=profiler, collector=collector)
    except BurrowError as exc:
        if collector is not None:
            collector.record_failure(root.name, exc, trigger_path=trigger_path)
        raise


def generate_all(
    config: BurrowConfig,
    *,
    collector: GenerationCollector | None = None,
    verbose: bool = False,
) -> tuple[GenerationResult, ...]:
    """Generate the main artifact and every sub-router artifact.

    Every root is rendered before any file is written, so a convention or
    collision error in one root leaves all artifacts untouched.

    """
    t0 = time.perf_counter()
    rendered: list[tuple[RenderedArtifact, GenerationProfiler | None]] = []
    for root in config.generation_roots():
        profiler = None
        if collector is not None:
            profiler = GenerationProfiler(collector.log, verbose=verbose)
            profiler.begin(root.name)
        artifact = _render_recorded(
            root, config, collector=collector, profiler=profiler, trigger_path="",
        )
        rendered.append((artifact, profiler))

    results: list[GenerationResult] = []
    for artifact, profiler in rendered:
        try:
            results.append(_commit(artifact, t0=t0, profiler=profiler, collector=collector))
        except BurrowError as exc:
            if collector is not None:
                collector.record_failure(artifact.root.name, exc)
            raise
    return tuple(results)
