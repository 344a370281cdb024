"""Tests for burrow.app — build entry point and the dev event loop."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from burrow._errors import ConventionError
from burrow.app import _consume_events, _print_session_stats, build
from burrow.config import BurrowConfig
from burrow.config_loader import load_config
from burrow.observability import EventLog, GenerationCollector, GenerationProfiler, RoutesGenerated
from burrow.plugin import RoutesPlugin
from burrow.watcher import ChangeEvent

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from conftest import PageWriter


class _ScriptedWatcher:
    """Replays fixed batches of events."""

    def __init__(self, *batches: list[ChangeEvent]) -> None:
        self._batches = batches
        self.configs: list[BurrowConfig] = []

    async def batches(self) -> AsyncIterator[tuple[ChangeEvent, ...]]:
        for batch in self._batches:
            yield tuple(batch)

    def update_config(self, config: BurrowConfig) -> None:
        self.configs.append(config)


class TestBuild:
    """build() — one-shot generation."""

    def test_writes_artifact(self, tmp_path: Path, pages: PageWriter) -> None:
        pages("index.jsx", "users/[id].jsx")
        (result,) = build(tmp_path)
        assert result.written is True
        assert result.route_count == 3
        text = (tmp_path / "src" / "routes.runtime.jsx").read_text()
        assert '"path": "/users/:id"' in text

    def test_second_build_is_noop(self, tmp_path: Path, pages: PageWriter) -> None:
        pages("index.jsx")
        build(tmp_path)
        (result,) = build(tmp_path)
        assert result.written is False

    def test_overrides_config_file(self, tmp_path: Path, src: Path) -> None:
        (tmp_path / "burrow.yaml").write_text("routes_dir: missing\n")
        (src / "routes").mkdir()
        (src / "routes" / "index.jsx").write_text("export default null;\n")
        (result,) = build(tmp_path, routes_dir="routes")
        assert result.route_count == 1

    def test_summary_printed(
        self, tmp_path: Path, pages: PageWriter, capsys: pytest.CaptureFixture[str],
    ) -> None:
        pages("index.jsx")
        build(tmp_path)
        err = capsys.readouterr().err
        assert "1 of 1 artifact updated" in err
        assert "Done in" in err

    def test_error_propagates(self, tmp_path: Path, pages: PageWriter) -> None:
        pages("Index.jsx")
        with pytest.raises(ConventionError, match="index routes must be named"):
            build(tmp_path)


class TestConsumeEvents:
    """_consume_events — the dev loop body."""

    @pytest.mark.asyncio
    async def test_route_event_regenerates(self, tmp_path: Path, pages: PageWriter) -> None:
        routes = pages("index.jsx")
        plugin = RoutesPlugin(load_config(tmp_path), project=tmp_path.resolve(), quiet=True)
        plugin.build_start()
        (routes / "about.jsx").write_text("export default null;\n")
        watcher = _ScriptedWatcher([
            ChangeEvent(path=routes / "about.jsx", kind="created", category="route"),
        ])

        await _consume_events(watcher, plugin)  # type: ignore[arg-type]

        assert "'./pages/about'" in plugin.config.output_path.read_text()
        assert watcher.configs == []

    @pytest.mark.asyncio
    async def test_failure_keeps_loop_running(
        self, tmp_path: Path, pages: PageWriter, capsys: pytest.CaptureFixture[str],
    ) -> None:
        routes = pages("index.jsx")
        plugin = RoutesPlugin(load_config(tmp_path), project=tmp_path.resolve(), quiet=True)
        plugin.build_start()
        bad = routes / "_layout.lazy_.jsx"
        bad.write_text("export default null;\n")
        watcher = _ScriptedWatcher([
            ChangeEvent(path=bad, kind="created", category="route"),
        ])

        await _consume_events(watcher, plugin)  # type: ignore[arg-type]

        assert "Generation error (_layout.lazy_.jsx)" in capsys.readouterr().err
        assert "lazy_" not in plugin.config.output_path.read_text()

    @pytest.mark.asyncio
    async def test_config_event_updates_watcher(self, tmp_path: Path, pages: PageWriter) -> None:
        pages("index.jsx")
        project = tmp_path.resolve()
        plugin = RoutesPlugin(load_config(project), project=project, quiet=True)
        config_file = project / "burrow.yaml"
        config_file.write_text("output_name: app-routes.jsx\n")
        watcher = _ScriptedWatcher([
            ChangeEvent(path=config_file, kind="created", category="config"),
        ])

        await _consume_events(watcher, plugin)  # type: ignore[arg-type]

        assert [c.output_name for c in watcher.configs] == ["app-routes.jsx"]
        assert (project / "src" / "app-routes.jsx").is_file()

    @pytest.mark.asyncio
    async def test_batch_regenerates_each_root_once(self, tmp_path: Path, pages: PageWriter) -> None:
        routes = pages("index.jsx", "about.jsx")
        collector = GenerationCollector(EventLog())
        plugin = RoutesPlugin(
            load_config(tmp_path), collector=collector, project=tmp_path.resolve(), quiet=True,
        )
        plugin.build_start()
        (routes / "about.jsx").rename(routes / "info.jsx")
        watcher = _ScriptedWatcher([
            ChangeEvent(path=routes / "about.jsx", kind="deleted", category="route"),
            ChangeEvent(path=routes / "info.jsx", kind="created", category="route"),
        ])

        await _consume_events(watcher, plugin)  # type: ignore[arg-type]

        generated = collector.log.query(event_type=RoutesGenerated)
        assert len(generated) == 2  # initial build plus one pass for the batch
        assert "'./pages/info'" in plugin.config.output_path.read_text()

class TestSessionStats:
    """_print_session_stats — totals printed when dev stops."""

    def test_without_passes(self, capsys: pytest.CaptureFixture[str]) -> None:
        _print_session_stats(EventLog())
        err = capsys.readouterr().err
        assert "Stopped after 0 generation events" in err
        assert "passes" not in err

    def test_with_passes(self, capsys: pytest.CaptureFixture[str]) -> None:
        log = EventLog()
        profiler = GenerationProfiler(log)
        for _ in range(3):
            profiler.begin("main")
            profiler.finish(routes=2)
        _print_session_stats(log)
        err = capsys.readouterr().err
        assert "Stopped after 3 generation events" in err
        assert "3 passes: p50" in err
        assert "p95" in err
