"""Tests for burrow.observability.profiler — per-stage pass timing."""

from __future__ import annotations

import io
import sys
from unittest.mock import patch

from burrow.observability.events import GenerationProfile
from burrow.observability.log import EventLog
from burrow.observability.profiler import (
    STAGES,
    GenerationProfiler,
    compute_aggregate_stats,
)


def _run(profiler: GenerationProfiler, root: str = "main", routes: int = 1) -> GenerationProfile:
    profiler.begin(root)
    for stage in STAGES:
        profiler.start(stage)
        profiler.stop(stage)
    return profiler.finish(routes=routes)


class TestGenerationProfiler:
    """Tests for the generation profiler."""

    def test_begin_and_finish_emits_event(self) -> None:
        log = EventLog()
        profile = _run(GenerationProfiler(log), routes=4)

        assert isinstance(profile, GenerationProfile)
        assert profile.root == "main"
        assert profile.routes == 4
        assert profile.total_ms > 0
        assert log.query(limit=1) == [profile]

    def test_stage_timings_non_negative(self) -> None:
        profile = _run(GenerationProfiler(EventLog()))
        for stage in STAGES:
            assert getattr(profile, f"{stage}_ms") >= 0

    def test_unknown_stage_ignored(self) -> None:
        profiler = GenerationProfiler(EventLog())
        profiler.begin("main")
        profiler.start("bundle")
        profiler.stop("bundle")
        assert profiler.finish().routes == 0

    def test_begin_resets_previous_pass(self) -> None:
        profiler = GenerationProfiler(EventLog())
        _run(profiler)
        profiler.begin("/admin/*")
        profile = profiler.finish()
        assert profile.root == "/admin/*"
        assert profile.scan_ms == 0.0

    def test_verbose_prints_summary(self) -> None:
        profiler = GenerationProfiler(EventLog(), verbose=True)

        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            _run(profiler, root="/admin/*", routes=3)

        output = buf.getvalue()
        assert "/admin/*" in output
        assert "3 routes" in output
        assert "scan:" in output
        assert "write:" in output

    def test_verbose_singular_route(self) -> None:
        profiler = GenerationProfiler(EventLog(), verbose=True)
        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            _run(profiler, routes=1)
        assert "1 route " in buf.getvalue()

    def test_silent_when_not_verbose(self) -> None:
        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            _run(GenerationProfiler(EventLog()))
        assert buf.getvalue() == ""


class TestAggregateStats:
    """Tests for compute_aggregate_stats."""

    def test_empty_log(self) -> None:
        assert compute_aggregate_stats(EventLog()) == {"count": 0}

    def test_with_profiles(self) -> None:
        log = EventLog()
        profiler = GenerationProfiler(log)
        for _ in range(10):
            _run(profiler)

        stats = compute_aggregate_stats(log)
        assert stats["count"] == 10
        assert set(stats["total_ms"]) == {"p50", "p95", "p99", "min", "max"}
        assert stats["total_ms"]["min"] <= stats["total_ms"]["max"]
        assert set(stats["avg_by_stage_ms"]) == set(STAGES)

    def test_limit(self) -> None:
        log = EventLog()
        profiler = GenerationProfiler(log)
        for _ in range(5):
            _run(profiler)
        assert compute_aggregate_stats(log, limit=2)["count"] == 2
