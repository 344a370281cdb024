"""Tests for burrow.banner — status banner output."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from unittest.mock import patch

from burrow import __version__
from burrow.banner import print_banner
from burrow.config import BurrowConfig


class TestPrintBanner:
    """Tests for the status banner."""

    def _capture_banner(self, config: BurrowConfig | None = None, **kwargs: object) -> str:
        """Call print_banner and capture stderr output."""
        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            if config is None:
                config = BurrowConfig(root=Path("/tmp/test-app/src"))
            print_banner(config, **kwargs)
        return buf.getvalue()

    def test_build_mode_banner(self) -> None:
        output = self._capture_banner(mode="build", route_count=5, load_ms=100.0)

        assert "burrow" in output
        assert __version__ in output
        assert "[build]" in output
        assert "5 routes in 1 artifact" in output
        assert "100ms" in output
        assert "output:" in output
        assert "routes.runtime.jsx" in output
        assert "Watching" not in output

    def test_dev_mode_banner(self) -> None:
        output = self._capture_banner(mode="dev", route_count=2, root_count=2)

        assert "[dev]" in output
        assert "2 routes in 2 artifacts" in output
        assert "Watching for changes" in output

    def test_single_route_singular(self) -> None:
        output = self._capture_banner(mode="build", route_count=1)
        assert "1 route in" in output

    def test_pages_directory_shown(self) -> None:
        output = self._capture_banner(mode="build")
        assert str(Path("/tmp/test-app/src/pages")) in output

    def test_sub_routers_listed(self) -> None:
        config = BurrowConfig(
            root=Path("/tmp/test-app/src"),
            sub_routers={  # type: ignore[arg-type]
                "/admin": {"import_path": "admin"},
                "/shop": {"import_path": "shop"},
            },
        )
        output = self._capture_banner(config, mode="build")
        assert "sub-routers: /admin/*, /shop/*" in output

    def test_no_sub_routers_line_without_mounts(self) -> None:
        assert "sub-routers" not in self._capture_banner(mode="build")

    def test_no_timing_when_zero(self) -> None:
        output = self._capture_banner(mode="build", route_count=3)
        assert "3 routes in 1 artifact\n" in output

    def test_warnings_shown(self) -> None:
        output = self._capture_banner(mode="build", warnings=["orphan loader users.loader_.jsx"])
        assert "orphan loader users.loader_.jsx" in output
