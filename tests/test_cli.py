"""Tests for burrow._cli — argument parsing and command dispatch."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from burrow._cli import _build_parser, main

if TYPE_CHECKING:
    from conftest import PageWriter


class TestBuildParser:
    """_build_parser — CLI argument parsing."""

    def test_build_default_args(self) -> None:
        args = _build_parser().parse_args(["build"])
        assert args.command == "build"
        assert args.project == "."
        assert args.root is None
        assert args.routes_dir is None

    def test_build_with_project(self) -> None:
        args = _build_parser().parse_args(["build", "my-app/"])
        assert args.project == "my-app/"

    def test_build_all_flags(self) -> None:
        args = _build_parser().parse_args([
            "build", "my-app/", "--root", "app", "--routes-dir", "routes",
        ])
        assert args.project == "my-app/"
        assert args.root == "app"
        assert args.routes_dir == "routes"

    def test_dev_default_args(self) -> None:
        args = _build_parser().parse_args(["dev"])
        assert args.command == "dev"
        assert args.project == "."
        assert args.verbose is False

    def test_dev_verbose(self) -> None:
        args = _build_parser().parse_args(["dev", "--verbose"])
        assert args.verbose is True

    def test_build_rejects_verbose(self) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["build", "--verbose"])

    def test_no_command(self) -> None:
        args = _build_parser().parse_args([])
        assert args.command is None


class TestMain:
    """main — dispatch and exit codes."""

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "usage: burrow" in capsys.readouterr().out

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        from burrow import __version__

        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_build_writes_artifact(self, tmp_path: Path, pages: PageWriter) -> None:
        pages("index.jsx", "about.jsx")
        main(["build", str(tmp_path)])
        artifact = tmp_path / "src" / "routes.runtime.jsx"
        assert "'./pages/about'" in artifact.read_text()

    def test_build_custom_routes_dir(self, tmp_path: Path, src: Path) -> None:
        (src / "routes").mkdir()
        (src / "routes" / "index.jsx").write_text("export default null;\n")
        main(["build", str(tmp_path), "--routes-dir", "routes"])
        assert "'./routes/index'" in (src / "routes.runtime.jsx").read_text()

    def test_build_error_exits_1(
        self, tmp_path: Path, pages: PageWriter, capsys: pytest.CaptureFixture[str],
    ) -> None:
        pages("_layout.lazy_.jsx")
        with pytest.raises(SystemExit) as exc_info:
            main(["build", str(tmp_path)])
        assert exc_info.value.code == 1
        assert "burrow: error:" in capsys.readouterr().err
        assert not (tmp_path / "src" / "routes.runtime.jsx").exists()
