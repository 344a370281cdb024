"""Shared test fixtures for burrow."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TypeAlias

import pytest

from burrow.config import BurrowConfig

PageWriter: TypeAlias = Callable[..., Path]


def write_pages(routes: Path, names: Iterable[str]) -> Path:
    """Create an empty page module for every relative name under *routes*.

    Names ending in ``/`` create empty directories.
    """
    routes.mkdir(parents=True, exist_ok=True)
    for name in names:
        target = routes / name
        if name.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("export default function Page() { return null; }\n")
    return routes


@pytest.fixture
def src(tmp_path: Path) -> Path:
    """Source root of a throwaway project (``<tmp>/src``)."""
    root = tmp_path / "src"
    root.mkdir()
    return root


@pytest.fixture
def pages(src: Path) -> PageWriter:
    """Write page files under ``src/pages`` (or under ``src/<subdir>/pages``).

    Usage::

        pages("index.jsx", "users/[id].jsx")
        pages("index.jsx", under="admin")
    """

    def _write(*names: str, under: str | None = None) -> Path:
        base = src / under if under else src
        return write_pages(base / "pages", names)

    return _write


@pytest.fixture
def config(src: Path) -> BurrowConfig:
    """A BurrowConfig rooted at the temp source root."""
    return BurrowConfig(root=src)
