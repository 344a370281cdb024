"""Startup banner — mode-aware status output.

Prints a short status block with timing and the artifacts written.
Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from burrow._types import BurrowMode
    from burrow.config import BurrowConfig


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""
_BROWN = "\033[38;5;137m" if _COLOR else ""


# ---------------------------------------------------------------------------
# Mode badges
# ---------------------------------------------------------------------------

_MODE_STYLES: dict[str, tuple[str, str]] = {
    "dev": (_GREEN, "dev"),
    "build": (_YELLOW, "build"),
}


def _mode_badge(mode: str) -> str:
    """Return a styled [mode] badge."""
    color, label = _MODE_STYLES.get(mode, (_DIM, mode))
    return f"{color}[{label}]{_RESET}"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_banner(
    config: BurrowConfig,
    mode: BurrowMode,
    *,
    route_count: int = 0,
    root_count: int = 1,
    load_ms: float = 0.0,
    warnings: list[str] | None = None,
) -> None:
    """Print the burrow status banner to stderr.

    Args:
        config: Resolved BurrowConfig.
        mode: ``"dev"`` or ``"build"``.
        route_count: Route records generated across every artifact.
        root_count: Number of artifacts (main app plus sub-routers).
        load_ms: Time spent generating in milliseconds.
        warnings: Optional list of warning messages to display.

    """
    from burrow import __version__

    badge = _mode_badge(mode)
    header = f"  {_BROWN}{_BOLD}burrow{_RESET} {_DIM}v{__version__}{_RESET}  {badge}"

    lines: list[str] = [
        "",
        header,
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines.append(
        f"  {_DIM}├─{_RESET} {_plural(route_count, 'route')} "
        f"in {_plural(root_count, 'artifact')}{timing}"
    )
    lines.append(f"  {_DIM}├─{_RESET} pages: {_DIM}{config.routes_path}{_RESET}")

    if config.sub_routers:
        mounts = ", ".join(m.mount_path for m in config.sub_routers)
        lines.append(f"  {_DIM}├─{_RESET} sub-routers: {mounts}")

    lines.append(f"  {_DIM}└─{_RESET} output: {_DIM}{config.output_path}{_RESET}")

    if mode == "dev":
        lines.append("")
        lines.append(f"  {_DIM}Watching for changes...{_RESET}")

    if warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)
