"""Burrow CLI — burrow build / burrow dev.

Entry point for the ``burrow`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys

from burrow._errors import BurrowError


def _add_project_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("project", nargs="?", default=".", help="Project directory")
    parser.add_argument(
        "--root", default=None, help="Source root holding the routes directory (default: src)",
    )
    parser.add_argument(
        "--routes-dir", default=None, help="Routes directory under the source root (default: pages)",
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the burrow CLI."""
    parser = argparse.ArgumentParser(
        prog="burrow",
        description="File-based route generation for React Router.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # burrow build
    build_parser = subparsers.add_parser(
        "build",
        help="Generate route artifacts once",
    )
    _add_project_arguments(build_parser)

    # burrow dev
    dev_parser = subparsers.add_parser(
        "dev",
        help="Generate route artifacts and regenerate on change",
    )
    _add_project_arguments(dev_parser)
    dev_parser.add_argument(
        "--verbose", action="store_true", help="Print per-stage timings for every pass",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from burrow import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from burrow.app import build, dev

    try:
        if args.command == "build":
            build(args.project, root=args.root, routes_dir=args.routes_dir)
        elif args.command == "dev":
            dev(
                args.project,
                verbose=args.verbose,
                root=args.root,
                routes_dir=args.routes_dir,
            )
    except BurrowError as exc:
        print(f"burrow: error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
