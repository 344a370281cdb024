"""Route tree builder — walk a routes directory into intermediate nodes.

Produces one ``RouteNode`` per page file or non-empty directory.  Each node
already carries its logical path (inherited from its parent plus the
convention transforms), the module reference the generated code imports,
its binding name, and the role flags derived from its file name.

The walk is depth-first in a deterministic order: entries sort by code
point, except that the catch-all file is pinned first or last among its
siblings according to ``Convention.catch_all_position``.  That order is the
tie-break the sibling orderer preserves later.
"""

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from burrow._errors import ConventionError
from burrow._types import ImportPath, RoutePath, Symbol
from burrow.conventions import Convention
from burrow.routes.names import symbol_for
from burrow.routes.paths import derive_path, join_path


@dataclass(frozen=True, slots=True)
class RouteNode:
    """A single filesystem entry mapped onto the route namespace.

    Attributes:
        path: Logical route path (``/users/:id``, ``/docs/*``).
        source: Entry path relative to the routes directory (POSIX).
        import_path: Module reference for generated imports (files only).
        symbol: Generated binding name (files only).
        is_index: ``index`` file.
        is_layout: ``_layout`` file.
        is_error: ``_error`` file.
        is_lazy: Lazy-marked module.
        is_loader: Loader-marked module.
        is_catch_all: ``_any`` file; its path ends with ``/*``.
        children: Child nodes, in scan order (directories only).

    """

    path: RoutePath
    source: str
    import_path: ImportPath | None = None
    symbol: Symbol | None = None
    is_index: bool = False
    is_layout: bool = False
    is_error: bool = False
    is_lazy: bool = False
    is_loader: bool = False
    is_catch_all: bool = False
    children: tuple["RouteNode", ...] | None = None

    @property
    def is_directory(self) -> bool:
        return self.children is not None


def build_tree(
    routes_path: Path,
    convention: Convention,
    *,
    import_prefix: str | None = None,
) -> tuple[RouteNode, ...]:
    """Scan *routes_path* and return the top-level route nodes.

    Args:
        routes_path: Directory containing page modules.
        convention: Naming conventions to apply.
        import_prefix: Module prefix for generated imports.  Defaults to
            ``./<routes dir name>``, i.e. imports relative to the artifact
            written next to the routes directory.

    Returns:
        Top-level nodes in scan order, or ``()`` when *routes_path* does not
        exist.

    Raises:
        ConventionError: When a page file breaks the naming conventions.

    """
    if not routes_path.is_dir():
        return ()
    prefix = import_prefix if import_prefix is not None else f"./{routes_path.name}"
    return tuple(_walk(routes_path, routes_path, "/", convention, prefix))


def _sort_key(entry: Path, convention: Convention) -> tuple[int, str]:
    split = convention.split_name(entry.name) if entry.is_file() else None
    if split is not None and split.stem == convention.catch_all_name:
        return (1 if convention.catch_all_position == "last" else -1, entry.name)
    return (0, entry.name)


def _walk(
    directory: Path,
    routes_path: Path,
    parent_path: RoutePath,
    convention: Convention,
    prefix: str,
) -> list[RouteNode]:
    """Recursively build nodes for the entries of *directory*."""
    nodes: list[RouteNode] = []

    for entry in sorted(directory.iterdir(), key=lambda e: _sort_key(e, convention)):
        if entry.name.startswith("."):
            continue

        if entry.is_dir():
            group = convention.group_name(entry.name)
            if group is not None and convention.group_mode == "unwrap":
                # Route group: children join the parent's namespace
                nodes.extend(_walk(entry, routes_path, parent_path, convention, prefix))
                continue

            name = group if group is not None else entry.name
            path = derive_path(name, parent_path, convention)
            children = tuple(_walk(entry, routes_path, path, convention, prefix))
            if not children:
                continue
            nodes.append(RouteNode(
                path=path,
                source=entry.relative_to(routes_path).as_posix(),
                children=children,
            ))
        elif entry.is_file() and convention.is_route_file(entry.name):
            nodes.append(_file_node(entry, routes_path, parent_path, convention, prefix))

    return nodes


def _file_node(
    entry: Path,
    routes_path: Path,
    parent_path: RoutePath,
    convention: Convention,
    prefix: str,
) -> RouteNode:
    """Build a leaf node, enforcing the per-file conventions."""
    split = convention.split_name(entry.name)
    assert split is not None
    relative = entry.relative_to(routes_path).as_posix()
    stem = split.stem

    is_lazy = split.marker == "lazy"
    is_loader = split.marker == "loader"
    is_index = stem == convention.index_name
    is_layout = stem == convention.layout_name
    is_error = stem == convention.error_name
    is_catch_all = stem == convention.catch_all_name

    if not is_index and stem.lower() == convention.index_name.lower():
        msg = (
            f"{relative}: index routes must be named "
            f"{convention.index_name!r}, not {stem!r}"
        )
        raise ConventionError(msg)
    if is_layout and is_lazy:
        msg = f"{relative}: layouts cannot be lazy (the parent outlet needs a synchronous element)"
        raise ConventionError(msg)
    if is_catch_all and is_loader:
        msg = f"{relative}: catch-all routes cannot own a loader"
        raise ConventionError(msg)
    if sum((is_layout, is_error, is_loader)) > 1:
        msg = f"{relative}: a file can be only one of layout, error boundary or loader"
        raise ConventionError(msg)

    path = derive_path(entry.name, parent_path, convention)
    if is_catch_all:
        path = join_path(path, "*")

    module = PurePosixPath(relative)
    module = module.with_name(module.name[: -len(split.extension)])

    return RouteNode(
        path=path,
        source=relative,
        import_path=f"{prefix}/{module}",
        symbol=symbol_for(relative, convention, is_loader=is_loader, is_error=is_error),
        is_index=is_index,
        is_layout=is_layout,
        is_error=is_error,
        is_lazy=is_lazy,
        is_loader=is_loader,
        is_catch_all=is_catch_all,
    )
