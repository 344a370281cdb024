"""Route merge engine — fold the scanned tree into nested route records.

The filesystem hierarchy and the route hierarchy diverge: a layout lives
*beside* the routes it wraps, a loader beside the page it feeds, and a
dotted file name nests below a path that may come from a directory scanned
later.  Records are therefore merged by logical path, not by directory.

The merge runs in two phases:

1. **Collect** — walk the tree depth-first.  Directories, layouts, error
   boundaries and loaders are *structural*: they fold into the one record
   kept per logical path (first writer creates it, later ones merge their
   role into it).  Every newly created record and every page leaf (plain,
   lazy, catch-all, index) is queued as a pending link to an anchor path.
2. **Resolve** — once every record exists, a page whose exact path owns a
   loader-only record folds its element into that record (or becomes the
   index route of a directory record holding that loader); then each pending
   link is attached, in scan order, to the nearest existing record found by
   walking its anchor up one segment at a time.  The root record ``/``
   always exists, so every walk terminates.

Because attachment waits for phase 2, the result does not depend on
whether a parent record is created before or after its children are seen.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Literal, TypeAlias

from burrow._errors import RouteCollisionError
from burrow._types import ImportPath, RoutePath
from burrow.conventions import Convention
from burrow.emit.imports import ImportTable, quote_module
from burrow.emit.nodes import CodeRef, JsxElement, LiteralValue, Value
from burrow.routes.ordering import relative_segment
from burrow.routes.paths import parent_path_of

if TYPE_CHECKING:
    from burrow.config import SubRouterMount
    from burrow.routes.tree import RouteNode

Origin: TypeAlias = Literal["root", "directory", "layout", "error", "loader", "page", "mount", "redirect"]

# Emission order of record attributes
KEY_ORDER: tuple[str, ...] = (
    "index",
    "path",
    "element",
    "errorElement",
    "loader",
    "handle",
    "lazy",
)


@dataclass(slots=True)
class MergeRecord:
    """One entry of the final nested route structure.

    Attributes:
        path: Absolute logical path, or *None* for index routes.
        index: Index route of its parent.
        element: Rendered element.
        error_element: Error boundary element.
        loader: Data loader reference.
        handle: Route handle reference.
        lazy: Route-level lazy import thunk.
        children: Nested records in attachment order.
        origin: What created the record.
        source: Page file or directory the record was created from.

    """

    path: RoutePath | None = None
    index: bool = False
    element: Value | None = None
    error_element: Value | None = None
    loader: Value | None = None
    handle: Value | None = None
    lazy: Value | None = None
    children: list["MergeRecord"] = field(default_factory=list)
    origin: Origin = "page"
    source: str | None = None

    @property
    def is_path_only(self) -> bool:
        """True when the record carries nothing but a path."""
        return (
            self.path is not None
            and not self.index
            and self.element is None
            and self.error_element is None
            and self.loader is None
            and self.handle is None
            and self.lazy is None
        )

    def entries(self) -> list[tuple[str, Value]]:
        """Record attributes in emission order, absent ones skipped."""
        values: dict[str, Value | None] = {
            "index": LiteralValue(True) if self.index else None,
            "path": LiteralValue(self.path) if self.path is not None else None,
            "element": self.element,
            "errorElement": self.error_element,
            "loader": self.loader,
            "handle": self.handle,
            "lazy": self.lazy,
        }
        return [(key, values[key]) for key in KEY_ORDER if values[key] is not None]


class RouteMerger:
    """Merge scanned route nodes into records keyed by logical path.

    Args:
        imports: Import table of the artifact being generated.
        convention: Naming conventions (lazy mode, router package).

    """

    __slots__ = ("_convention", "_imports", "_pages", "_pending", "_records", "root", "warnings")

    def __init__(self, imports: ImportTable, convention: Convention) -> None:
        self._imports = imports
        self._convention = convention
        self.root = MergeRecord(path="/", origin="root")
        self._records: dict[RoutePath, MergeRecord] = {"/": self.root}
        # First page record per path, for loader pairing and collision checks
        self._pages: dict[RoutePath, MergeRecord] = {}
        self._pending: list[tuple[MergeRecord, RoutePath]] = []
        self.warnings: list[str] = []

    @property
    def records(self) -> dict[RoutePath, MergeRecord]:
        """Structural records keyed by logical path."""
        return dict(self._records)

    # ----- Phase 1: collect -----

    def collect(self, nodes: Iterable[RouteNode]) -> None:
        """Walk *nodes* depth-first, creating records and queueing links."""
        for node in nodes:
            if node.children is not None:
                if node.path not in self._records:
                    self._register(MergeRecord(
                        path=node.path, origin="directory", source=node.source,
                    ))
                self.collect(node.children)
            elif node.is_layout:
                self._collect_layout(node)
            elif node.is_error:
                self._collect_error(node)
            elif node.is_loader:
                self._collect_loader(node)
            else:
                self._collect_page(node)

    def _register(self, record: MergeRecord) -> MergeRecord:
        assert record.path is not None
        self._records[record.path] = record
        self._pending.append((record, parent_path_of(record.path)))
        return record

    def _structural(self, node: RouteNode, origin: Origin) -> MergeRecord:
        record = self._records.get(node.path)
        if record is None:
            record = self._register(MergeRecord(path=node.path, origin=origin, source=node.source))
        return record

    def _component(self, node: RouteNode) -> JsxElement:
        assert node.symbol is not None and node.import_path is not None
        self._imports.add(node.symbol, node.import_path, lazy=node.is_lazy)
        return JsxElement(node.symbol)

    def _collect_layout(self, node: RouteNode) -> None:
        assert node.symbol is not None and node.import_path is not None
        handle = f"handle{node.symbol}"
        self._imports.add(node.symbol, node.import_path, handle=handle)
        record = self._structural(node, "layout")
        if record.element is not None:
            self._warn(f"{node.source} replaces the layout already set for {node.path}")
        record.element = JsxElement(node.symbol)
        record.handle = CodeRef(handle)

    def _collect_error(self, node: RouteNode) -> None:
        element = self._component(node)
        record = self._structural(node, "error")
        if record.error_element is not None:
            self._warn(f"{node.source} replaces the error boundary already set for {node.path}")
        record.error_element = element

    def _collect_loader(self, node: RouteNode) -> None:
        assert node.symbol is not None and node.import_path is not None
        self._imports.add(node.symbol, node.import_path)
        record = self._structural(node, "loader")
        if record.loader is not None:
            self._warn(f"{node.source} replaces the loader already set for {node.path}")
        record.loader = CodeRef(node.symbol)

    def _collect_page(self, node: RouteNode) -> None:
        record = MergeRecord(origin="page", source=node.source)
        if node.is_lazy and self._convention.lazy_mode == "route":
            assert node.import_path is not None
            record.lazy = CodeRef(f"() => import({quote_module(node.import_path)})")
        else:
            record.element = self._component(node)

        if node.is_index:
            # Index routes have a position, not a path
            record.index = True
            self._pending.append((record, node.path))
        else:
            record.path = node.path
            self._pages.setdefault(node.path, record)
            self._pending.append((record, parent_path_of(node.path)))

    # ----- Phase 2: resolve -----

    def resolve(self) -> MergeRecord:
        """Attach every pending link to its nearest existing ancestor record."""
        indexed = {anchor for record, anchor in self._pending if record.index}
        pending: list[tuple[MergeRecord, RoutePath]] = []
        for record, anchor in self._pending:
            target = self._loader_target(record)
            if target is None:
                pending.append((record, anchor))
                continue
            path = target.path
            assert path is not None
            if target.origin == "loader":
                target.element = record.element
                target.lazy = record.lazy
                self._pages[path] = target
            elif path in indexed:
                pending.append((record, anchor))
            else:
                # The directory record keeps the loader; the page renders below it
                record.path = None
                record.index = True
                indexed.add(path)
                pending.append((record, path))
        self._pending = []
        for record, anchor in pending:
            self._nearest(anchor, record).children.append(record)
        return self.root

    def _loader_target(self, record: MergeRecord) -> MergeRecord | None:
        """The record at a page's path that holds a loader but nothing to render."""
        if record.origin != "page" or record.path is None:
            return None
        target = self._records.get(record.path)
        if target is None or target.origin not in ("loader", "directory"):
            return None
        if target.loader is None or target.element is not None or target.lazy is not None:
            return None
        return target

    def _nearest(self, anchor: RoutePath, record: MergeRecord | None = None) -> MergeRecord:
        path = anchor
        while True:
            found = self._records.get(path)
            if found is not None and found is not record:
                return found
            if path == "/":
                return self.root
            path = parent_path_of(path)

    # ----- Sub-router mounts -----

    def inject_mounts(
        self,
        mounts: Sequence[SubRouterMount],
        module_for: Callable[[SubRouterMount], ImportPath],
    ) -> None:
        """Graft sub-router mounts in as synthetic children.

        Runs after ``resolve()``.  A mount with a ``default_route`` also gets
        a redirect record at its bare base path.

        Raises:
            RouteCollisionError: A mount (or its redirect) lands on a path a
                page file already claims.

        """
        for mount in mounts:
            path = mount.mount_path
            self._claim(path, f"sub-router {path}")

            self._imports.add(mount.symbol, module_for(mount), lazy=mount.is_lazy)
            record = MergeRecord(path=path, element=JsxElement(mount.symbol), origin="mount")
            self._pages[path] = record
            self._nearest(parent_path_of(path)).children.append(record)

            if mount.default_route:
                self._inject_redirect(mount)

    def _inject_redirect(self, mount: SubRouterMount) -> None:
        assert mount.default_route is not None
        self._imports.add_named(self._convention.router_package, "Navigate")
        element = JsxElement("Navigate", (
            ("to", LiteralValue(mount.default_route)),
            ("replace", LiteralValue(True)),
        ))
        base = mount.base_path
        if base == "/":
            owner = next((c for c in self.root.children if c.index), None)
            if owner is not None:
                source = f" ({owner.source})" if owner.source else ""
                msg = (
                    f"Duplicate index route for /: redirect for sub-router "
                    f"{mount.mount_path} collides with an existing route{source}"
                )
                raise RouteCollisionError(msg)
            record = MergeRecord(index=True, element=element, origin="redirect")
            self.root.children.append(record)
            return
        self._claim(base, f"redirect for sub-router {mount.mount_path}")
        record = MergeRecord(path=base, element=element, origin="redirect")
        self._pages[base] = record
        self._nearest(parent_path_of(base)).children.append(record)

    def _claim(self, path: RoutePath, what: str) -> None:
        owner = self._records.get(path) or self._pages.get(path)
        if owner is not None:
            source = f" ({owner.source})" if owner.source else ""
            msg = f"Duplicate route path: {path} ({what} collides with an existing route{source})"
            raise RouteCollisionError(msg)

    def _warn(self, message: str) -> None:
        self.warnings.append(message)

    # ----- Finish -----

    def finish(self) -> list[MergeRecord]:
        """Return the collapsed top-level route list."""
        return collapse([self.root])


def collapse(records: Sequence[MergeRecord], parent_path: RoutePath = "/") -> list[MergeRecord]:
    """Remove redundant path-only wrappers.

    A record carrying only a ``path`` and exactly one child is replaced by
    that child.  A promoted index child takes over the wrapper's path and
    stops being an index route, except directly under the root path.
    Path-only records left without children are dropped.

    Returns new records; the input is not modified.

    """
    result: list[MergeRecord] = []
    for record in records:
        own_path = record.path if record.path is not None else parent_path
        children = collapse(record.children, own_path)

        if record.is_path_only and not children:
            continue

        if record.is_path_only and len(children) == 1:
            (only,) = children
            if only.index and record.path != "/":
                only = replace(only, index=False, path=record.path)
            result.append(only)
            continue

        result.append(replace(record, children=children))
    return result


def merge_routes(
    nodes: Iterable[RouteNode],
    imports: ImportTable,
    convention: Convention,
    *,
    mounts: Sequence[SubRouterMount] = (),
    module_for: Callable[[SubRouterMount], ImportPath] | None = None,
) -> list[MergeRecord]:
    """Collect, resolve and collapse *nodes* into the top-level route list."""
    merger = RouteMerger(imports, convention)
    merger.collect(nodes)
    merger.resolve()
    if mounts:
        if module_for is None:
            msg = "module_for is required when mounts are given"
            raise ValueError(msg)
        merger.inject_mounts(mounts, module_for)
    return merger.finish()


def relativize(records: Sequence[MergeRecord], parent_path: RoutePath = "/") -> list[MergeRecord]:
    """Rewrite absolute paths relative to each record's parent route.

    Used for sub-router artifacts, whose ``<Routes>`` block renders below a
    ``mount/*`` route: ``/users/:id`` under ``/users`` becomes ``:id`` and
    the sub-router's own root ``/`` becomes a pathless layout route.

    Returns new records; the input is not modified.

    """
    result: list[MergeRecord] = []
    for record in records:
        if record.path is None:
            own_path = parent_path
            path = None
        else:
            own_path = record.path
            path = relative_segment(record.path, parent_path) or None
        result.append(replace(
            record,
            path=path,
            children=relativize(record.children, own_path),
        ))
    return result
