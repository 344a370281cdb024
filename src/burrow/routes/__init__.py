"""Route tree construction — from a pages directory to ordered route records.

Public API::

    from burrow.routes import build_tree, merge_routes, order_routes

    nodes = build_tree(Path("src/pages"), Convention())
    records = order_routes(merge_routes(nodes, imports, Convention()))
"""

from burrow.routes.merge import MergeRecord, RouteMerger, collapse, merge_routes, relativize
from burrow.routes.names import camel_case, mount_symbol, symbol_for
from burrow.routes.ordering import order_routes
from burrow.routes.paths import derive_path, parent_path_of
from burrow.routes.tree import RouteNode, build_tree

__all__ = [
    "MergeRecord",
    "RouteMerger",
    "RouteNode",
    "build_tree",
    "camel_case",
    "collapse",
    "derive_path",
    "merge_routes",
    "mount_symbol",
    "order_routes",
    "parent_path_of",
    "relativize",
    "symbol_for",
]
