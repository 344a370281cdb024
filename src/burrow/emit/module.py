"""Artifact rendering — turn ordered route records into module source.

The main artifact exports a route object array for
``createBrowserRouter``; a sub-router artifact exports a component that
renders a ``<Routes>`` block and is mounted below ``mount/*`` in the main
tree.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from burrow.emit.printer import format_jsx_routes, format_routes

if TYPE_CHECKING:
    from collections.abc import Sequence

    from burrow.emit.imports import ImportTable
    from burrow.routes.merge import MergeRecord

HEADER = "// Generated by burrow from the routes directory. Do not edit."

ROUTES_BINDING = "routes"
SUB_ROUTES_BINDING = "SubRoutes"


def _assemble(imports: ImportTable, body: Sequence[str]) -> str:
    sections = [HEADER]
    statements = imports.render_imports()
    if statements:
        sections.append("\n".join(statements))
    thunks = imports.render_lazy()
    if thunks:
        sections.append("\n".join(thunks))
    sections.extend(body)
    return "\n\n".join(sections) + "\n"


def render_root_module(routes: Sequence[MergeRecord], imports: ImportTable) -> str:
    """Render the main artifact: imports, lazy thunks, default-exported route array."""
    imports.reserve(ROUTES_BINDING)
    return _assemble(imports, [
        f"const {ROUTES_BINDING} = {format_routes(routes)};",
        f"export default {ROUTES_BINDING};",
    ])


def render_sub_module(
    routes: Sequence[MergeRecord],
    imports: ImportTable,
    *,
    router_package: str = "react-router-dom",
) -> str:
    """Render a sub-router artifact: a component returning nested ``<Route>`` elements.

    *routes* should already carry paths relative to their parents
    (see ``burrow.routes.merge.relativize``).

    """
    imports.reserve(SUB_ROUTES_BINDING)
    imports.add_named(router_package, "Route")
    imports.add_named(router_package, "Routes")

    if routes:
        block = f"  <Routes>\n{format_jsx_routes(routes, level=2)}\n  </Routes>"
    else:
        block = "  <Routes />"

    return _assemble(imports, [
        f"const {SUB_ROUTES_BINDING} = () => (\n{block}\n);",
        f"export default {SUB_ROUTES_BINDING};",
    ])
