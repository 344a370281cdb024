"""Printers for route records.

Two output shapes:

- ``format_routes`` renders an array of route objects.  Keys are quoted and
  indented like ``JSON.stringify(routes, null, 2)`` so diffs of generated
  files stay familiar, but live references (elements, loaders, handles,
  lazy thunks) are printed as code, not strings.
- ``format_jsx_routes`` renders nested ``<Route>`` elements for a
  ``<Routes>`` block.

Both walk typed values (``LiteralValue`` / ``CodeRef`` / ``JsxElement``);
nothing is patched into the text after serialization.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from burrow._errors import EmitError
from burrow.emit.nodes import CodeRef, JsxElement, LiteralValue

if TYPE_CHECKING:
    from collections.abc import Sequence

    from burrow.emit.nodes import Value
    from burrow.routes.merge import MergeRecord


def render_value(value: Value) -> str:
    """Render a typed value as a JavaScript expression."""
    if isinstance(value, LiteralValue):
        return json.dumps(value.value, ensure_ascii=False)
    if isinstance(value, CodeRef):
        return value.expr
    if isinstance(value, JsxElement):
        return render_element(value)
    msg = f"Cannot render value of type {type(value).__name__}"
    raise EmitError(msg)


def render_element(element: JsxElement) -> str:
    """Render a self-closing JSX element."""
    return f"<{element.symbol}{_render_props(element.props)} />"


def _render_props(props: Sequence[tuple[str, Value]]) -> str:
    rendered = ""
    for name, value in props:
        if isinstance(value, LiteralValue):
            if value.value is True:
                rendered += f" {name}"
            elif isinstance(value.value, str):
                rendered += f" {name}={json.dumps(value.value, ensure_ascii=False)}"
            else:
                rendered += f" {name}={{{render_value(value)}}}"
        else:
            rendered += f" {name}={{{render_value(value)}}}"
    return rendered


# ---------------------------------------------------------------------------
# Object literal form
# ---------------------------------------------------------------------------


def format_routes(records: Sequence[MergeRecord], *, indent: int = 2) -> str:
    """Render *records* as a JavaScript array literal."""
    return _format_list(records, 0, indent)


def _format_list(records: Sequence[MergeRecord], level: int, indent: int) -> str:
    if not records:
        return "[]"
    pad = " " * (indent * (level + 1))
    items = [pad + _format_record(record, level + 1, indent) for record in records]
    return "[\n" + ",\n".join(items) + "\n" + " " * (indent * level) + "]"


def _format_record(record: MergeRecord, level: int, indent: int) -> str:
    pad = " " * (indent * (level + 1))
    lines = [f"{pad}{json.dumps(key)}: {render_value(value)}" for key, value in record.entries()]
    if record.children:
        lines.append(f'{pad}"children": {_format_list(record.children, level + 1, indent)}')
    if not lines:
        return "{}"
    return "{\n" + ",\n".join(lines) + "\n" + " " * (indent * level) + "}"


# ---------------------------------------------------------------------------
# JSX form
# ---------------------------------------------------------------------------


def format_jsx_routes(records: Sequence[MergeRecord], *, level: int = 2, indent: int = 2) -> str:
    """Render *records* as nested ``<Route>`` elements, one per line."""
    return "\n".join(_format_jsx_route(record, level, indent) for record in records)


def _format_jsx_route(record: MergeRecord, level: int, indent: int) -> str:
    space = " " * (indent * level)
    attrs = _render_props(record.entries())

    if not record.children:
        return f"{space}<Route{attrs} />"

    children = format_jsx_routes(record.children, level=level + 1, indent=indent)
    return f"{space}<Route{attrs}>\n{children}\n{space}</Route>"
