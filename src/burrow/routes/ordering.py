"""Sibling ordering for first-match-wins routers.

Siblings are ordered by the class of the segment they add below their
parent:

    index route  <  static  <  dynamic (``:param``)  <  catch-all (``*``)

The sort is stable, so the scan order survives within each class.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from burrow._types import RoutePath

if TYPE_CHECKING:
    from collections.abc import Sequence

    from burrow.routes.merge import MergeRecord

_INDEX = 0
_STATIC = 1
_DYNAMIC = 2
_CATCH_ALL = 3


def relative_segment(path: RoutePath, parent_path: RoutePath) -> str:
    """Return the part of *path* below *parent_path*.

    ``relative_segment("/users/:id", "/users")`` -> ``":id"``

    Paths that do not extend the parent (absolute paths grafted elsewhere)
    are returned without their leading slash.

    """
    if parent_path == "/":
        return path[1:]
    prefix = parent_path + "/"
    if path.startswith(prefix):
        return path[len(prefix):]
    if path == parent_path:
        return ""
    return path.lstrip("/")


def segment_rank(record: MergeRecord, parent_path: RoutePath) -> int:
    """Classify a record for sibling ordering."""
    if record.index:
        return _INDEX
    if record.path is None:
        return _STATIC
    segment = relative_segment(record.path, parent_path)
    if "*" in segment:
        return _CATCH_ALL
    if ":" in segment:
        return _DYNAMIC
    return _STATIC


def order_routes(records: Sequence[MergeRecord], parent_path: RoutePath = "/") -> list[MergeRecord]:
    """Order *records* and, recursively, their children.

    Returns new records; the input is not modified.

    """
    ordered = sorted(records, key=lambda r: segment_rank(r, parent_path))
    result: list[MergeRecord] = []
    for record in ordered:
        own_path = record.path if record.path is not None else parent_path
        result.append(replace(record, children=order_routes(record.children, own_path)))
    return result
