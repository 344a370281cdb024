"""Artifact emission — typed values, import tables and printers."""

from burrow.emit.imports import ImportEntry, ImportTable
from burrow.emit.module import render_root_module, render_sub_module
from burrow.emit.nodes import CodeRef, JsxElement, LiteralValue

__all__ = [
    "CodeRef",
    "ImportEntry",
    "ImportTable",
    "JsxElement",
    "LiteralValue",
    "render_root_module",
    "render_sub_module",
]
