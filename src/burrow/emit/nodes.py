"""Typed values for generated route structures.

Route records hold either plain data or live code references; the printer
renders each kind on its own terms:

    LiteralValue("/users")        -> "/users"
    CodeRef("usersLoader")        -> usersLoader
    JsxElement("Users")           -> <Users />
    JsxElement("Navigate", (("to", LiteralValue("/a")), ("replace", LiteralValue(True))))
                                  -> <Navigate to="/a" replace />
"""

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class LiteralValue:
    """A JSON-representable literal (string, number, bool or null)."""

    value: str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class CodeRef:
    """A bare code expression emitted verbatim (identifier or thunk)."""

    expr: str


@dataclass(frozen=True, slots=True)
class JsxElement:
    """A self-closing JSX element ``<symbol ...props />``."""

    symbol: str
    props: tuple[tuple[str, "Value"], ...] = ()


Value: TypeAlias = LiteralValue | CodeRef | JsxElement
