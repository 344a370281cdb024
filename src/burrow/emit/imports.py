"""Per-artifact import table.

Tracks every module a generated artifact references, emitting one import
per distinct module reference.  A table lives for exactly one artifact; it
is created by the generator and threaded through the merge and emit steps.

Binding the same identifier to two different modules is rejected with
``IdentifierCollisionError`` instead of letting one import shadow the other.
"""

from dataclasses import dataclass
from typing import Literal

from burrow._errors import IdentifierCollisionError
from burrow._types import ImportPath, Symbol


@dataclass(frozen=True, slots=True)
class ImportEntry:
    """One imported page module.

    Attributes:
        source: Module reference.
        symbol: Default-export binding.
        kind: ``"default"`` for a static import, ``"lazy"`` for a
            ``React.lazy`` thunk.
        handle: Binding for the module's handle export (layouts only).

    """

    source: ImportPath
    symbol: Symbol
    kind: Literal["default", "lazy"] = "default"
    handle: Symbol | None = None


def quote_module(source: str) -> str:
    """Single-quote a module reference for an import statement."""
    escaped = source.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class ImportTable:
    """Deduplicated imports for one generated artifact.

    Args:
        handle_export: Named export read from layout modules as the route
            ``handle``.

    """

    __slots__ = ("_bound", "_entries", "_handle_export", "_packages")

    def __init__(self, *, handle_export: str = "metadata") -> None:
        self._handle_export = handle_export
        self._entries: dict[ImportPath, ImportEntry] = {}
        # symbol -> module reference (or package) that binds it
        self._bound: dict[Symbol, str] = {}
        self._packages: dict[str, set[str]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, source: object) -> bool:
        return source in self._entries

    @property
    def entries(self) -> tuple[ImportEntry, ...]:
        """Imported page modules in first-seen order."""
        return tuple(self._entries.values())

    def add(
        self,
        symbol: Symbol,
        source: ImportPath,
        *,
        lazy: bool = False,
        handle: Symbol | None = None,
    ) -> ImportEntry:
        """Register a page module import, returning the (possibly existing) entry.

        Raises:
            IdentifierCollisionError: *symbol* is already bound to another module.

        """
        existing = self._entries.get(source)
        if existing is not None:
            return existing

        self._bind(symbol, source)
        if handle is not None:
            self._bind(handle, source)

        entry = ImportEntry(
            source=source,
            symbol=symbol,
            kind="lazy" if lazy else "default",
            handle=handle,
        )
        self._entries[source] = entry
        if lazy:
            self.add_named("react", "lazy")
        return entry

    def add_named(self, package: str, name: Symbol) -> None:
        """Register a named import from a library package (``lazy``, ``Navigate``)."""
        names = self._packages.setdefault(package, set())
        if name in names:
            return
        self._bind(name, package)
        names.add(name)

    def reserve(self, symbol: Symbol) -> None:
        """Claim a name declared by the generated module itself."""
        self._bind(symbol, "<generated>")

    def _bind(self, symbol: Symbol, source: str) -> None:
        owner = self._bound.get(symbol)
        if owner is not None and owner != source:
            msg = (
                f"Identifier {symbol!r} would be bound to both {owner!r} and "
                f"{source!r}; rename one of the files"
            )
            raise IdentifierCollisionError(msg)
        self._bound[symbol] = source

    def render_imports(self) -> list[str]:
        """Static import statements: packages first, then page modules."""
        lines = [
            f"import {{ {', '.join(sorted(names))} }} from {quote_module(package)};"
            for package, names in self._packages.items()
        ]
        for entry in self._entries.values():
            if entry.kind != "default":
                continue
            if entry.handle is not None:
                lines.append(
                    f"import {entry.symbol}, {{ {self._handle_export} as {entry.handle} }} "
                    f"from {quote_module(entry.source)};"
                )
            else:
                lines.append(f"import {entry.symbol} from {quote_module(entry.source)};")
        return lines

    def render_lazy(self) -> list[str]:
        """``React.lazy`` thunks for lazy page modules."""
        return [
            f"const {entry.symbol} = lazy(() => import({quote_module(entry.source)}));"
            for entry in self._entries.values()
            if entry.kind == "lazy"
        ]
