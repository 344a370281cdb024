"""Filesystem naming conventions.

A ``Convention`` holds every marker string and policy the scanner consults.
The *roles* are fixed (index, layout, error boundary, catch-all, lazy module,
loader); only their spelling and a few policies vary between projects:

    index.jsx               index route of the enclosing path
    _layout.jsx             layout + handle, wraps sibling routes
    _error.jsx              error boundary for the enclosing path
    _any.jsx                catch-all, appends ``/*``
    login.lazy_.jsx         deferred module
    users.loader_.jsx       data loader for ``/users``
    [id].jsx                dynamic segment ``:id``
    settings.profile.jsx    dot nesting, ``/settings/profile``
    (auth)/                 route group
"""

import re
from dataclasses import dataclass
from typing import Literal, TypeAlias

from burrow._errors import ConfigError
from burrow._types import CatchAllPosition, GroupMode, LazyMode

_GROUP_RE = re.compile(r"^\((.*)\)$")

_GROUP_MODES: frozenset[str] = frozenset({"unwrap", "segment"})
_CATCH_ALL_POSITIONS: frozenset[str] = frozenset({"first", "last"})
_LAZY_MODES: frozenset[str] = frozenset({"component", "route"})

Marker: TypeAlias = Literal["lazy", "loader"] | None


@dataclass(frozen=True, slots=True)
class SplitName:
    """A route file name broken into its convention parts.

    Attributes:
        stem: Name with the marker and extension removed (``users`` for
            ``users.loader_.jsx``).
        marker: ``"lazy"``, ``"loader"`` or *None* for a bare extension.
        extension: The matched extension, including the dot.

    """

    stem: str
    marker: Marker
    extension: str


@dataclass(frozen=True, slots=True)
class Convention:
    """Marker strings and policies for one routes tree.

    Attributes:
        extensions: File extensions recognised as page modules.
        lazy_marker: Infix before the extension marking a lazy module.
        loader_marker: Infix before the extension marking a data loader.
        index_name: Reserved stem of index routes.
        layout_name: Reserved stem of layout files.
        error_name: Reserved stem of error boundary files.
        catch_all_name: Reserved stem of catch-all files.
        handle_export: Named export of a layout module used as route handle.
        error_suffix: Appended to error boundary identifiers.
        group_mode: ``"unwrap"`` splices ``(group)`` children into the parent
            path; ``"segment"`` gives the group a real path segment.
        catch_all_position: Whether the catch-all file sorts ``"first"`` or
            ``"last"`` among its siblings during the scan.
        lazy_mode: ``"component"`` wraps lazy modules in ``React.lazy``;
            ``"route"`` emits a route-level ``lazy`` import thunk.
        router_package: Package the sub-router artifact imports from.

    """

    extensions: tuple[str, ...] = (".jsx",)
    lazy_marker: str = ".lazy_"
    loader_marker: str = ".loader_"
    index_name: str = "index"
    layout_name: str = "_layout"
    error_name: str = "_error"
    catch_all_name: str = "_any"
    handle_export: str = "metadata"
    error_suffix: str = "Boundary"
    group_mode: GroupMode = "unwrap"
    catch_all_position: CatchAllPosition = "last"
    lazy_mode: LazyMode = "component"
    router_package: str = "react-router-dom"

    def __post_init__(self) -> None:
        if isinstance(self.extensions, str):
            object.__setattr__(self, "extensions", (self.extensions,))
        else:
            object.__setattr__(self, "extensions", tuple(self.extensions))
        if not self.extensions:
            msg = "Convention needs at least one page extension"
            raise ConfigError(msg)
        for ext in self.extensions:
            if not ext.startswith(".") or len(ext) < 2:
                msg = f"Page extension {ext!r} must start with '.'"
                raise ConfigError(msg)
        if self.group_mode not in _GROUP_MODES:
            msg = f"group_mode must be one of {sorted(_GROUP_MODES)}, got {self.group_mode!r}"
            raise ConfigError(msg)
        if self.catch_all_position not in _CATCH_ALL_POSITIONS:
            msg = (
                f"catch_all_position must be one of {sorted(_CATCH_ALL_POSITIONS)}, "
                f"got {self.catch_all_position!r}"
            )
            raise ConfigError(msg)
        if self.lazy_mode not in _LAZY_MODES:
            msg = f"lazy_mode must be one of {sorted(_LAZY_MODES)}, got {self.lazy_mode!r}"
            raise ConfigError(msg)

    @property
    def reserved_stems(self) -> frozenset[str]:
        """Stems that never add a path segment."""
        return frozenset({
            self.index_name,
            self.layout_name,
            self.error_name,
            self.catch_all_name,
        })

    def split_name(self, name: str) -> SplitName | None:
        """Strip exactly one suffix class from *name*.

        Priority order: lazy marker, loader marker, bare extension.  Returns
        *None* when *name* has no recognised extension.

        """
        for ext in self.extensions:
            suffix = self.lazy_marker + ext
            if name.endswith(suffix) and len(name) > len(suffix):
                return SplitName(name[: -len(suffix)], "lazy", ext)
        for ext in self.extensions:
            suffix = self.loader_marker + ext
            if name.endswith(suffix) and len(name) > len(suffix):
                return SplitName(name[: -len(suffix)], "loader", ext)
        for ext in self.extensions:
            if name.endswith(ext) and len(name) > len(ext):
                return SplitName(name[: -len(ext)], None, ext)
        return None

    def is_route_file(self, name: str) -> bool:
        """Whether *name* is a page module this convention recognises."""
        return self.split_name(name) is not None

    def group_name(self, name: str) -> str | None:
        """Return the inner name of a ``(group)`` directory, else *None*."""
        match = _GROUP_RE.match(name)
        if match is None:
            return None
        return match.group(1)
