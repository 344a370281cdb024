"""Path derivation from filesystem entry names.

Maps an entry name plus its parent's logical path to the entry's own
logical path:

    users.jsx          under /        -> /users
    [id].jsx           under /users   -> /users/:id
    settings.profile.jsx              -> /settings/profile
    index.jsx          under /users   -> /users
    _layout.jsx        under /users   -> /users
    login.lazy_.jsx                   -> /login
"""

import re

from burrow._types import RoutePath
from burrow.conventions import Convention

_PARAM_RE = re.compile(r"\[(.+?)\]")
_MULTI_SLASH_RE = re.compile(r"/{2,}")


def join_path(parent_path: RoutePath, segment: str) -> RoutePath:
    """Join *segment* onto *parent_path* and normalize the result.

    The result always starts with ``/``, never contains ``//`` and has no
    trailing slash unless it is the root path itself.

    """
    path = _MULTI_SLASH_RE.sub("/", f"/{parent_path}/{segment}")
    if len(path) > 1:
        path = path.rstrip("/")
    return path or "/"


def parent_path_of(path: RoutePath) -> RoutePath:
    """Return the logical parent of *path* (``/`` for top-level paths)."""
    parent, _, _ = path.rpartition("/")
    return parent or "/"


def to_segment(stem: str) -> str:
    """Apply parameter and dot-nesting syntax to a stripped stem."""
    segment = _PARAM_RE.sub(r":\1", stem)
    return segment.replace(".", "/")


def derive_path(name: str, parent_path: RoutePath, convention: Convention) -> RoutePath:
    """Derive the logical route path of a file or directory entry.

    File names are stripped of exactly one suffix class (lazy marker, loader
    marker, or bare extension).  Reserved stems (index, layout, error,
    catch-all) return *parent_path* unchanged; the catch-all wildcard is
    appended by the tree builder, not here.

    """
    split = convention.split_name(name)
    stem = split.stem if split is not None else name

    if stem in convention.reserved_stems:
        return join_path(parent_path, "")

    return join_path(parent_path, to_segment(stem))
