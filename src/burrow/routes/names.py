"""Identifier generation for generated imports.

Turns a page file's path (relative to the routes directory) into a binding
name for the generated module:

    users/[id].jsx          -> UsersId
    users/_layout.jsx       -> UsersLayout
    users/_error.jsx        -> UsersErrorBoundary
    users.loader_.jsx       -> usersLoader
    login.lazy_.jsx         -> Login

Two different files can still map to one name (``users/[id].jsx`` and
``users/id.jsx``); the per-artifact import table rejects that.
"""

import re

from burrow._types import Symbol
from burrow.conventions import Convention

_PARAM_RE = re.compile(r"\[(.+?)\]")
_NON_IDENT_RE = re.compile(r"[^a-zA-Z0-9_]")
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")

_LOADER_WORD = "Loader"
_DIGIT_PREFIX = "route"


def camel_case(text: str) -> str:
    """Lodash-style camel case: split into words, lower the first, capitalize the rest.

    ``users_id``      -> ``usersId``
    ``UserProfile``   -> ``userProfile``
    ``api-v2_items``  -> ``apiV2Items``

    """
    words = _WORD_RE.findall(text)
    if not words:
        return ""
    head, *tail = words
    return head.lower() + "".join(w[:1].upper() + w[1:].lower() for w in tail)


def upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def symbol_for(
    relative_path: str,
    convention: Convention,
    *,
    is_loader: bool = False,
    is_error: bool = False,
) -> Symbol:
    """Derive the generated binding name for a page file.

    Loaders stay lower camel case so they read as function references;
    everything else is upper-first for JSX.  Error boundaries get
    ``convention.error_suffix`` appended.

    """
    parts = relative_path.replace("\\", "/").split("/")
    split = convention.split_name(parts[-1])
    if split is not None:
        parts[-1] = split.stem

    raw = "_".join(parts)
    raw = _PARAM_RE.sub(r"\1", raw)
    raw = _NON_IDENT_RE.sub("", raw)

    name = camel_case(raw)
    if not name or name[0].isdigit():
        name = camel_case(f"{_DIGIT_PREFIX}_{name}")

    if is_loader:
        return name + _LOADER_WORD

    name = upper_first(name)
    if is_error:
        name += convention.error_suffix
    return name


def mount_symbol(mount_path: str) -> Symbol:
    """Name the component that renders a sub-router mounted at *mount_path*.

    ``/admin/*``         -> ``AdminAny``
    ``/shop/orders/*``   -> ``ShopOrdersAny``

    """
    return upper_first(camel_case(mount_path.replace("/", "-"))) + "Any"
