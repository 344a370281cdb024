"""Burrow — file-based route generation for React Router.

Scans a directory of page modules and writes a route table module that
React Router loads directly.  Folder and file names decide the URL;
marker suffixes decide how each module is wired in.

Quick start::

    import burrow

    burrow.build("my-app/")        # Generate once
    burrow.dev("my-app/")          # Generate, then regenerate on change

Naming conventions (under ``src/pages`` by default)::

    index.jsx              index route of its folder
    about.jsx              /about
    users/[id].jsx         /users/:id
    docs.intro.jsx         /docs/intro
    _layout.jsx            layout wrapping its folder
    _error.jsx             error boundary of its folder
    _any.jsx               catch-all (folder/*)
    report.lazy_.jsx       loaded on demand
    report.loader_.jsx     data loader for /report
    (group)/               folder that adds no URL segment

"""

# PEP 703: Declare this module as free-threading safe
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "BurrowConfig",
    "__version__",
    "build",
    "dev",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import burrow`` fast while providing a clean top-level API.
    """
    if name == "BurrowConfig":
        from burrow.config import BurrowConfig

        return BurrowConfig

    if name == "dev":
        from burrow.app import dev

        return dev

    if name == "build":
        from burrow.app import build

        return build

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
