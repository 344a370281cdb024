"""Burrow configuration.

BurrowConfig is the central configuration object, frozen after creation.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from burrow._errors import ConfigError, IdentifierCollisionError, RouteCollisionError
from burrow.conventions import Convention
from burrow.routes.names import mount_symbol


def normalize_mount_path(path: str) -> str:
    """Normalize a declared mount path to its wildcard form.

    ``/admin``   -> ``/admin/*``
    ``/admin/``  -> ``/admin/*``
    ``/admin/*`` -> ``/admin/*``

    """
    if not path.startswith("/"):
        path = "/" + path
    if not path.endswith("/*"):
        if not path.endswith("/"):
            path += "/"
        path += "*"
    return path


@dataclass(frozen=True, slots=True)
class SubRouterMount:
    """A point where an independently generated route tree is grafted in.

    Attributes:
        mount_path: Wildcard mount path (always ends with ``/*``).
        import_path: Directory of the sub-router, relative to the source root.
        is_lazy: Load the sub-router module on demand.
        default_route: Redirect target for the bare mount path, if any.

    """

    mount_path: str
    import_path: str
    is_lazy: bool = False
    default_route: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mount_path", normalize_mount_path(self.mount_path))
        import_path = self.import_path.replace("\\", "/")
        if PurePosixPath(import_path).is_absolute():
            msg = (
                f"Sub-router {self.mount_path!r}: import_path {self.import_path!r} "
                f"must be relative to the source root"
            )
            raise ConfigError(msg)
        object.__setattr__(self, "import_path", str(PurePosixPath(import_path)))

    @property
    def base_path(self) -> str:
        """The mount path without its trailing wildcard."""
        base = self.mount_path[: -len("/*")]
        return base or "/"

    @property
    def symbol(self) -> str:
        """Identifier bound to the sub-router component in the main artifact."""
        return mount_symbol(self.mount_path)


@dataclass(frozen=True, slots=True)
class GenerationRoot:
    """One artifact to generate: the main app or a sub-router.

    Attributes:
        name: ``"main"`` or the sub-router mount path.
        source_dir: Directory holding the routes directory and the artifact.
        routes_path: Directory scanned for page modules.
        output_path: Generated artifact file.
        is_root: True for the main app artifact.
        mounts: Sub-routers grafted into this artifact (main root only).

    """

    name: str
    source_dir: Path
    routes_path: Path
    output_path: Path
    is_root: bool
    mounts: tuple[SubRouterMount, ...] = ()


def coerce_mounts(
    value: Mapping[str, object] | Iterable[object] | None,
) -> tuple[SubRouterMount, ...]:
    """Build mounts from a ``{mount_path: {...}}`` mapping or a list of mappings.

    Keys use snake_case (``import_path``) or the camelCase spelling of the
    JavaScript plugin options (``importPath``).

    """
    if value is None:
        return ()
    if isinstance(value, Mapping):
        items: list[tuple[str | None, object]] = list(value.items())
    else:
        items = [(None, entry) for entry in value]

    mounts: list[SubRouterMount] = []
    for key, entry in items:
        if isinstance(entry, SubRouterMount):
            mounts.append(entry)
            continue
        if not isinstance(entry, Mapping):
            msg = f"Sub-router {key!r} must be a mapping, got {type(entry).__name__}"
            raise ConfigError(msg)
        mount_path = entry.get("mount_path", entry.get("mountPath", key))
        import_path = entry.get("import_path", entry.get("importPath"))
        if not isinstance(mount_path, str) or not mount_path:
            msg = f"Sub-router {entry!r} is missing a mount path"
            raise ConfigError(msg)
        if not isinstance(import_path, str) or not import_path:
            msg = f"Sub-router {mount_path!r} is missing import_path"
            raise ConfigError(msg)
        default_route = entry.get("default_route", entry.get("defaultRoute"))
        if default_route is not None and not isinstance(default_route, str):
            msg = f"Sub-router {mount_path!r}: default_route must be a str"
            raise ConfigError(msg)
        mounts.append(SubRouterMount(
            mount_path=mount_path,
            import_path=import_path,
            is_lazy=bool(entry.get("is_lazy", entry.get("isLazy", False))),
            default_route=default_route,
        ))
    return tuple(mounts)


def validate_mounts(mounts: tuple[SubRouterMount, ...]) -> None:
    """Reject mount declarations that cannot be generated.

    Raises:
        RouteCollisionError: Two mounts share a mount path or import path.
        IdentifierCollisionError: Two mounts would bind the same identifier.
        ConfigError: A lazy mount has no non-root ``default_route``.

    """
    seen_paths: dict[str, SubRouterMount] = {}
    seen_imports: dict[str, SubRouterMount] = {}
    seen_symbols: dict[str, SubRouterMount] = {}

    for mount in mounts:
        if mount.mount_path in seen_paths:
            msg = f"Duplicate sub-router mount path: {mount.mount_path}"
            raise RouteCollisionError(msg)
        seen_paths[mount.mount_path] = mount

        if mount.import_path in seen_imports:
            other = seen_imports[mount.import_path]
            msg = (
                f"Sub-router module {mount.import_path!r} is mounted twice: "
                f"{other.mount_path} and {mount.mount_path}"
            )
            raise RouteCollisionError(msg)
        seen_imports[mount.import_path] = mount

        if mount.symbol in seen_symbols:
            other = seen_symbols[mount.symbol]
            msg = (
                f"Sub-router mounts {other.mount_path} and {mount.mount_path} "
                f"both generate the identifier {mount.symbol!r}"
            )
            raise IdentifierCollisionError(msg)
        seen_symbols[mount.symbol] = mount

        if mount.is_lazy:
            target = (mount.default_route or "").strip()
            if not target or target == "/":
                msg = (
                    f"Lazy sub-router {mount.mount_path} needs a non-root "
                    f"default_route to redirect to"
                )
                raise ConfigError(msg)


@dataclass(frozen=True, slots=True)
class BurrowConfig:
    """Configuration for a burrow project.

    Attributes:
        root: Source root holding the routes directory and the generated
            artifact.  Always resolved to an absolute path on construction.
        routes_dir: Directory (under each source root) containing page modules.
        sub_routers: Sub-router mounts grafted into the main artifact.  Accepts
            a mapping or list on construction; stored as a tuple of
            ``SubRouterMount``.
        output_name: File name of the main artifact.
        sub_output_name: File name of each sub-router artifact.
        convention: Naming conventions for page files.

    """

    root: Path = field(default_factory=lambda: Path("src"))
    routes_dir: str = "pages"
    sub_routers: tuple[SubRouterMount, ...] = ()
    output_name: str = "routes.runtime.jsx"
    sub_output_name: str = "sub-routes.runtime.jsx"
    convention: Convention = field(default_factory=Convention)

    def __post_init__(self) -> None:
        root = Path(self.root)
        # watchfiles reports absolute paths; keep root comparable.
        if not root.is_absolute():
            root = root.resolve()
        object.__setattr__(self, "root", root)

        if not isinstance(self.sub_routers, tuple) or not all(
            isinstance(m, SubRouterMount) for m in self.sub_routers
        ):
            object.__setattr__(self, "sub_routers", coerce_mounts(self.sub_routers))
        if isinstance(self.convention, Mapping):
            object.__setattr__(self, "convention", Convention(**self.convention))

        validate_mounts(self.sub_routers)

    @property
    def routes_path(self) -> Path:
        """Absolute path to the main routes directory."""
        return self.root / self.routes_dir

    @property
    def output_path(self) -> Path:
        """Absolute path to the main generated artifact."""
        return self.root / self.output_name

    def mount_import(self, mount: SubRouterMount) -> str:
        """Module reference of a mount's generated artifact, as imported by the main one."""
        stem = PurePosixPath(self.sub_output_name)
        for ext in self.convention.extensions:
            if stem.name.endswith(ext):
                stem = stem.with_name(stem.name[: -len(ext)])
                break
        return "./" + str(PurePosixPath(mount.import_path) / stem)

    def generation_roots(self) -> tuple[GenerationRoot, ...]:
        """All artifacts this configuration produces, main root first."""
        roots = [
            GenerationRoot(
                name="main",
                source_dir=self.root,
                routes_path=self.routes_path,
                output_path=self.output_path,
                is_root=True,
                mounts=self.sub_routers,
            ),
        ]
        for mount in self.sub_routers:
            source_dir = self.root / mount.import_path
            roots.append(GenerationRoot(
                name=mount.mount_path,
                source_dir=source_dir,
                routes_path=source_dir / self.routes_dir,
                output_path=source_dir / self.sub_output_name,
                is_root=False,
            ))
        return tuple(roots)
