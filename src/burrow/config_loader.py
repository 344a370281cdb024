"""Load BurrowConfig from burrow.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from burrow._errors import ConfigError
from burrow.config import BurrowConfig

CONFIG_FILES = ("burrow.yaml", "burrow.yml", "burrow.toml")

# Top-level keys accepted outside a ``burrow:`` section
_KNOWN_KEYS = (
    "root",
    "routes_dir",
    "sub_routers",
    "output_name",
    "sub_output_name",
    "convention",
)

# Spellings of the JavaScript plugin options
_ALIASES = {
    "routesDir": "routes_dir",
    "subRouters": "sub_routers",
}


def find_config_file(project: Path) -> Path | None:
    """Return the first config file present in *project*, or None."""
    for name in CONFIG_FILES:
        path = project / name
        if path.is_file():
            return path
    return None


def load_config(project: Path, **overrides: object) -> BurrowConfig:
    """Load BurrowConfig for *project*, optionally merging burrow.yaml.

    Looks for burrow.yaml, burrow.yml, or burrow.toml in *project*.  If
    found, loads and merges with overrides.  Overrides that are None are
    ignored; the rest take precedence.  A relative ``root`` is resolved
    against *project*, not the working directory.

    Raises:
        ConfigError: The config file is malformed or names unknown options.

    """
    project = Path(project).resolve()
    file_config = _read_burrow_config(project)
    merged = {**file_config, **{k: v for k, v in overrides.items() if v is not None}}

    root = Path(str(merged.pop("root", "src")))
    if not root.is_absolute():
        root = project / root

    try:
        return BurrowConfig(root=root, **merged)
    except TypeError as exc:
        msg = f"Invalid burrow configuration in {project}: {exc}"
        raise ConfigError(msg) from exc


def _read_burrow_config(project: Path) -> dict[str, object]:
    """Read burrow config from yaml/toml if present. Returns empty dict otherwise."""
    path = find_config_file(project)
    if path is None:
        return {}
    if path.suffix == ".toml":
        return _parse_toml(path)
    return _parse_yaml(path)


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"Could not parse {path.name}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return _flatten_burrow_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Could not parse {path.name}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_burrow_section(data)


def _flatten_burrow_section(data: dict[str, object]) -> dict[str, object]:
    """Extract burrow.* keys into top-level config."""
    result: dict[str, object] = {}
    for k, v in data.items():
        k = _ALIASES.get(k, k)
        if k in _KNOWN_KEYS:
            result[k] = v
    section = data.get("burrow")
    if section is not None:
        if not isinstance(section, dict):
            msg = "The 'burrow' config section must be a mapping"
            raise ConfigError(msg)
        for k, v in section.items():
            result[_ALIASES.get(k, k)] = v
    return result
