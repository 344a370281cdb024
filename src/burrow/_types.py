"""Shared type definitions for burrow."""

from typing import Literal, TypeAlias

# Mode of operation
BurrowMode: TypeAlias = Literal["build", "dev"]

# Logical route path (e.g., "/", "/users/:id", "/docs/*")
RoutePath: TypeAlias = str

# Module reference used in generated imports (e.g., "./pages/users/[id]")
ImportPath: TypeAlias = str

# Generated binding name (e.g., "UsersId", "usersLoader")
Symbol: TypeAlias = str

# How route-group directories contribute to paths
GroupMode: TypeAlias = Literal["unwrap", "segment"]

# Where the catch-all file sorts among its siblings during the scan
CatchAllPosition: TypeAlias = Literal["first", "last"]

# How lazy-marked modules are deferred
LazyMode: TypeAlias = Literal["component", "route"]
