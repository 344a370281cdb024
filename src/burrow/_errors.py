"""Burrow error hierarchy.

All burrow-specific errors inherit from BurrowError for easy catching.
"""


class BurrowError(Exception):
    """Base error for all burrow operations."""


class ConfigError(BurrowError):
    """Invalid or missing configuration."""


class ConventionError(BurrowError):
    """A page file breaks the filesystem naming conventions."""


class RouteCollisionError(BurrowError):
    """Two declarations claim the same route path or mount."""


class IdentifierCollisionError(RouteCollisionError):
    """Two distinct modules would bind the same generated identifier."""


class EmitError(BurrowError):
    """Error while rendering or writing a generated artifact."""
