"""Tests for burrow._errors."""

from burrow._errors import (
    BurrowError,
    ConfigError,
    ConventionError,
    EmitError,
    IdentifierCollisionError,
    RouteCollisionError,
)


class TestErrorHierarchy:
    """All burrow errors inherit from BurrowError."""

    def test_burrow_error_is_exception(self) -> None:
        assert issubclass(BurrowError, Exception)

    def test_config_error_inherits(self) -> None:
        assert issubclass(ConfigError, BurrowError)

    def test_convention_error_inherits(self) -> None:
        assert issubclass(ConventionError, BurrowError)

    def test_route_collision_error_inherits(self) -> None:
        assert issubclass(RouteCollisionError, BurrowError)

    def test_identifier_collision_is_route_collision(self) -> None:
        assert issubclass(IdentifierCollisionError, RouteCollisionError)

    def test_emit_error_inherits(self) -> None:
        assert issubclass(EmitError, BurrowError)

    def test_catch_all_burrow_errors(self) -> None:
        """All specific errors are catchable via BurrowError."""
        for error_cls in (
            ConfigError,
            ConventionError,
            RouteCollisionError,
            IdentifierCollisionError,
            EmitError,
        ):
            try:
                raise error_cls("test")
            except BurrowError:
                pass  # Expected — all caught by base class
