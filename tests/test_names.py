"""Tests for burrow.routes.names — generated binding names."""

import pytest

from burrow.conventions import Convention
from burrow.routes.names import camel_case, mount_symbol, symbol_for, upper_first


class TestCamelCase:
    """camel_case follows lodash word splitting."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("users_id", "usersId"),
            ("UserProfile", "userProfile"),
            ("api-v2_items", "apiV2Items"),
            ("XMLHttpRequest", "xmlHttpRequest"),
            ("__layout", "layout"),
            ("", ""),
        ],
    )
    def test_words(self, text: str, expected: str) -> None:
        assert camel_case(text) == expected

    def test_upper_first(self) -> None:
        assert upper_first("usersId") == "UsersId"
        assert upper_first("") == ""


class TestSymbolFor:
    """symbol_for(relative_path)."""

    @pytest.fixture
    def convention(self) -> Convention:
        return Convention()

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("index.jsx", "Index"),
            ("users/[id].jsx", "UsersId"),
            ("users/_layout.jsx", "UsersLayout"),
            ("login.lazy_.jsx", "Login"),
            ("settings.profile.jsx", "Settingsprofile"),
            ("(auth)/sign-in.jsx", "AuthSignin"),
            ("users/[id]/edit.jsx", "UsersIdEdit"),
            ("docs/_any.jsx", "DocsAny"),
        ],
    )
    def test_components(self, convention: Convention, path: str, expected: str) -> None:
        assert symbol_for(path, convention) == expected

    def test_loader_is_lower_camel(self, convention: Convention) -> None:
        assert symbol_for("users.loader_.jsx", convention, is_loader=True) == "usersLoader"

    def test_loader_does_not_shadow_page(self, convention: Convention) -> None:
        page = symbol_for("users.jsx", convention)
        loader = symbol_for("users.loader_.jsx", convention, is_loader=True)
        assert page != loader

    def test_error_boundary_suffix(self, convention: Convention) -> None:
        assert symbol_for("users/_error.jsx", convention, is_error=True) == "UsersErrorBoundary"

    def test_leading_digit_prefixed(self, convention: Convention) -> None:
        assert symbol_for("404.jsx", convention) == "Route404"

    def test_windows_separators(self, convention: Convention) -> None:
        assert symbol_for("users\\[id].jsx", convention) == "UsersId"


class TestMountSymbol:
    """mount_symbol(mount_path)."""

    def test_single_segment(self) -> None:
        assert mount_symbol("/admin/*") == "AdminAny"

    def test_nested(self) -> None:
        assert mount_symbol("/shop/orders/*") == "ShopOrdersAny"
