"""Tests for the route table parser.

Covers:
- Reading rows from the sample route_config.dart fixture
- Quote styles, whitespace, comments and trailing commas
- Missing or unterminated tables (warning, no routes)
- Malformed rows (skipped with a warning)
- The fatal page naming rule
- RouteEntry derived properties
- Async file loading
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from routegen.parser import (
    RouteEntry,
    RouteNamingError,
    RouteTable,
    load_route_table,
    parse_route_table,
    validate_page_name,
)


pytestmark = pytest.mark.unit


def _table(*rows: str, name: str = "routesConfig") -> str:
    body = ",\n".join(f"  {row}" for row in rows)
    return f"const {name} = [\n{body}\n];\n"


# ---------------------------------------------------------------------------
# Sample fixture
# ---------------------------------------------------------------------------


class TestSampleRouteConfig:
    def test_reads_all_rows(self, sample_route_config_text):
        table = parse_route_table(sample_route_config_text)
        assert table.found is True
        assert len(table.routes) == 7
        assert table.warnings == []

    def test_source_order(self, sample_route_config_text):
        table = parse_route_table(sample_route_config_text)
        assert [r.page for r in table.routes] == [
            "LoginPage",
            "HomePage",
            "ShopPage",
            "CartPage",
            "ProductDetailPage",
            "ProfilePage",
            "SettingsPage",
        ]

    def test_row_spanning_lines(self, sample_route_config_text):
        table = parse_route_table(sample_route_config_text)
        detail = table.routes[4]
        assert detail == RouteEntry(
            group="shop", path="/product/:id", page="ProductDetailPage", has_params=True
        )

    def test_double_quoted_row(self, sample_route_config_text):
        table = parse_route_table(sample_route_config_text)
        assert table.routes[2].group == "shop"
        assert table.routes[2].path == "/"

    def test_home_group_is_empty_string(self, sample_route_config_text):
        table = parse_route_table(sample_route_config_text)
        assert table.routes[1].group == ""


# ---------------------------------------------------------------------------
# Lexical flexibility
# ---------------------------------------------------------------------------


class TestLexical:
    def test_mixed_quotes_and_spacing(self):
        text = _table(
            "[ 'shop' ,'/', \"ShopPage\",false ]",
            "[\n'shop',\n'/cart',\n'CartPage',\ntrue\n]",
        )
        table = parse_route_table(text)
        assert [(r.group, r.path, r.page, r.has_params) for r in table.routes] == [
            ("shop", "/", "ShopPage", False),
            ("shop", "/cart", "CartPage", True),
        ]

    def test_trailing_comma_inside_row_and_list(self):
        text = "final routesConfig = [['shop', '/', 'ShopPage', false,],];"
        table = parse_route_table(text)
        assert len(table.routes) == 1

    def test_comments_between_rows(self):
        text = (
            "const routesConfig = [\n"
            "  // first\n"
            "  ['shop', '/', 'ShopPage', false], /* inline */\n"
            "  /* ['blog', '/', 'BlogPage', false], */\n"
            "  ['shop', '/cart', 'CartPage', false],\n"
            "];\n"
        )
        table = parse_route_table(text)
        assert [r.page for r in table.routes] == ["ShopPage", "CartPage"]

    def test_escaped_quote_in_string(self):
        text = _table("['shop', '/it\\'s', 'ShopPage', false]")
        table = parse_route_table(text)
        assert table.routes[0].path == "/it's"

    def test_text_after_table_is_ignored(self):
        text = _table("['shop', '/', 'ShopPage', false]") + "const other = [1, 2];\n"
        table = parse_route_table(text)
        assert len(table.routes) == 1

    def test_custom_table_name(self):
        text = _table("['shop', '/', 'ShopPage', false]", name="appRoutes")
        assert parse_route_table(text, table_name="appRoutes").found is True
        assert parse_route_table(text).found is False

    def test_duplicates_are_retained(self):
        row = "['shop', '/', 'ShopPage', false]"
        table = parse_route_table(_table(row, row))
        assert len(table.routes) == 2

    def test_row_without_commas(self):
        table = parse_route_table("routesConfig = [['shop' '/x' 'XPage' true]];")
        assert table.warnings == []
        assert table.routes == [
            RouteEntry(group="shop", path="/x", page="XPage", has_params=True)
        ]

    def test_repeated_commas_inside_row(self):
        table = parse_route_table(_table("['shop',, '/x',,, 'XPage', true]"))
        assert [r.path for r in table.routes] == ["/x"]
        assert table.warnings == []

    def test_nested_rows_are_read(self):
        text = _table(
            "[['shop', '/', 'ShopPage', false], ['shop', '/cart', 'CartPage', false]]",
            "['profile', '/', 'ProfilePage', false]",
        )
        table = parse_route_table(text)
        assert [r.page for r in table.routes] == ["ShopPage", "CartPage", "ProfilePage"]
        assert table.warnings == []

    def test_doubly_wrapped_table(self):
        table = parse_route_table("const routesConfig = [[['shop', '/', 'ShopPage', false]]];")
        assert [r.page for r in table.routes] == ["ShopPage"]

    def test_unterminated_nested_list(self):
        table = parse_route_table("const routesConfig = [[['shop', '/', 'ShopPage', false]];")
        assert table.found is False
        assert table.routes == []


# ---------------------------------------------------------------------------
# Recoverable problems
# ---------------------------------------------------------------------------


class TestRecoverable:
    def test_missing_table(self):
        table = parse_route_table("void main() {}\n")
        assert table == RouteTable(
            routes=[], found=False, warnings=["Could not find routesConfig in file"]
        )

    def test_empty_table(self):
        table = parse_route_table("const routesConfig = [];")
        assert table.found is True
        assert table.routes == []

    def test_unterminated_table(self):
        table = parse_route_table("const routesConfig = [\n  ['shop', '/', 'ShopPage', false],\n")
        assert table.found is False
        assert table.routes == []
        assert any("Unterminated" in w for w in table.warnings)

    def test_short_row_is_skipped(self):
        text = _table(
            "['shop', '/x', 'XPage']",
            "['shop', '/', 'ShopPage', false]",
        )
        table = parse_route_table(text)
        assert [r.page for r in table.routes] == ["ShopPage"]
        assert table.warnings == ["Skipped malformed route row at line 2"]

    def test_non_list_element_is_skipped(self):
        text = _table("someRow", "['shop', '/', 'ShopPage', false]")
        table = parse_route_table(text)
        assert [r.page for r in table.routes] == ["ShopPage"]
        assert len(table.warnings) == 1

    def test_non_bool_params_flag_is_skipped(self):
        text = _table(
            "['shop', '/', 'ShopPage', 'yes']",
            "['shop', '/cart', 'CartPage', true]",
        )
        table = parse_route_table(text)
        assert [r.page for r in table.routes] == ["CartPage"]


# ---------------------------------------------------------------------------
# Naming rule
# ---------------------------------------------------------------------------


class TestNamingRule:
    def test_page_without_suffix_is_fatal(self):
        text = _table(
            "['shop', '/', 'ShopPage', false]",
            "['shop', '/cart', 'CartScreen', false]",
        )
        with pytest.raises(RouteNamingError) as exc_info:
            parse_route_table(text)
        assert exc_info.value.identifier == "CartScreen"
        assert "CartScreen" in str(exc_info.value)

    def test_empty_page_is_fatal(self):
        with pytest.raises(RouteNamingError):
            parse_route_table(_table("['shop', '/', '', false]"))

    def test_naming_error_after_malformed_row(self):
        text = _table("['broken']", "['shop', '/', 'Shop', false]")
        with pytest.raises(RouteNamingError):
            parse_route_table(text)

    def test_naming_error_in_row_without_commas(self):
        with pytest.raises(RouteNamingError) as exc_info:
            parse_route_table("routesConfig = [['shop' '/x' 'XScreen' true]];")
        assert exc_info.value.identifier == "XScreen"

    def test_naming_error_in_nested_row(self):
        with pytest.raises(RouteNamingError):
            parse_route_table(_table("[['shop', '/', 'Shop', false]]"))

    def test_is_a_value_error(self):
        assert issubclass(RouteNamingError, ValueError)

    @pytest.mark.parametrize("page", ["ShopPage", "Page"])
    def test_validate_accepts(self, page):
        validate_page_name(page)

    @pytest.mark.parametrize("page", ["", "Shop", "ShopPages", "page"])
    def test_validate_rejects(self, page):
        with pytest.raises(RouteNamingError):
            validate_page_name(page)


# ---------------------------------------------------------------------------
# RouteEntry
# ---------------------------------------------------------------------------


class TestRouteEntry:
    def test_root_route(self):
        route = RouteEntry(group="shop", path="/", page="ShopPage")
        assert route.is_root is True
        assert route.full_path == "/shop"
        assert route.route_name == "shop"

    def test_child_route(self):
        route = RouteEntry(group="shop", path="/cart", page="CartPage", has_params=True)
        assert route.is_root is False
        assert route.child_path == "cart"
        assert route.full_path == "/shop/cart"
        assert route.route_name == "cart"
        assert route.file_stem == "cart_page"
        assert route.base_name == "Cart"

    def test_home_root_has_no_route_name(self):
        route = RouteEntry(group="", path="/", page="HomePage")
        assert route.full_path == "/"
        assert route.route_name == ""

    def test_auth(self):
        route = RouteEntry(group="auth", path="/", page="LoginPage")
        assert route.is_auth is True
        assert route.full_path == "/auth"

    def test_frozen(self):
        route = RouteEntry(group="shop", path="/", page="ShopPage")
        with pytest.raises(ValidationError):
            route.page = "OtherPage"


# ---------------------------------------------------------------------------
# load_route_table
# ---------------------------------------------------------------------------


class TestLoadRouteTable:
    @pytest.mark.asyncio
    async def test_loads_file(self, tmp_path, sample_route_config_text):
        path = tmp_path / "route_config.dart"
        path.write_text(sample_route_config_text, encoding="utf-8")
        table = await load_route_table(path)
        assert len(table.routes) == 7

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await load_route_table(tmp_path / "absent.dart")
