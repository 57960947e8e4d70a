"""Shared pytest fixtures for the routegen test suite.

Provides reusable fixtures for:
- The sample ``route_config.dart`` and ``routegen.yaml`` documents
- A route entry factory
- A temporary Flutter project tree (pubspec, lib/, assets/)
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from pathlib import Path

import pytest

from routegen.config import Settings
from routegen.parser.models import RouteEntry

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Input documents
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_route_config_text() -> str:
    """Raw text of the sample ``route_config.dart`` (7 routes, 4 groups)."""
    return (FIXTURES_DIR / "route_config.dart").read_text(encoding="utf-8")


@pytest.fixture
def sample_builder_config_path() -> Path:
    """Path to the sample ``routegen.yaml``."""
    path = FIXTURES_DIR / "routegen.yaml"
    assert path.exists(), f"Builder config fixture not found at {path}"
    return path


# ---------------------------------------------------------------------------
# Route entries
# ---------------------------------------------------------------------------

@pytest.fixture
def make_route() -> Callable[..., RouteEntry]:
    """Factory: ``make_route("shop", "/cart", "CartPage", True)``."""

    def _make(group: str, path: str, page: str, has_params: bool = False) -> RouteEntry:
        return RouteEntry(group=group, path=path, page=page, has_params=has_params)

    return _make


@pytest.fixture
def shop_routes(make_route) -> list[RouteEntry]:
    """Home landing page, a shop tab and a parameterised cart page."""
    return [
        make_route("", "/", "HomePage"),
        make_route("shop", "/", "ShopPage"),
        make_route("shop", "/cart", "CartPage", True),
    ]


# ---------------------------------------------------------------------------
# Project tree
# ---------------------------------------------------------------------------

@pytest.fixture
def flutter_project(tmp_path: Path) -> Path:
    """A minimal Flutter project with a route table, config and assets.

    Layout::

        my_app/
          pubspec.yaml            (name: shop_app)
          routegen.yaml
          lib/route_config.dart
          assets/icons/logo.png
          assets/images/logo.png
          assets/images/ic_form-text.svg
          assets/images/emoji/smile.png   (ignored)
          assets/fonts/Inter.ttf          (ignored)
    """
    root = tmp_path / "my_app"
    (root / "lib").mkdir(parents=True)
    (root / "pubspec.yaml").write_text(
        "name: shop_app\ndescription: Test app\n", encoding="utf-8"
    )
    shutil.copy(FIXTURES_DIR / "route_config.dart", root / "lib" / "route_config.dart")
    shutil.copy(FIXTURES_DIR / "routegen.yaml", root / "routegen.yaml")

    for rel in (
        "assets/icons/logo.png",
        "assets/images/logo.png",
        "assets/images/ic_form-text.svg",
        "assets/images/emoji/smile.png",
        "assets/fonts/Inter.ttf",
    ):
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(b"\x00")

    yield root


@pytest.fixture
def project_settings(flutter_project: Path) -> Settings:
    """Settings pointing at the temporary project."""
    return Settings(project_root=flutter_project)
