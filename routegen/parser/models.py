"""Pydantic v2 models for the route table parser.

Defines the route entry parsed from ``route_config.dart`` and the parse result
handed to the navigation generator and the layer scaffolder.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from routegen.naming import strip_page_suffix, to_route_name, to_snake


# ---------------------------------------------------------------------------
# Reserved groups
# ---------------------------------------------------------------------------

AUTH_GROUP = "auth"
ROOT_PATH = "/"


# ---------------------------------------------------------------------------
# Route Models
# ---------------------------------------------------------------------------

class RouteEntry(BaseModel):
    """One row of the route table: ``[group, path, page, hasParams]``."""

    model_config = ConfigDict(frozen=True)

    group: str = Field(default="", description="Feature group; '' is home, 'auth' is the login entry")
    path: str = Field(..., description="'/' for the group landing route, or a sub-path")
    page: str = Field(..., description="View class name, always ending with 'Page'")
    has_params: bool = Field(default=False, description="Whether navigation needs a params map")

    @property
    def is_root(self) -> bool:
        return self.path == ROOT_PATH

    @property
    def full_path(self) -> str:
        """Absolute location, e.g. ``/shop`` or ``/shop/cart``."""
        if self.is_root:
            return f"/{self.group}"
        return f"/{self.group}/{self.child_path}"

    @property
    def child_path(self) -> str:
        """Path relative to the group (leading slash removed)."""
        return self.path[1:] if self.path.startswith("/") else self.path

    @property
    def route_name(self) -> str:
        """Name of the ``RouteNames`` constant; ``""`` means none."""
        if self.is_root:
            return self.group
        return to_route_name(self.page)

    @property
    def base_name(self) -> str:
        return strip_page_suffix(self.page)

    @property
    def file_stem(self) -> str:
        return to_snake(self.page)

    @property
    def is_auth(self) -> bool:
        return self.group == AUTH_GROUP


class RouteTable(BaseModel):
    """Result of parsing a route configuration source."""

    routes: list[RouteEntry] = Field(default_factory=list, description="Entries in source order")
    found: bool = Field(default=False, description="Whether the table literal was located")
    warnings: list[str] = Field(default_factory=list, description="Non-fatal parse notes")
