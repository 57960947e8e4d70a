"""Navigation plan: everything ``router.g.dart`` needs, computed once.

The plan is a pure function of the route list.  Rendering (see
``generator.py``) only walks it, so the branch-order list and the branch
containers are both read from the single sorted ``groups`` tuple built here
and cannot disagree.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from routegen.parser.models import AUTH_GROUP, ROOT_PATH, RouteEntry


# Route names that are reached through the gate or the shell, never from the
# quick navigation list.
QUICK_NAV_EXCLUDED_NAMES = frozenset({"auth", "home"})
HOME_BRANCH_NAME = "home"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class RouteConstant(BaseModel):
    """One ``static const String <name> = '<path>';`` line of ``RouteNames``."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: str


class QuickNavItem(BaseModel):
    """One entry of ``RouteNoParamList.routes``.

    ``name`` is the ``RouteNames`` constant to reference; when a route has no
    constant its literal ``path`` is emitted instead.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    path: str

    @property
    def key(self) -> str:
        return f"RouteNames.{self.name}" if self.name else self.path


class Branch(BaseModel):
    """One ``StatefulShellBranch``: a group's root route and its children."""

    model_config = ConfigDict(frozen=True)

    group: str
    root: RouteEntry
    children: tuple[RouteEntry, ...] = ()

    @property
    def name(self) -> str:
        return self.group or HOME_BRANCH_NAME

    @property
    def path(self) -> str:
        """Location of the branch root (``/`` for the home group)."""
        return f"/{self.group}" if self.group else ROOT_PATH

    @property
    def order_ref(self) -> str:
        """Expression used for this branch in ``branchRootPaths``."""
        return f"RouteNames.{self.group}" if self.group else "'/'"


class NavigationPlan(BaseModel):
    """Materialised, order-stable description of the navigation source."""

    model_config = ConfigDict(frozen=True)

    route_constants: tuple[RouteConstant, ...] = ()
    quick_nav: tuple[QuickNavItem, ...] = ()
    groups: tuple[str, ...] = Field(default=(), description="Shell groups, sorted once")
    auth_routes: tuple[RouteEntry, ...] = ()
    branches: tuple[Branch, ...] = ()
    page_imports: tuple[str, ...] = ()

    @property
    def branch_order(self) -> tuple[str, ...]:
        """Expressions of ``RouterBranchPaths.branchRootPaths``, in order."""
        return tuple(branch.order_ref for branch in self.branches)


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


def plan_navigation(routes: Sequence[RouteEntry], package_name: str = "app") -> NavigationPlan:
    """Build the ``NavigationPlan`` for *routes*.

    Routes are assumed to be validated already.  Nothing here raises on odd
    input; e.g. a branch whose group has no ``/`` entry simply references a
    ``RouteNames`` constant that does not exist.
    """
    groups = shell_groups(routes)
    return NavigationPlan(
        route_constants=_route_constants(routes),
        quick_nav=_quick_nav(routes),
        groups=groups,
        auth_routes=tuple(r for r in routes if r.is_auth),
        branches=tuple(_build_branch(group, routes) for group in groups),
        page_imports=_page_imports(routes, package_name),
    )


def shell_groups(routes: Sequence[RouteEntry]) -> tuple[str, ...]:
    """Distinct non-auth groups, sorted.  The home group ``""`` sorts first."""
    return tuple(sorted({r.group for r in routes if r.group != AUTH_GROUP}))


def _route_constants(routes: Sequence[RouteEntry]) -> tuple[RouteConstant, ...]:
    seen: set[str] = set()
    constants: list[RouteConstant] = []
    for route in routes:
        name = route.route_name
        if not name or name in seen:
            continue
        seen.add(name)
        constants.append(RouteConstant(name=name, path=route.full_path))
    return tuple(constants)


def _quick_nav(routes: Sequence[RouteEntry]) -> tuple[QuickNavItem, ...]:
    seen: set[str] = set()
    items: list[QuickNavItem] = []
    for route in routes:
        if route.has_params:
            continue
        full_path = route.full_path
        name = route.route_name
        if full_path == ROOT_PATH or name in QUICK_NAV_EXCLUDED_NAMES:
            continue
        item = QuickNavItem(name=name, path=full_path)
        if item.key in seen:
            continue
        seen.add(item.key)
        items.append(item)
    return tuple(items)


def _build_branch(group: str, routes: Sequence[RouteEntry]) -> Branch:
    members = [r for r in routes if r.group == group]
    # First '/' entry wins; without one the group's first entry is the root.
    root_index = next((i for i, r in enumerate(members) if r.is_root), 0)
    children = tuple(r for i, r in enumerate(members) if i != root_index)
    return Branch(group=group, root=members[root_index], children=children)


def _page_imports(routes: Sequence[RouteEntry], package_name: str) -> tuple[str, ...]:
    imports = (
        f"package:{package_name}/features/{r.group}/{r.file_stem}.dart"
        for r in routes
        if r.group
    )
    return tuple(dict.fromkeys(imports))
