"""routegen navigation generator -- builds ``lib/router.g.dart``.

Quick usage::

    from routegen.navigation import generate_navigation_source

    source = generate_navigation_source(table.routes, options, package_name="shop_app")
"""

from routegen.navigation.generator import generate_navigation_source, render_navigation
from routegen.navigation.planner import (
    Branch,
    NavigationPlan,
    QuickNavItem,
    RouteConstant,
    plan_navigation,
    shell_groups,
)

__all__ = [
    "Branch",
    "NavigationPlan",
    "QuickNavItem",
    "RouteConstant",
    "generate_navigation_source",
    "plan_navigation",
    "render_navigation",
    "shell_groups",
]
