"""Render ``router.g.dart`` from a navigation plan.

Pure text generation: no file access apart from loading the template, and the
same routes and options always give byte-identical output.
"""

from __future__ import annotations

from collections.abc import Sequence

from routegen.config import BuilderOptions
from routegen.parser.models import RouteEntry
from routegen.rendering import TemplateRenderer

from .planner import NavigationPlan, plan_navigation


ROUTER_TEMPLATE = "router.g.dart.j2"


def render_navigation(
    plan: NavigationPlan,
    options: BuilderOptions | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render *plan* into Dart source.

    ``options.custom_imports`` are written verbatim after the framework
    imports.  ``options.custom_code`` is not emitted.
    """
    options = options or BuilderOptions()
    renderer = renderer or TemplateRenderer()
    return renderer.render(
        ROUTER_TEMPLATE,
        {
            "plan": plan,
            "custom_imports": options.custom_imports,
            "fallback_page": options.fallback_page,
            "shell_widget": options.shell_widget,
        },
    )


def generate_navigation_source(
    routes: Sequence[RouteEntry],
    options: BuilderOptions | None = None,
    package_name: str = "app",
    renderer: TemplateRenderer | None = None,
) -> str:
    """Plan and render the navigation source for *routes*."""
    return render_navigation(plan_navigation(routes, package_name), options, renderer)
