"""Jinja2 template rendering for generated and scaffolded Dart files.

Provides the TemplateRenderer class which loads ``.j2`` templates from the
``routegen/templates/`` directory and renders them with a context built by
the navigation generator or the layer scaffolder.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from routegen.naming import layer_stem, strip_page_suffix, to_route_name
from routegen.utils import write_text_file


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for routegen output.

    Autoescaping is off and undefined variables raise.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        # Naming filters used by the scaffold templates
        self.env.filters["route_name"] = to_route_name
        self.env.filters["strip_page"] = strip_page_suffix
        self.env.filters["layer_stem"] = layer_stem
        self.env.filters["dart_string"] = dart_string

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"scaffold/page.dart.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.  Returns the output
        path.
        """
        content = self.render(template_path, context)
        return await asyncio.to_thread(write_text_file, Path(output_path), content)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def dart_string(value: str) -> str:
    """Quote *value* as a single-quoted Dart string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("$", "\\$")
    return f"'{escaped}'"
