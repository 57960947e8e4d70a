"""Layer scaffolder: creates missing page / controller / state / repository files.

For each feature route (non-empty group other than ``auth``) the scaffolder
makes sure the view and its controller exist under ``lib/features/<group>/``.
Creating a controller also creates its state and repository.  A file that
already exists is never opened, let alone rewritten: once scaffolded, the
developer owns it.

Scaffolding is a convenience step.  A file that cannot be written is
reported and skipped; the remaining files and routes are still processed.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path

from jinja2 import TemplateError
from pydantic import BaseModel, Field

from routegen.parser.models import RouteEntry
from routegen.rendering import TemplateRenderer
from routegen.utils import console, print_warning, relative_to_root

from .artifacts import ARTIFACTS, SCAFFOLD_ORDER, ArtifactKind, artifact_context, artifact_path


# ---------------------------------------------------------------------------
# Report models
# ---------------------------------------------------------------------------


class ScaffoldOutcome(BaseModel):
    """What happened to one artifact file."""

    kind: ArtifactKind
    path: Path
    error: str = ""


class ScaffoldReport(BaseModel):
    """Per-run summary of the scaffolder's work."""

    created: list[ScaffoldOutcome] = Field(default_factory=list)
    skipped: list[ScaffoldOutcome] = Field(default_factory=list)
    failed: list[ScaffoldOutcome] = Field(default_factory=list)

    @property
    def created_paths(self) -> list[Path]:
        return [o.path for o in self.created]


def needs_scaffold(route: RouteEntry) -> bool:
    """Only feature routes get layered files; home and auth pages do not."""
    return bool(route.group) and not route.is_auth


# ---------------------------------------------------------------------------
# Scaffolder
# ---------------------------------------------------------------------------


class LayerScaffolder:
    """Creates the conventional layered files for feature routes.

    Args:
        features_dir: ``lib/features`` of the target project.
        package_name: Dart package name used in ``package:`` imports.
        renderer: Template renderer; a default one is created if omitted.
    """

    def __init__(
        self,
        features_dir: str | Path,
        package_name: str,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.features_dir = Path(features_dir)
        self.package_name = package_name
        self.renderer = renderer or TemplateRenderer()

    async def scaffold(self, routes: Sequence[RouteEntry]) -> ScaffoldReport:
        """Create every missing artifact for *routes*, in route order."""
        report = ScaffoldReport()
        for route in routes:
            if not needs_scaffold(route):
                continue
            for kind in SCAFFOLD_ORDER:
                await self._ensure(route, kind, report)
        return report

    async def _ensure(
        self, route: RouteEntry, kind: ArtifactKind, report: ScaffoldReport
    ) -> None:
        """Check-then-create *kind* for *route*; on creation, create its triggers."""
        path = artifact_path(self.features_dir, route, kind)
        shown = relative_to_root(path, self.features_dir.parent.parent)

        exists = await asyncio.to_thread(path.exists)
        if exists:
            report.skipped.append(ScaffoldOutcome(kind=kind, path=path))
            return

        console.print(f"  Creating missing {kind.value}: [bold]{shown}[/bold]")
        spec = ARTIFACTS[kind]
        try:
            await self.renderer.render_to_file(
                spec.template, path, artifact_context(route, self.package_name)
            )
        except (OSError, TemplateError) as exc:
            print_warning(f"  Failed to create {kind.value} {shown}: {exc}")
            report.failed.append(ScaffoldOutcome(kind=kind, path=path, error=str(exc)))
            return

        console.print(f"  [green]+[/green] Created {kind.value}: {shown}")
        report.created.append(ScaffoldOutcome(kind=kind, path=path))

        for dependent in spec.triggers:
            await self._ensure(route, dependent, report)
