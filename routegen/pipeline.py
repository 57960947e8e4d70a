"""routegen pipeline orchestrator.

Runs the two independent generation stages against a Flutter project:

routes -- parse ``lib/route_config.dart``, scaffold missing feature files,
          write ``lib/router.g.dart``.
assets -- scan ``assets/`` and write ``lib/res/r.g.dart``.

Usage::

    routegen all --project-root ./my_app
    python -m routegen.pipeline routes --no-scaffold
"""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path
from typing import Any

from rich.panel import Panel

from routegen.assets import collect_assets, render_manifest
from routegen.config import BuilderOptions, Settings, load_builder_options
from routegen.navigation import generate_navigation_source
from routegen.parser import RouteNamingError, load_route_table
from routegen.scaffolder import LayerScaffolder
from routegen.utils import (
    console,
    format_duration,
    print_error,
    print_stage_header,
    print_success,
    print_summary_table,
    print_warning,
    relative_to_root,
    write_text_file,
)

STAGES: tuple[str, ...] = ("routes", "assets")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PipelineError(Exception):
    """Raised when a stage fails irrecoverably."""

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(f"{stage}: {message}")


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives the routes and assets stages for one project.

    ``routegen.yaml`` is read at most once per ``Pipeline`` and shared by
    both stages.

    Attributes:
        settings: Paths and names for this run.
        state: Accumulated per-stage results.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.state: dict[str, Any] = {
            "stages_completed": [],
            "stages_failed": [],
            "success": False,
        }
        self._options: BuilderOptions | None = None

    @property
    def options(self) -> BuilderOptions:
        if self._options is None:
            self._options = load_builder_options(self.settings.builder_config_path)
        return self._options

    def _shown(self, path: Path) -> str:
        return relative_to_root(path, self.settings.project_root)

    # ------------------------------------------------------------------
    # Stage dispatch
    # ------------------------------------------------------------------

    _STAGE_METHODS: dict[str, str] = {
        "routes": "generate_routes",
        "assets": "generate_assets",
    }

    async def run(self, stages: tuple[str, ...] | list[str] = STAGES) -> dict[str, Any]:
        """Run *stages* in order, stopping at the first failure.

        Returns:
            The final state dictionary, including a top-level ``success``
            boolean and each completed stage's result.
        """
        run_start = time.monotonic()
        console.print(
            Panel(
                f"[bold bright_cyan]routegen[/bold bright_cyan]\n"
                f"Project : {self.settings.project_root.resolve()}\n"
                f"Stages  : {', '.join(stages)}",
                border_style="bright_cyan",
            )
        )

        all_success = True
        for stage in stages:
            method_name = self._STAGE_METHODS.get(stage)
            if method_name is None:
                print_warning(f"Unknown stage {stage!r} -- skipping.")
                continue

            print_stage_header(stage, stage.upper())
            stage_start = time.monotonic()
            try:
                result = await getattr(self, method_name)()
            except PipelineError as exc:
                all_success = False
                self.state["stages_failed"].append(stage)
                self.state[f"{stage}_error"] = str(exc)
                print_error(
                    f"Stage {stage} FAILED after "
                    f"{format_duration(time.monotonic() - stage_start)}: {exc}"
                )
                break

            self.state[stage] = result
            self.state["stages_completed"].append(stage)
            print_success(
                f"Stage {stage} completed in {format_duration(time.monotonic() - stage_start)}"
            )

        self.state["success"] = all_success
        self.state["total_duration"] = format_duration(time.monotonic() - run_start)
        return self.state

    # ------------------------------------------------------------------
    # Stage: routes
    # ------------------------------------------------------------------

    async def generate_routes(self) -> dict[str, Any]:
        """Parse the route table, scaffold feature files, write ``router.g.dart``.

        Raises:
            PipelineError: If the route configuration is missing or
                unreadable, a page name breaks the ``...Page`` rule
                (nothing is written in that case), or the output cannot
                be written.
        """
        config_path = self.settings.route_config_path
        console.print(f"  Processing [bold]{self._shown(config_path)}[/bold]")

        try:
            table = await load_route_table(config_path, self.settings.table_name)
        except RouteNamingError as exc:
            raise PipelineError("routes", str(exc)) from exc
        except FileNotFoundError as exc:
            raise PipelineError("routes", str(exc)) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise PipelineError(
                "routes", f"Could not read {self._shown(config_path)}: {exc}"
            ) from exc

        for warning in table.warnings:
            print_warning(f"  {warning}")

        if not table.routes:
            print_warning(f"  No routes found in {self._shown(config_path)}")
            return {"routes": 0, "output": None, "scaffolded": []}

        console.print(f"  Parsed {len(table.routes)} routes")
        options = self.options
        package_name = self.settings.resolved_package_name()

        scaffolded: list[str] = []
        if self.settings.scaffold:
            scaffolder = LayerScaffolder(self.settings.features_dir, package_name)
            report = await scaffolder.scaffold(table.routes)
            scaffolded = [self._shown(p) for p in report.created_paths]
            if report.failed:
                print_warning(f"  {len(report.failed)} scaffold file(s) could not be created")

        source = generate_navigation_source(table.routes, options, package_name)
        output = self.settings.router_output_path
        await self._write_output("routes", output, source)
        console.print(f"  Generated {self._shown(output)} with {len(table.routes)} routes")

        return {
            "routes": len(table.routes),
            "output": str(output),
            "scaffolded": scaffolded,
        }

    # ------------------------------------------------------------------
    # Stage: assets
    # ------------------------------------------------------------------

    async def generate_assets(self) -> dict[str, Any]:
        """Scan ``assets/`` and write ``lib/res/r.g.dart``.

        A project without an assets directory is not an error; the stage
        warns and writes nothing.
        """
        assets_dir = self.settings.assets_dir
        if not assets_dir.is_dir():
            print_warning(f"  Assets directory not found: {self._shown(assets_dir)}")
            return {"assets": 0, "output": None}

        entries = await asyncio.to_thread(
            collect_assets, assets_dir, list(self.options.ignore_dirs)
        )
        source = render_manifest(entries)
        output = self.settings.manifest_output_path
        await self._write_output("assets", output, source)
        console.print(f"  Generated {self._shown(output)} with {len(entries)} assets")
        return {"assets": len(entries), "output": str(output)}

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _write_output(self, stage: str, path: Path, content: str) -> None:
        try:
            await asyncio.to_thread(write_text_file, path, content)
        except OSError as exc:
            print_error(f"  Could not write {self._shown(path)}: {exc}")
            raise PipelineError(stage, f"Could not write {path}: {exc}") from exc

    def print_final_summary(self) -> None:
        """Print a table of what each stage produced."""
        data: dict[str, str] = {}
        routes = self.state.get("routes")
        if routes:
            data["Routes"] = str(routes["routes"])
            data["Router output"] = routes["output"] or "-"
            data["Scaffolded files"] = str(len(routes["scaffolded"]))
        assets = self.state.get("assets")
        if assets:
            data["Assets"] = str(assets["assets"])
            data["Manifest output"] = assets["output"] or "-"
        data["Duration"] = self.state.get("total_duration", "-")
        print_summary_table(data, title="routegen")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``routegen`` / ``python -m routegen.pipeline``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="routegen",
        description="Generate go_router navigation, resource constants and feature scaffolds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  routegen all\n"
            "  routegen routes --project-root ./my_app --no-scaffold\n"
            "  routegen assets --config build/routegen.yaml\n"
        ),
    )
    parser.add_argument(
        "stage",
        choices=[*STAGES, "all"],
        nargs="?",
        default="all",
        help="Which stage to run (default: all)",
    )
    parser.add_argument(
        "--project-root", "-p",
        default=None,
        help="Flutter project root (default: current directory)",
    )
    parser.add_argument(
        "--package-name",
        default=None,
        help="Dart package name (default: read from pubspec.yaml)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Builder config file relative to the project root (default: routegen.yaml)",
    )
    parser.add_argument(
        "--no-scaffold",
        action="store_true",
        help="Do not create missing page/controller/state/repository files",
    )

    args = parser.parse_args(argv)

    settings = Settings.from_env()
    if args.project_root:
        settings.project_root = Path(args.project_root)
    if args.package_name:
        settings.package_name = args.package_name
    if args.config:
        settings.config_file = args.config
    if args.no_scaffold:
        settings.scaffold = False

    if not settings.project_root.is_dir():
        console.print(
            f"[bold red]Error:[/bold red] Project root not found: {settings.project_root}"
        )
        sys.exit(1)

    stages = STAGES if args.stage == "all" else (args.stage,)
    pipeline = Pipeline(settings)
    result = asyncio.run(pipeline.run(stages))
    pipeline.print_final_summary()

    if not result.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
