"""routegen scaffolder -- creates missing layered files for feature pages.

Quick usage::

    from routegen.scaffolder import LayerScaffolder

    scaffolder = LayerScaffolder("lib/features", package_name="shop_app")
    report = await scaffolder.scaffold(table.routes)
    print(report.created_paths)
"""

from routegen.scaffolder.artifacts import (
    ARTIFACTS,
    SCAFFOLD_ORDER,
    ArtifactKind,
    ArtifactSpec,
    artifact_path,
)
from routegen.scaffolder.generator import (
    LayerScaffolder,
    ScaffoldOutcome,
    ScaffoldReport,
    needs_scaffold,
)

__all__ = [
    "ARTIFACTS",
    "SCAFFOLD_ORDER",
    "ArtifactKind",
    "ArtifactSpec",
    "LayerScaffolder",
    "ScaffoldOutcome",
    "ScaffoldReport",
    "artifact_path",
    "needs_scaffold",
]
