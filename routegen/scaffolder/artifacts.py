"""The four layered files scaffolded for every feature page.

Each artifact kind maps to a directory under ``lib/features/<group>/``, a
file-stem layer, the template that renders it and the kinds it pulls in when
it is created.  ``SCAFFOLD_ORDER`` is the per-route creation order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from routegen.naming import layer_stem
from routegen.parser.models import RouteEntry


class ArtifactKind(str, Enum):
    """Layers of a scaffolded feature page."""
    VIEW = "view"
    CONTROLLER = "controller"
    STATE = "state"
    REPOSITORY = "repository"


@dataclass(frozen=True)
class ArtifactSpec:
    directory: str
    layer: str
    template: str
    triggers: tuple[ArtifactKind, ...] = ()


ARTIFACTS: dict[ArtifactKind, ArtifactSpec] = {
    ArtifactKind.VIEW: ArtifactSpec(
        directory="",
        layer="page",
        template="scaffold/page.dart.j2",
    ),
    ArtifactKind.CONTROLLER: ArtifactSpec(
        directory="controllers",
        layer="controller",
        template="scaffold/controller.dart.j2",
        triggers=(ArtifactKind.STATE, ArtifactKind.REPOSITORY),
    ),
    ArtifactKind.STATE: ArtifactSpec(
        directory="models",
        layer="state",
        template="scaffold/state.dart.j2",
    ),
    ArtifactKind.REPOSITORY: ArtifactSpec(
        directory="repositories",
        layer="repository",
        template="scaffold/repository.dart.j2",
    ),
}

SCAFFOLD_ORDER: tuple[ArtifactKind, ...] = (ArtifactKind.VIEW, ArtifactKind.CONTROLLER)


def artifact_path(features_dir: Path, route: RouteEntry, kind: ArtifactKind) -> Path:
    """Where *kind* lives for *route*.

    ``CartPage`` in group ``shop`` gives ``shop/cart_page.dart``,
    ``shop/controllers/cart_controller.dart``, ``shop/models/cart_state.dart``
    and ``shop/repositories/cart_repository.dart``.
    """
    spec = ARTIFACTS[kind]
    group_dir = features_dir / route.group
    directory = group_dir / spec.directory if spec.directory else group_dir
    return directory / f"{layer_stem(route.page, spec.layer)}.dart"


def artifact_context(route: RouteEntry, package_name: str) -> dict[str, Any]:
    """Template variables shared by all four scaffold templates.

    Class, provider and file names are derived inside the templates with
    the naming filters registered on ``TemplateRenderer``.
    """
    return {
        "package_name": package_name,
        "group": route.group,
        "page": route.page,
        "has_params": route.has_params,
    }
