"""routegen configuration.

Two layers of settings, both Pydantic v2 models:

* ``BuilderOptions`` -- the per-project ``routegen.yaml`` document (custom
  imports, ignored asset directories, ...).  Reading it never fails a run:
  a missing file gives defaults, a broken one gives defaults and a warning.
* ``Settings`` -- where the project lives and where inputs and outputs are,
  resolved once by the CLI or by ``Pipeline`` and passed around.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from routegen.parser.extractor import DEFAULT_TABLE_NAME
from routegen.utils import console, print_warning


DEFAULT_CONFIG_FILE = "routegen.yaml"
DEFAULT_PACKAGE_NAME = "app"
DEFAULT_IGNORE_DIRS: list[str] = [
    "images/emoji",
    "images/country",
    "fonts",
]


# ---------------------------------------------------------------------------
# routegen.yaml
# ---------------------------------------------------------------------------


class BuilderOptions(BaseModel):
    """Options read from ``routegen.yaml``.

    Keys use the camelCase spelling found in the YAML file; the snake_case
    attribute names are accepted too when constructing the model in code.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    custom_imports: list[str] = Field(
        default_factory=list,
        alias="customImports",
        description="Import lines appended verbatim to router.g.dart",
    )
    custom_code: str = Field(
        default="",
        alias="customCode",
        description="Reserved; loaded but not emitted",
    )
    ignore_dirs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_DIRS),
        alias="ignoreDirs",
        description="Fragments under assets/ that are excluded from R",
    )
    fallback_page: str = Field(
        default="UpgradeNoticePage",
        alias="fallbackPage",
        description="Page shown for unmatched locations",
    )
    shell_widget: str = Field(
        default="HomeScreen",
        alias="shellWidget",
        description="Widget hosting the StatefulShellRoute branches",
    )


def load_builder_options(path: str | Path) -> BuilderOptions:
    """Load ``routegen.yaml`` from *path*, falling back to defaults.

    A missing file is normal and only noted.  An unreadable file, invalid
    YAML, a non-mapping document or values that fail validation produce a
    warning and the defaults.
    """
    config_path = Path(path)
    if not config_path.exists():
        console.print(f"  [dim]{config_path.name} not found, using defaults[/dim]")
        return BuilderOptions()

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        print_warning(f"Error reading {config_path.name}: {exc}, using defaults")
        return BuilderOptions()

    if raw is None:
        return BuilderOptions()
    if not isinstance(raw, dict):
        print_warning(f"{config_path.name} is not a mapping, using defaults")
        return BuilderOptions()

    try:
        options = BuilderOptions.model_validate(raw)
    except ValidationError as exc:
        print_warning(
            f"Invalid values in {config_path.name} "
            f"({exc.error_count()} error(s)), using defaults"
        )
        return BuilderOptions()

    console.print(f"  Loaded custom configuration from [bold]{config_path.name}[/bold]")
    return options


# ---------------------------------------------------------------------------
# Run settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """Paths and names for one routegen run.

    Everything is relative to ``project_root``, laid out the way a Flutter
    package is (``lib/``, ``assets/``, ``pubspec.yaml``).
    """

    project_root: Path = Field(default=Path("."))
    package_name: str = Field(default="", description="Dart package name; auto-detected when empty")
    config_file: str = Field(default=DEFAULT_CONFIG_FILE)
    table_name: str = Field(default=DEFAULT_TABLE_NAME, min_length=1)
    scaffold: bool = Field(default=True, description="Create missing page/controller/state/repository files")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def lib_dir(self) -> Path:
        return self.project_root / "lib"

    @property
    def route_config_path(self) -> Path:
        """Input: the Dart file declaring ``routesConfig``."""
        return self.lib_dir / "route_config.dart"

    @property
    def router_output_path(self) -> Path:
        """Output: generated navigation source."""
        return self.lib_dir / "router.g.dart"

    @property
    def features_dir(self) -> Path:
        """Root of the per-group feature folders that get scaffolded."""
        return self.lib_dir / "features"

    @property
    def assets_dir(self) -> Path:
        return self.project_root / "assets"

    @property
    def manifest_output_path(self) -> Path:
        """Output: generated resource constants."""
        return self.lib_dir / "res" / "r.g.dart"

    @property
    def builder_config_path(self) -> Path:
        return self.project_root / self.config_file

    @property
    def pubspec_path(self) -> Path:
        return self.project_root / "pubspec.yaml"

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def resolved_package_name(self) -> str:
        """Return ``package_name``, or the ``name:`` from ``pubspec.yaml``.

        Falls back to ``"app"`` when neither is available.
        """
        if self.package_name:
            return self.package_name
        return detect_package_name(self.pubspec_path)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            ROUTEGEN_PROJECT_ROOT, ROUTEGEN_PACKAGE_NAME,
            ROUTEGEN_CONFIG_FILE, ROUTEGEN_TABLE_NAME, ROUTEGEN_NO_SCAFFOLD.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("ROUTEGEN_PROJECT_ROOT"):
            kwargs["project_root"] = Path(os.environ["ROUTEGEN_PROJECT_ROOT"])
        if os.environ.get("ROUTEGEN_PACKAGE_NAME"):
            kwargs["package_name"] = os.environ["ROUTEGEN_PACKAGE_NAME"]
        if os.environ.get("ROUTEGEN_CONFIG_FILE"):
            kwargs["config_file"] = os.environ["ROUTEGEN_CONFIG_FILE"]
        if os.environ.get("ROUTEGEN_TABLE_NAME"):
            kwargs["table_name"] = os.environ["ROUTEGEN_TABLE_NAME"]
        if os.environ.get("ROUTEGEN_NO_SCAFFOLD", "").lower() in ("1", "true", "yes"):
            kwargs["scaffold"] = False
        return cls(**kwargs)


def detect_package_name(pubspec_path: str | Path) -> str:
    """Read the package ``name`` from a ``pubspec.yaml``.

    Returns ``"app"`` if the file is missing, unreadable or has no name.
    """
    path = Path(pubspec_path)
    if not path.exists():
        return DEFAULT_PACKAGE_NAME
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        print_warning(f"Could not read {path.name}: {exc}")
        return DEFAULT_PACKAGE_NAME
    if isinstance(data, dict) and isinstance(data.get("name"), str) and data["name"]:
        return data["name"]
    return DEFAULT_PACKAGE_NAME
