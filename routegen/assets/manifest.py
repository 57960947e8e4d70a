"""Resource manifest generation -- builds ``lib/res/r.g.dart``.

Scans the project's ``assets/`` tree and emits one ``static const String``
per file inside ``class R``.  Constant names are derived from the file name
and extension (``ic_form_text.svg`` -> ``icFormTextSvg``); when that name is
already taken the parent directory is prefixed once
(``icons/logo.png`` -> ``iconsLogopng``).  A name that still collides is
emitted as-is.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, ConfigDict

from routegen.naming import capitalize, to_camel
from routegen.rendering import TemplateRenderer


MANIFEST_TEMPLATE = "r.g.dart.j2"


class AssetEntry(BaseModel):
    """One resource constant: ``name`` -> project-relative ``path``."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: str


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


def is_ignored(relative_path: str, ignore_dirs: Iterable[str]) -> bool:
    """True if *relative_path* lies under ``assets/<fragment>/`` for any fragment."""
    return any(f"assets/{fragment}/" in relative_path for fragment in ignore_dirs)


def list_asset_files(assets_dir: Path) -> list[str]:
    """Return every file under *assets_dir*, relative to its parent, sorted.

    Paths use ``/`` separators regardless of platform and start with the
    assets directory's own name (``assets/images/logo.png``).
    """
    base = assets_dir.parent
    return sorted(
        p.relative_to(base).as_posix()
        for p in assets_dir.rglob("*")
        if p.is_file()
    )


def asset_name(relative_path: str, used: set[str]) -> str:
    """Derive the constant name for *relative_path* given names already *used*."""
    path = PurePosixPath(relative_path)
    # Only the last suffix counts: "a.b.png" -> stem "a.b" -> "aB" + "Png".
    extension = path.suffix.replace(".", "")
    name = to_camel(path.stem) + capitalize(extension)
    if name in used:
        name = to_camel(path.parent.name) + capitalize(name)
    return name


def collect_assets(assets_dir: str | Path, ignore_dirs: Sequence[str]) -> list[AssetEntry]:
    """Scan *assets_dir* and assign every non-ignored file a unique name."""
    used: set[str] = set()
    entries: list[AssetEntry] = []
    for relative_path in list_asset_files(Path(assets_dir)):
        if is_ignored(relative_path, ignore_dirs):
            continue
        name = asset_name(relative_path, used)
        used.add(name)
        entries.append(AssetEntry(name=name, path=relative_path))
    return entries


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_manifest(
    entries: Sequence[AssetEntry],
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render ``class R`` for *entries*."""
    renderer = renderer or TemplateRenderer()
    return renderer.render(MANIFEST_TEMPLATE, {"entries": list(entries)})
