"""routegen resource manifest -- builds ``lib/res/r.g.dart`` from ``assets/``."""

from routegen.assets.manifest import (
    AssetEntry,
    asset_name,
    collect_assets,
    is_ignored,
    render_manifest,
)

__all__ = [
    "AssetEntry",
    "asset_name",
    "collect_assets",
    "is_ignored",
    "render_manifest",
]
