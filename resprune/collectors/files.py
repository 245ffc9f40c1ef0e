"""Collector for file-based resources (drawable/, layout/, menu/, ...)."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from .base import AssetCollector, existing_dirs, list_files, list_subdirs, qualifiers_of
from ..logging import get_logger
from ..models import AssetType, DeclaredAsset, FileLocation

_VALID_EXTENSIONS = {"xml", "png", "jpg", "jpeg", "gif", "webp"}
# raw/ holds opaque payloads (audio, json, fonts...) so any extension counts there.
_ANY_EXTENSION_TYPES = {AssetType.RAW}
_IGNORED_FILES = {"Thumbs.db", ".DS_Store"}
_NINE_PATCH_MARKER = ".9"


class FileAssetCollector(AssetCollector):
    """One physical file inside a type-named directory is one resource."""

    def __init__(self) -> None:
        self.logger = get_logger("collectors.files")

    def collect(self, declaration_roots: Sequence[Path]) -> List[DeclaredAsset]:
        assets: List[DeclaredAsset] = []
        for root in existing_dirs(declaration_roots):
            found = self._collect_root(root)
            self.logger.debug("Collected %d file resources under %s", len(found), root)
            assets.extend(found)
        return assets

    def _collect_root(self, root: Path) -> List[DeclaredAsset]:
        assets: List[DeclaredAsset] = []
        for subdir in list_subdirs(root):
            asset_type = AssetType.from_directory_name(subdir.name)
            if asset_type is None:
                continue
            qualifiers = qualifiers_of(subdir.name)
            for path in list_files(subdir):
                if not _is_resource_file(path, asset_type):
                    continue
                assets.append(
                    DeclaredAsset(
                        name=resource_name(path),
                        asset_type=asset_type,
                        location=FileLocation(path),
                        qualifiers=qualifiers,
                    )
                )
        return assets


def resource_name(path: Path) -> str:
    """``icon.9.png`` and ``icon.png`` both declare ``icon``."""
    stem = path.stem
    if stem.endswith(_NINE_PATCH_MARKER):
        return stem[: -len(_NINE_PATCH_MARKER)]
    return stem


def _is_resource_file(path: Path, asset_type: AssetType) -> bool:
    name = path.name
    if name.startswith(".") or name in _IGNORED_FILES:
        return False
    if not resource_name(path):
        return False
    if asset_type in _ANY_EXTENSION_TYPES:
        return True
    return path.suffix.lower().lstrip(".") in _VALID_EXTENSIONS


__all__ = ["FileAssetCollector", "resource_name"]
