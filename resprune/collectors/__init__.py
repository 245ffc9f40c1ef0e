"""Declaration collectors and their composite."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from .base import AssetCollector
from .files import FileAssetCollector
from .values import ValueAssetCollector, parse_values_text
from ..models import DeclaredAsset


class CompositeCollector(AssetCollector):
    """Runs several collectors and concatenates their results."""

    def __init__(self, collectors: Sequence[AssetCollector]) -> None:
        self._collectors = list(collectors)

    def collect(self, declaration_roots: Sequence[Path]) -> List[DeclaredAsset]:
        assets: List[DeclaredAsset] = []
        for collector in self._collectors:
            assets.extend(collector.collect(declaration_roots))
        return assets


def default_collector() -> CompositeCollector:
    return CompositeCollector([FileAssetCollector(), ValueAssetCollector()])


__all__ = [
    "AssetCollector",
    "CompositeCollector",
    "FileAssetCollector",
    "ValueAssetCollector",
    "default_collector",
    "parse_values_text",
]
