"""Base classes for declaration collectors."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import FrozenSet, List, Sequence

from ..logging import get_logger
from ..models import DeclaredAsset

_logger = get_logger("collectors")


class AssetCollector(ABC):
    """Contract for collectors that enumerate declared resources."""

    @abstractmethod
    def collect(self, declaration_roots: Sequence[Path]) -> List[DeclaredAsset]:
        """Return every resource declared under the given ``res/`` roots."""


def qualifiers_of(dir_name: str) -> FrozenSet[str]:
    """Return ``{"hdpi", "night"}`` for ``drawable-hdpi-night``."""
    parts = dir_name.split("-")
    return frozenset(parts[1:]) if len(parts) > 1 else frozenset()


def existing_dirs(roots: Sequence[Path]) -> List[Path]:
    return [Path(root) for root in roots if Path(root).is_dir()]


def list_subdirs(root: Path) -> List[Path]:
    return [child for child in _children(root) if child.is_dir()]


def list_files(directory: Path) -> List[Path]:
    return [child for child in _children(directory) if child.is_file()]


def _children(directory: Path) -> List[Path]:
    try:
        return sorted(directory.iterdir())
    except OSError as exc:
        _logger.warning("Skipping unreadable directory %s: %s", directory, exc)
        return []
