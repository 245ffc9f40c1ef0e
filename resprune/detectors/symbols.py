"""Detector for ``R.<type>.<name>`` references in Kotlin and Java code."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Optional, Set

from .core import SourceCodeDetector, is_binding_output, is_formatted_resource_output, make_reference
from ..models import AssetType, DetectorKind, Reference

_ROOT_SYMBOL = "R"
_ALIAS_IMPORT = re.compile(r"\bimport\s+[\w.]+\.R\s+as\s+(\w+)")
_STYLEABLE = "styleable"


class SymbolReferenceDetector(SourceCodeDetector):
    """Finds ``R.drawable.icon`` style accesses, honouring ``import x.R as Alias``.

    ``R.styleable.CustomView_customBackground`` is reported as a use of the
    ``customBackground`` attr. Generated ViewBinding and Paraphrase sources
    are skipped: they reference resources on behalf of user code, and the
    dedicated detectors decide whether that user code exists.
    """

    logger_name = "detectors.symbols"

    def skips(self, path: Path) -> bool:
        return is_formatted_resource_output(path) or is_binding_output(path)

    def scan_file(self, path: Path, text: str, masked_lines: List[str]) -> Iterable[Reference]:
        kind = DetectorKind.JAVA_SYMBOL if path.suffix == ".java" else DetectorKind.KOTLIN_SYMBOL
        roots = _root_alternation(extract_aliases("\n".join(masked_lines)))
        access = re.compile(rf"\b(?:{roots})\.(\w+)\.(\w+)")
        styleable = re.compile(rf"\b(?:{roots})\.{_STYLEABLE}\.(\w+)")

        references: List[Reference] = []
        for line_number, line in enumerate(masked_lines, start=1):
            for match in access.finditer(line):
                asset_type = AssetType.from_type_name(match.group(1))
                if asset_type is None:
                    continue
                references.append(
                    make_reference(match.group(2), asset_type, path, line_number, match.start() + 1, kind)
                )
            for match in styleable.finditer(line):
                attr_name = attr_name_from_styleable(match.group(1))
                if attr_name is None:
                    continue
                references.append(
                    make_reference(attr_name, AssetType.ATTR, path, line_number, match.start() + 1, kind)
                )
        return references


def extract_aliases(text: str) -> Set[str]:
    """Return every alias bound by ``import <package>.R as <Alias>``."""
    return {match.group(1) for match in _ALIAS_IMPORT.finditer(text)}


def attr_name_from_styleable(compound: str) -> Optional[str]:
    """``CustomView_customBackground`` -> ``customBackground``."""
    index = compound.find("_")
    if index == -1 or index == len(compound) - 1:
        return None
    return compound[index + 1 :]


def _root_alternation(aliases: Set[str]) -> str:
    return "|".join([_ROOT_SYMBOL] + [re.escape(alias) for alias in sorted(aliases)])


__all__ = ["SymbolReferenceDetector", "attr_name_from_styleable", "extract_aliases"]
