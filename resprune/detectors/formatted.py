"""Detector for Paraphrase ``FormattedResources.<name>(...)`` calls."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List

from .core import SourceCodeDetector, is_formatted_resource_output, make_reference
from ..models import AssetType, DetectorKind, Reference

_FORMATTED_CALL = re.compile(r"\bFormattedResources\.(\w+)\s*\(")


class FormattedResourceDetector(SourceCodeDetector):
    """The called method name is the string resource name.

    The generated ``FormattedResources`` object itself is never scanned,
    otherwise every formatted string would look used.
    """

    logger_name = "detectors.formatted"

    def skips(self, path: Path) -> bool:
        return is_formatted_resource_output(path)

    def scan_file(self, path: Path, text: str, masked_lines: List[str]) -> Iterable[Reference]:
        references: List[Reference] = []
        for line_number, line in enumerate(masked_lines, start=1):
            for match in _FORMATTED_CALL.finditer(line):
                references.append(
                    make_reference(
                        match.group(1),
                        AssetType.STRING,
                        path,
                        line_number,
                        match.start() + 1,
                        DetectorKind.FORMATTED_RESOURCE,
                    )
                )
        return references


__all__ = ["FormattedResourceDetector"]
