"""Detector for generated ViewBinding classes (``ActivityMainBinding``)."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Optional

from .core import SourceCodeDetector, is_binding_output, make_reference
from ..models import AssetType, DetectorKind, Reference

_SUFFIX = "Binding"
_BINDING_CLASS = re.compile(rf"\b([A-Z]\w*{_SUFFIX})\b")


class BindingClassDetector(SourceCodeDetector):
    """Maps ``FooBarBinding`` usages back to the ``foo_bar`` layout."""

    logger_name = "detectors.bindings"

    def skips(self, path: Path) -> bool:
        return is_binding_output(path)

    def scan_file(self, path: Path, text: str, masked_lines: List[str]) -> Iterable[Reference]:
        references: List[Reference] = []
        for line_number, line in enumerate(masked_lines, start=1):
            for match in _BINDING_CLASS.finditer(line):
                layout = binding_class_to_layout(match.group(1))
                if layout is None:
                    continue
                references.append(
                    make_reference(
                        layout,
                        AssetType.LAYOUT,
                        path,
                        line_number,
                        match.start() + 1,
                        DetectorKind.VIEW_BINDING,
                    )
                )
        return references


def binding_class_to_layout(class_name: str) -> Optional[str]:
    """``ActivityMainBinding`` -> ``activity_main``; bare ``Binding`` -> None."""
    if not class_name.endswith(_SUFFIX):
        return None
    prefix = class_name[: -len(_SUFFIX)]
    if not prefix:
        return None
    return pascal_to_snake(prefix)


def pascal_to_snake(value: str) -> str:
    chars: List[str] = []
    for index, char in enumerate(value):
        if char.isupper():
            if index > 0:
                chars.append("_")
            chars.append(char.lower())
        else:
            chars.append(char)
    return "".join(chars)


__all__ = ["BindingClassDetector", "binding_class_to_layout", "pascal_to_snake"]
