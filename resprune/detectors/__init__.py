"""Reference detectors and their composite."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Set

from .bindings import BindingClassDetector, binding_class_to_layout
from .core import ReferenceDetector, is_binding_output, is_formatted_resource_output
from .formatted import FormattedResourceDetector
from .markup import DEFAULT_FRAMEWORK_PREFIXES, MarkupReferenceDetector
from .symbols import SymbolReferenceDetector
from ..models import Reference


class CompositeDetector(ReferenceDetector):
    """Unions the references found by every child detector."""

    def __init__(self, detectors: Sequence[ReferenceDetector]) -> None:
        self._detectors = list(detectors)

    def detect(
        self, source_roots: Sequence[Path], declaration_roots: Sequence[Path]
    ) -> Set[Reference]:
        references: Set[Reference] = set()
        for detector in self._detectors:
            references.update(detector.detect(source_roots, declaration_roots))
        return references


def default_detector(
    framework_prefixes: Sequence[str] = DEFAULT_FRAMEWORK_PREFIXES,
) -> CompositeDetector:
    return CompositeDetector(
        [
            SymbolReferenceDetector(),
            MarkupReferenceDetector(framework_prefixes),
            BindingClassDetector(),
            FormattedResourceDetector(),
        ]
    )


__all__ = [
    "BindingClassDetector",
    "CompositeDetector",
    "DEFAULT_FRAMEWORK_PREFIXES",
    "FormattedResourceDetector",
    "MarkupReferenceDetector",
    "ReferenceDetector",
    "SymbolReferenceDetector",
    "binding_class_to_layout",
    "default_detector",
    "is_binding_output",
    "is_formatted_resource_output",
]
