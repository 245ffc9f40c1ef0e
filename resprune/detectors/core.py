"""Shared reference detection helpers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Sequence, Set

from ..logging import get_logger
from ..models import AssetType, DetectorKind, Reference, ReferenceLocation
from ..tokenizer import mask
from ..utils import iter_files, posix, read_text, split_lines

SOURCE_EXTENSIONS = (".kt", ".java")

_GENERATED_SEGMENT = "/generated/"
_FORMATTED_RESOURCE_SEGMENT = "/paraphrase/"
_BINDING_SEGMENTS = ("/data_binding_base_class_source_out/", "/viewbinding/", "/databinding/")


class ReferenceDetector(ABC):
    """Contract for detectors that find resource usages."""

    @abstractmethod
    def detect(
        self, source_roots: Sequence[Path], declaration_roots: Sequence[Path]
    ) -> Set[Reference]:
        """Return every reference found under the given roots."""


class SourceCodeDetector(ReferenceDetector):
    """Walks Kotlin/Java files and hands masked lines to ``scan_file``."""

    logger_name = "detectors"

    def __init__(self) -> None:
        self.logger = get_logger(self.logger_name)

    def detect(
        self, source_roots: Sequence[Path], declaration_roots: Sequence[Path]
    ) -> Set[Reference]:
        references: Set[Reference] = set()
        roots = [Path(root) for root in source_roots if not self.skips(Path(root))]
        for path in iter_files(roots, SOURCE_EXTENSIONS):
            if self.skips(path):
                continue
            text = read_text(path)
            if text is None:
                continue
            references.update(self.scan_file(path, text, split_lines(mask(text))))
        self.logger.debug("%s found %d references", type(self).__name__, len(references))
        return references

    def skips(self, path: Path) -> bool:
        """Return True for generated output that must not count as usage."""
        return False

    @abstractmethod
    def scan_file(self, path: Path, text: str, masked_lines: List[str]) -> Iterable[Reference]:
        """Yield references for one file; ``masked_lines`` come from the tokenizer."""


def make_reference(
    name: str,
    asset_type: AssetType,
    path: Path,
    line: int,
    column: int,
    kind: DetectorKind,
) -> Reference:
    return Reference(
        name=name,
        asset_type=asset_type,
        location=ReferenceLocation(path=path, line=line, column=column),
        kind=kind,
    )


def is_formatted_resource_output(path: Path) -> bool:
    """Paraphrase writes ``FormattedResources`` under build/generated/source/paraphrase/."""
    text = posix(path) + "/"
    return _GENERATED_SEGMENT in text and _FORMATTED_RESOURCE_SEGMENT in text


def is_binding_output(path: Path) -> bool:
    """ViewBinding classes are generated under build/generated/data_binding_base_class_source_out/."""
    text = posix(path).lower() + "/"
    return _GENERATED_SEGMENT in text and any(segment in text for segment in _BINDING_SEGMENTS)


__all__ = [
    "ReferenceDetector",
    "SOURCE_EXTENSIONS",
    "SourceCodeDetector",
    "is_binding_output",
    "is_formatted_resource_output",
    "make_reference",
]
