"""Detector for references written in XML resources and manifests."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Set

from .core import ReferenceDetector, make_reference
from ..logging import get_logger
from ..models import AssetType, DetectorKind, Reference
from ..utils import find_tag_end, iter_files, read_text, split_lines

DEFAULT_FRAMEWORK_PREFIXES = ("android:", "Theme.")

_PLATFORM_NAMESPACE = "android:"
_BUILD_DIR = "build"

# id, raw, font and xml references are intentionally not tracked.
_MARKUP_TYPES: Dict[str, AssetType] = {
    "drawable": AssetType.DRAWABLE,
    "mipmap": AssetType.MIPMAP,
    "layout": AssetType.LAYOUT,
    "menu": AssetType.MENU,
    "animator": AssetType.ANIMATOR,
    "anim": AssetType.ANIM,
    "color": AssetType.COLOR,
    "string": AssetType.STRING,
    "dimen": AssetType.DIMEN,
    "style": AssetType.STYLE,
    "bool": AssetType.BOOL,
    "integer": AssetType.INTEGER,
    "array": AssetType.ARRAY,
    "attr": AssetType.ATTR,
    "plurals": AssetType.PLURALS,
}

_COMMENT_OPEN = "<!--"
_TOOLS_ATTRIBUTE = re.compile(r"tools:\w+\s*=\s*\"[^\"]*\"")
_RESOURCE_REFERENCE = re.compile(r"@\+?(\w+)/([\w.]+)")
_STYLE_PARENT = re.compile(r"\bparent\s*=\s*\"([^\"@]+)\"")
_NAME_ATTRIBUTE = re.compile(r"\bname\s*=\s*\"([^\"]+)\"")
_THEME_ATTRIBUTE = re.compile(r"\?attr/(\w+)")
_ITEM_NAME = re.compile(r"<item\s+[^>]*?\bname\s*=\s*\"([^\"]+)\"")
_ATTR_NAME = re.compile(r"<attr\s+[^>]*?\bname\s*=\s*\"([^\"]+)\"")
_STYLE_OPEN = re.compile(r"<style(?=[\s>]|$)")
_STYLE_CLOSE = "</style>"
_SELF_CLOSED = re.compile(r"/\s*>$")
_STYLEABLE_OPEN = re.compile(r"<declare-styleable(?=[\s>]|$)")
_STYLEABLE_CLOSE = "</declare-styleable>"


@dataclass
class _OpeningTag:
    """A ``<style`` opening tag being read, possibly across several lines."""

    line: int
    column: int
    text: str = ""
    quote: Optional[str] = None
    self_closed: bool = False

    def feed(self, chunk: str) -> bool:
        end, self.quote = find_tag_end(chunk, self.quote)
        if end == -1:
            self.text += chunk + "\n"
            return False
        self.text += chunk[: end + 1]
        self.self_closed = _SELF_CLOSED.search(self.text) is not None
        return True


class MarkupReferenceDetector(ReferenceDetector):
    """Scans raw XML lines for ``@type/name``, ``?attr/name`` and style inheritance."""

    def __init__(self, framework_prefixes: Sequence[str] = DEFAULT_FRAMEWORK_PREFIXES) -> None:
        self.framework_prefixes = tuple(framework_prefixes)
        self.logger = get_logger("detectors.markup")

    def detect(
        self, source_roots: Sequence[Path], declaration_roots: Sequence[Path]
    ) -> Set[Reference]:
        references: Set[Reference] = set()
        for path in self._markup_files(source_roots, declaration_roots):
            text = read_text(path)
            if text is None:
                continue
            references.update(self.scan_text(text, path))
        self.logger.debug("MarkupReferenceDetector found %d references", len(references))
        return references

    def _markup_files(
        self, source_roots: Sequence[Path], declaration_roots: Sequence[Path]
    ) -> Iterator[Path]:
        seen: Set[Path] = set()
        for path in iter_files(declaration_roots, [".xml"]):
            seen.add(path)
            yield path
        for root in source_roots:
            root = Path(root)
            for path in iter_files([root], [".xml"]):
                if path in seen or _inside_build_dir(root, path):
                    continue
                seen.add(path)
                yield path

    def scan_text(self, text: str, path: Path) -> List[Reference]:
        """Return references for one XML document."""
        references: List[Reference] = []
        in_style = False
        in_styleable = False
        style_tag: Optional[_OpeningTag] = None

        def emit(name: str, asset_type: AssetType, line: int, column: int) -> None:
            references.append(
                make_reference(name, asset_type, path, line, column, DetectorKind.MARKUP_REFERENCE)
            )

        for line_number, raw_line in enumerate(split_lines(text), start=1):
            if raw_line.strip().startswith(_COMMENT_OPEN):
                continue
            line = _TOOLS_ATTRIBUTE.sub(_blank_match, raw_line)

            for match in _RESOURCE_REFERENCE.finditer(line):
                asset_type = _MARKUP_TYPES.get(match.group(1))
                if asset_type is not None:
                    emit(match.group(2), asset_type, line_number, match.start() + 1)

            for match in _STYLE_PARENT.finditer(line):
                parent = match.group(1).strip()
                if parent and self._is_local_parent(parent):
                    emit(parent, AssetType.STYLE, line_number, match.start() + 1)

            for match in _THEME_ATTRIBUTE.finditer(line):
                emit(match.group(1), AssetType.ATTR, line_number, match.start() + 1)

            rest = line
            if style_tag is None:
                opening = _STYLE_OPEN.search(line)
                if opening is not None:
                    style_tag = _OpeningTag(line_number, opening.start() + 1)
                    rest = line[opening.end() :]
            # The opening tag may span lines; name and self-closing are known once it ends.
            if style_tag is not None and style_tag.feed(rest):
                name_match = _NAME_ATTRIBUTE.search(style_tag.text)
                if name_match is not None:
                    for parent in self.implicit_parents(name_match.group(1)):
                        emit(parent, AssetType.STYLE, style_tag.line, style_tag.column)
                in_style = not style_tag.self_closed
                style_tag = None
            if _STYLEABLE_OPEN.search(line):
                in_styleable = True

            if in_style:
                for match in _ITEM_NAME.finditer(line):
                    if not match.group(1).startswith(_PLATFORM_NAMESPACE):
                        emit(match.group(1), AssetType.ATTR, line_number, match.start() + 1)
            if in_styleable:
                for match in _ATTR_NAME.finditer(line):
                    if not match.group(1).startswith(_PLATFORM_NAMESPACE):
                        emit(match.group(1), AssetType.ATTR, line_number, match.start() + 1)

            if _STYLE_CLOSE in line:
                in_style = False
            if _STYLEABLE_CLOSE in line:
                in_styleable = False

        return references

    def implicit_parents(self, style_name: str) -> List[str]:
        """``A.B.C`` implicitly inherits ``A.B`` and ``A``."""
        if "." not in style_name or style_name.startswith(self.framework_prefixes):
            return []
        parts = style_name.split(".")
        return [".".join(parts[:index]) for index in range(len(parts) - 1, 0, -1)]

    def _is_local_parent(self, parent: str) -> bool:
        return not parent.startswith(self.framework_prefixes) and "." not in parent


def _blank_match(match: "re.Match[str]") -> str:
    # Blank rather than delete so columns of later matches stay aligned.
    return " " * len(match.group(0))


def _inside_build_dir(root: Path, path: Path) -> bool:
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        return False
    return _BUILD_DIR in parts[:-1]


__all__ = ["DEFAULT_FRAMEWORK_PREFIXES", "MarkupReferenceDetector"]
