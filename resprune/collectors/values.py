"""Collector for value resources declared inside ``values*/`` XML files.

The scan is line based rather than a real XML parse: line numbers are
needed later to cut elements out of the file without reformatting it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, List, Optional, Sequence

from .base import AssetCollector, existing_dirs, list_files, list_subdirs, qualifiers_of
from ..logging import get_logger
from ..models import AssetType, DeclaredAsset, ElementLocation
from ..utils import find_tag_end, read_text, split_lines

_VALUES_PREFIX = "values"

_TAG_TYPES = {
    "string": AssetType.STRING,
    "color": AssetType.COLOR,
    "dimen": AssetType.DIMEN,
    "style": AssetType.STYLE,
    "bool": AssetType.BOOL,
    "integer": AssetType.INTEGER,
    "array": AssetType.ARRAY,
    "string-array": AssetType.ARRAY,
    "integer-array": AssetType.ARRAY,
    "attr": AssetType.ATTR,
    "plurals": AssetType.PLURALS,
    "drawable": AssetType.DRAWABLE,
}
_ITEM_TAG = "item"

_TAG_PATTERN = re.compile(r"<(\w+(?:-\w+)*)(?=[\s/>]|$)")
_NAME_PATTERN = re.compile(r"\bname\s*=\s*\"([^\"]+)\"")
_TYPE_PATTERN = re.compile(r"\btype\s*=\s*\"([^\"]+)\"")
_SELF_CLOSED = re.compile(r"/\s*>$")


@dataclass
class _PendingElement:
    tag: str
    start_line: int
    lines: List[str] = field(default_factory=list)
    opening: str = ""
    opening_closed: bool = False
    quote: Optional[str] = None

    def feed(self, line: str, offset: int = 0) -> bool:
        """Consume one line; return True once the element is complete."""
        self.lines.append(line)
        rest = line[offset:]
        if not self.opening_closed:
            end, self.quote = find_tag_end(rest, self.quote)
            if end == -1:
                self.opening += rest + "\n"
                return False
            self.opening += rest[: end + 1]
            self.opening_closed = True
            if _SELF_CLOSED.search(self.opening):
                return True
            rest = rest[end + 1 :]
        return re.search(rf"</{re.escape(self.tag)}\s*>", rest) is not None

    def build(self, path: Path, end_line: int, qualifiers: FrozenSet[str]) -> Optional[DeclaredAsset]:
        name_match = _NAME_PATTERN.search(self.opening)
        if not name_match:
            return None
        asset_type = _resolve_type(self.tag, self.opening)
        if asset_type is None:
            return None
        return DeclaredAsset(
            name=name_match.group(1),
            asset_type=asset_type,
            location=ElementLocation(
                path=path,
                start_line=self.start_line,
                end_line=end_line,
                element_text="\n".join(self.lines),
            ),
            qualifiers=qualifiers,
        )


def _resolve_type(tag: str, opening: str) -> Optional[AssetType]:
    if tag != _ITEM_TAG:
        return _TAG_TYPES.get(tag)
    # <item> is only a declaration when it redirects its type; style children have none.
    type_match = _TYPE_PATTERN.search(opening)
    if not type_match:
        return None
    return AssetType.from_type_name(type_match.group(1))


def _element_start(line: str) -> Optional[tuple[str, int]]:
    """Return ``(tag, offset)`` when ``line`` opens a candidate element."""
    stripped = line.lstrip()
    if not stripped.startswith("<") or stripped.startswith(("</", "<?", "<!--")):
        return None
    match = _TAG_PATTERN.match(stripped)
    if not match:
        return None
    tag = match.group(1)
    if tag not in _TAG_TYPES and tag != _ITEM_TAG:
        return None
    offset = len(line) - len(stripped) + match.end()
    return tag, offset


def parse_values_text(
    text: str, path: Path, qualifiers: FrozenSet[str] = frozenset()
) -> List[DeclaredAsset]:
    """Extract value resources from the contents of one values XML file."""
    assets: List[DeclaredAsset] = []
    pending: Optional[_PendingElement] = None

    for line_number, line in enumerate(split_lines(text), start=1):
        if pending is not None:
            if pending.feed(line):
                asset = pending.build(path, line_number, qualifiers)
                if asset is not None:
                    assets.append(asset)
                pending = None
            continue

        start = _element_start(line)
        if start is None:
            continue
        tag, offset = start
        pending = _PendingElement(tag=tag, start_line=line_number)
        # feed() records the whole line but scans only what follows the tag name.
        pending.opening = line[: offset].lstrip()
        if pending.feed(line, offset):
            asset = pending.build(path, line_number, qualifiers)
            if asset is not None:
                assets.append(asset)
            pending = None

    # An element still open at end of file is malformed and dropped.
    return assets


class ValueAssetCollector(AssetCollector):
    """One XML element inside a ``values*/`` file is one resource."""

    def __init__(self) -> None:
        self.logger = get_logger("collectors.values")

    def collect(self, declaration_roots: Sequence[Path]) -> List[DeclaredAsset]:
        assets: List[DeclaredAsset] = []
        for root in existing_dirs(declaration_roots):
            count = 0
            for values_dir in list_subdirs(root):
                if not values_dir.name.startswith(_VALUES_PREFIX):
                    continue
                qualifiers = qualifiers_of(values_dir.name)
                for path in list_files(values_dir):
                    if path.suffix.lower() != ".xml":
                        continue
                    text = read_text(path)
                    if text is None:
                        continue
                    found = parse_values_text(text, path, qualifiers)
                    count += len(found)
                    assets.extend(found)
            self.logger.debug("Collected %d value resources under %s", count, root)
        return assets


__all__ = ["ValueAssetCollector", "parse_values_text"]
