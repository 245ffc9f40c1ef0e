"""Filesystem edits that physically remove resources."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from ..errors import LineRangeError, LocationShapeError
from ..logging import get_logger
from ..models import DeclaredAsset, ElementLocation, FileLocation
from ..utils import split_lines

_CONTAINER_OPEN = "<resources"
_CONTAINER_CLOSE = "</resources>"
_VALUE_ELEMENT_OPENERS = (
    "<string",
    "<color",
    "<dimen",
    "<style",
    "<bool",
    "<integer",
    "<array",
    "<attr",
    "<plurals",
    "<item",
    "<drawable",
    "<string-array",
    "<integer-array",
)
_MAX_EMPTY_CONTAINER_LINES = 3


class ResourceEditor:
    """Deletes resource files and cuts value elements out of XML files."""

    def __init__(self) -> None:
        self.logger = get_logger("pruner.editor")

    def remove_file(self, asset: DeclaredAsset) -> None:
        location = asset.location
        if not isinstance(location, FileLocation):
            raise LocationShapeError(f"Expected a file location for {asset.name}")
        try:
            location.path.unlink()
        except FileNotFoundError:
            raise FileNotFoundError(f"File does not exist: {location.path}") from None
        self.logger.debug("Deleted %s", location.path)

    def remove_elements(self, assets: Sequence[DeclaredAsset]) -> None:
        """Remove several elements of the same file in one read/write cycle."""
        if not assets:
            return
        locations: List[ElementLocation] = []
        for asset in assets:
            if not isinstance(asset.location, ElementLocation):
                raise LocationShapeError(f"Expected an element location for {asset.name}")
            locations.append(asset.location)

        path = locations[0].path
        if any(location.path != path for location in locations):
            raise LocationShapeError("All elements of a batch must come from the same file")

        lines = split_lines(path.read_text(encoding="utf-8"))

        # Bottom-up so earlier line numbers stay valid.
        for location in sorted(locations, key=lambda loc: loc.start_line, reverse=True):
            if location.start_line < 1 or location.end_line > len(lines):
                raise LineRangeError(
                    f"Invalid line range: {location.start_line}-{location.end_line} "
                    f"for file with {len(lines)} lines"
                )
            del lines[location.start_line - 1 : location.end_line]

        cleaned = collapse_blank_lines(lines)
        if is_empty_container(cleaned):
            path.unlink()
            self.logger.debug("Deleted %s (no resources left)", path)
            return
        _write_lines(path, cleaned)
        self.logger.debug("Removed %d elements from %s", len(locations), path)


def collapse_blank_lines(lines: Sequence[str]) -> List[str]:
    """Keep at most one blank line in a row."""
    result: List[str] = []
    previous_blank = False
    for line in lines:
        blank = not line.strip()
        if blank and previous_blank:
            continue
        result.append(line)
        previous_blank = blank
    return result


def is_empty_container(lines: Sequence[str]) -> bool:
    """True when only the XML prolog and an empty ``<resources>`` remain."""
    non_blank = [line for line in lines if line.strip()]
    if len(non_blank) > _MAX_EMPTY_CONTAINER_LINES:
        return False
    content = "\n".join(non_blank)
    if _CONTAINER_OPEN not in content:
        return False
    if _CONTAINER_CLOSE not in content and "/>" not in content:
        return False
    return not any(opener in content for opener in _VALUE_ELEMENT_OPENERS)


def _write_lines(path: Path, lines: Sequence[str]) -> None:
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")


__all__ = ["ResourceEditor", "collapse_blank_lines", "is_empty_container"]
