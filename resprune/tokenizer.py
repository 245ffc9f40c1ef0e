"""Comment and string-literal masking for Kotlin/Java sources.

Reference detectors run their regular expressions over masked text so that
``R.string.x`` inside a comment or a literal does not count as a usage. The
masked text keeps every newline and has the same length as the input, so
line and column numbers computed on it point back into the original file.
Template expressions (``${...}`` and ``$name``) stay visible because they
are real code and may legitimately reference resources.
"""

from __future__ import annotations

from typing import List

_RAW_QUOTE = '"""'


def mask(source: str) -> str:
    """Return ``source`` with comments and literals replaced by spaces."""
    out: List[str] = []
    i = 0
    length = len(source)
    while i < length:
        if source.startswith(_RAW_QUOTE, i):
            i = _raw_string(source, i, out)
        elif source[i] == '"':
            i = _string(source, i, out)
        elif source[i] == "'":
            i = _char_literal(source, i, out)
        elif source.startswith("//", i):
            end = source.find("\n", i)
            end = length if end == -1 else end
            _blank(source, i, end, out)
            i = end
        elif source.startswith("/*", i):
            end = source.find("*/", i + 2)
            end = length if end == -1 else end + 2
            _blank(source, i, end, out)
            i = end
        else:
            out.append(source[i])
            i += 1
    return "".join(out)


def _string(source: str, start: int, out: List[str]) -> int:
    out.append(" ")
    i = start + 1
    length = len(source)
    while i < length:
        char = source[i]
        if char == "\\" and i + 1 < length:
            out.append(" ")
            out.append("\n" if source[i + 1] == "\n" else " ")
            i += 2
        elif source.startswith("${", i):
            out.append("  ")
            i = _expression(source, i + 2, out)
        elif char == "$" and i + 1 < length and _is_identifier_start(source[i + 1]):
            i = _simple_template(source, i, out)
        elif char == '"':
            out.append(" ")
            return i + 1
        elif char == "\n":
            # Single-line literals cannot span lines.
            out.append("\n")
            return i + 1
        else:
            out.append(" ")
            i += 1
    return length


def _raw_string(source: str, start: int, out: List[str]) -> int:
    out.append("   ")
    i = start + 3
    length = len(source)
    while i < length:
        if source.startswith(_RAW_QUOTE, i):
            out.append("   ")
            return i + 3
        char = source[i]
        if source.startswith("${", i):
            out.append("  ")
            i = _expression(source, i + 2, out)
        elif char == "$" and i + 1 < length and _is_identifier_start(source[i + 1]):
            i = _simple_template(source, i, out)
        else:
            out.append("\n" if char == "\n" else " ")
            i += 1
    return length


def _expression(source: str, start: int, out: List[str]) -> int:
    """Copy a ``${...}`` body verbatim, masking only nested literals."""
    i = start
    depth = 1
    length = len(source)
    while i < length and depth > 0:
        char = source[i]
        if source.startswith(_RAW_QUOTE, i):
            i = _raw_string(source, i, out)
        elif char == '"':
            i = _string(source, i, out)
        elif char == "'":
            i = _char_literal(source, i, out)
        elif char == "{":
            depth += 1
            out.append(char)
            i += 1
        elif char == "}":
            depth -= 1
            out.append(char if depth > 0 else " ")
            i += 1
        else:
            out.append(char)
            i += 1
    return i


def _simple_template(source: str, start: int, out: List[str]) -> int:
    out.append(" ")
    i = start + 1
    while i < len(source) and _is_identifier_part(source[i]):
        out.append(source[i])
        i += 1
    return i


def _char_literal(source: str, start: int, out: List[str]) -> int:
    i = start + 1
    length = len(source)
    end = length
    while i < length:
        char = source[i]
        if char == "\\" and i + 1 < length:
            i += 2
        elif char == "'":
            end = i + 1
            break
        elif char == "\n":
            end = i
            break
        else:
            i += 1
    _blank(source, start, end, out)
    return end


def _blank(source: str, start: int, end: int, out: List[str]) -> None:
    out.extend("\n" if source[index] == "\n" else " " for index in range(start, end))


def _is_identifier_start(char: str) -> bool:
    return char.isalpha() or char == "_"


def _is_identifier_part(char: str) -> bool:
    return char.isalnum() or char == "_"


__all__ = ["mask"]
