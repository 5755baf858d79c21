"""Canonical text pretty-printer for JSON documents.

The formatter works on raw JSON text one physical line at a time, so its
output is stable regardless of how the incoming text was laid out:

- compact single-line input is first expanded to one value per line;
- every line is re-indented from a running level that grows after a line
  opening ``{``/``[`` and shrinks before a line closing ``}``/``]``;
- ``:`` followed by spaces collapses to ``": "``;
- over-escaped apostrophes and ampersands are written literally.

Brackets and colons inside string literals never count. Whether a position is
inside a string is decided by quote parity: an odd number of unescaped ``"``
before it means the position belongs to a string.
"""

from __future__ import annotations

import json
import os
import re

from locale_sync.document import loads

DEFAULT_INDENT = 4

ERR_INDENT = "indent width must be a non-negative integer, got {value!r}"

_OPENERS = "{["
_CLOSERS = "}]"
_COLON_RUN = re.compile(r": +")
# JSON line terminators; U+2028, U+2029 and NEL stay inside string values
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_BLANKS = " \t"
# an escape is live only when preceded by an even run of backslashes
_OVER_ESCAPED = re.compile(r"(?<!\\)((?:\\\\)*)\\u00(27|26)")
_LITERALS = {"27": "'", "26": "&"}


def _outside_strings(line: str) -> list[bool]:
    """Return, per character of ``line``, whether it lies outside a string."""
    flags: list[bool] = []
    in_string = False
    escaped = False
    for ch in line:
        flags.append(not in_string)
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == '"':
            in_string = not in_string
    return flags


def _structure(line: str, outside: list[bool]) -> tuple[bool, bool]:
    """Return ``(opens, closes)`` for a stripped line."""
    code = "".join(ch if out else " " for ch, out in zip(line, outside, strict=True))
    tail = code.rstrip().rstrip(",").rstrip()
    has_opener = any(ch in _OPENERS for ch in code)
    has_closer = any(ch in _CLOSERS for ch in code)
    opens = tail.endswith(tuple(_OPENERS)) and not has_closer
    closes = tail.endswith(tuple(_CLOSERS)) and not has_opener
    return opens, closes


def _collapse_colons(line: str, outside: list[bool]) -> str:
    def _replace(match: re.Match[str]) -> str:
        return ": " if outside[match.start()] else match.group(0)

    return _COLON_RUN.sub(_replace, line)


def _unescape(line: str) -> str:
    return _OVER_ESCAPED.sub(lambda m: m.group(1) + _LITERALS[m.group(2)], line)


def expand(json_text: str, indent_width: int = DEFAULT_INDENT) -> str:
    """Return ``json_text`` laid out one value per line.

    Text that already spans several lines is returned unchanged. Single-line
    text is decoded and re-encoded; raises
    :class:`locale_sync.document.ParseError` if it is not valid JSON.
    """
    if "\n" in json_text or "\r" in json_text:
        return json_text
    data = loads(json_text)
    return json.dumps(data, indent=indent_width, ensure_ascii=False, allow_nan=False)


def render(
    json_text: str,
    indent_width: int = DEFAULT_INDENT,
    newline: str = os.linesep,
) -> str:
    """Return the canonical multi-line rendition of ``json_text``.

    Args:
        json_text: JSON text in any whitespace layout.
        indent_width: Spaces added per nesting level.
        newline: Terminator placed between lines; none is added at the end.

    Returns:
        The formatted text. Rendering its own output again yields the same
        text.
    """
    if isinstance(indent_width, bool) or not isinstance(indent_width, int) or indent_width < 0:
        raise ValueError(ERR_INDENT.format(value=indent_width))

    level = 0
    lines: list[str] = []
    for raw in _LINE_BREAK.split(expand(json_text, indent_width)):
        content = raw.strip(_BLANKS)
        if not content:
            continue
        outside = _outside_strings(content)
        opens, closes = _structure(content, outside)
        if closes:
            level = max(level - indent_width, 0)
        content = _unescape(_collapse_colons(content, outside))
        lines.append(" " * level + content)
        if opens:
            level += indent_width
    return newline.join(lines)


__all__ = ["DEFAULT_INDENT", "expand", "render"]
