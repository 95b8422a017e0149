from __future__ import annotations

import string
from typing import Iterator

from .models import CommentParseResult, CommentSyntax


def split_lines(text: str) -> Iterator[str]:
    """
    Yield physical lines of ``text`` without their terminators.

    A trailing newline does not start an extra line, so ``"a\\n"`` is one
    line and ``""`` is none. ``\\r\\n`` counts as a single terminator.
    """
    if not text:
        return
    start = 0
    end = len(text)
    while start < end:
        nl = text.find("\n", start)
        if nl == -1:
            yield text[start:]
            return
        line = text[start:nl]
        if line.endswith("\r"):
            line = line[:-1]
        yield line
        start = nl + 1


_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _haystack(line: str, syntax: CommentSyntax) -> str:
    """
    Text that markers are searched in, index-aligned with ``line``.

    Case-insensitive syntaxes get an ASCII-lowered copy plus one trailing
    space, so a word marker like ``"rem "`` also matches a bare ``REM``.
    """
    if not syntax.ignore_case:
        return line
    return line.translate(_ASCII_LOWER) + " "


def _earliest(line: str, syntax: CommentSyntax) -> tuple[int, str, str | None]:
    """
    Find the first comment marker on ``line``.

    Returns ``(index, marker, closer)``; ``closer`` is None for a line marker.
    Index is -1 when nothing matches. On a tie the longer marker wins, so
    ``--[[`` beats ``--``.
    """
    best_idx = -1
    best_marker = ""
    best_closer: str | None = None

    def consider(idx: int, marker: str, closer: str | None) -> None:
        nonlocal best_idx, best_marker, best_closer
        if idx < 0:
            return
        if best_idx < 0 or idx < best_idx or (idx == best_idx and len(marker) > len(best_marker)):
            best_idx, best_marker, best_closer = idx, marker, closer

    for marker in syntax.line_comment:
        consider(line.find(marker), marker, None)
    for opener, closer in syntax.block_comment:
        consider(line.find(opener), opener, closer)
    return best_idx, best_marker, best_closer


def classify(text: str, syntax: CommentSyntax) -> CommentParseResult:
    """Count code, comment and blank lines of ``text`` in one pass.

    The scan is a two-state machine: outside any block comment, or inside
    one waiting for a specific closer. Block comments do not nest.

    Whitespace-only lines are always blank, even inside an open block
    comment; the block stays open across them. A line holding both code and
    a comment counts as code.
    """
    result = CommentParseResult()
    closer: str | None = None

    for line in split_lines(text):
        if not line.strip():
            result.blank += 1
            continue

        if closer is not None:
            result.comment += 1
            if closer in _haystack(line, syntax):
                # Anything after the closer on this line is ignored.
                closer = None
            continue

        hay = _haystack(line, syntax)
        idx, marker, block_closer = _earliest(hay, syntax)
        if idx < 0:
            result.code += 1
            continue

        if line[:idx].strip():
            result.code += 1
        else:
            result.comment += 1

        if block_closer is not None and block_closer not in hay[idx + len(marker):]:
            closer = block_closer

    return result
