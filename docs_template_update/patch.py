"""Unified diff generation for README restructuring runs."""

from __future__ import annotations

import difflib
import re
from pathlib import PurePath
from typing import List

from .errors import DiffError

CONTEXT_LINES = 3

_HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def generate_patch(path: str | PurePath, original: str, final: str) -> str:
    """Return a unified diff turning ``original`` into ``final``.

    Both documents are split on ``\\n`` as-is; line endings are not normalised.
    The file labels are ``a/<name>`` and ``b/<name>`` where ``<name>`` is the
    basename of ``path``. An empty string is returned when nothing changed.
    """
    if original == final:
        return ""
    name = PurePath(path).name
    try:
        lines = difflib.unified_diff(
            original.split("\n"),
            final.split("\n"),
            fromfile=f"a/{name}",
            tofile=f"b/{name}",
            n=CONTEXT_LINES,
            lineterm="",
        )
        text = "\n".join(lines)
    except (TypeError, ValueError) as exc:
        raise DiffError(f"Failed to compute diff for {name}: {exc}") from exc
    return f"{text}\n" if text else ""


def apply_patch(original: str, patch: str) -> str:
    """Apply a patch produced by :func:`generate_patch` to ``original``."""
    if not patch:
        return original

    source = original.split("\n")
    lines = patch.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    index = 0
    while index < len(lines) and not lines[index].startswith("@@"):
        index += 1

    result: List[str] = []
    cursor = 0
    while index < len(lines):
        header = _HUNK_HEADER.match(lines[index])
        if header is None:
            raise DiffError(f"Malformed hunk header: {lines[index]!r}")
        start = int(header.group(1))
        length = int(header.group(2)) if header.group(2) is not None else 1
        # Empty ranges name the line *before* the insertion point.
        position = start - 1 if length else start
        if position < cursor:
            raise DiffError(f"Overlapping hunk at line {start}")
        result.extend(source[cursor:position])
        cursor = position
        index += 1

        while index < len(lines) and not lines[index].startswith("@@"):
            line = lines[index]
            tag, text = line[:1], line[1:]
            if tag in (" ", "-"):
                if cursor >= len(source) or source[cursor] != text:
                    raise DiffError(f"Patch does not apply at line {cursor + 1}")
                if tag == " ":
                    result.append(text)
                cursor += 1
            elif tag == "+":
                result.append(text)
            else:
                raise DiffError(f"Unexpected patch line: {line!r}")
            index += 1

    result.extend(source[cursor:])
    return "\n".join(result)


__all__ = ["CONTEXT_LINES", "apply_patch", "generate_patch"]
