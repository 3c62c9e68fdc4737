"""Line splitting and stateless per-line classification.

Every block parser starts from :func:`split_lines`. The terminal parser
additionally profiles each line with :func:`classify_line` before threading
continuation state through the result.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

PROMPT_GLYPHS = ("$", ">")
COMMENT_GLYPH = "#"
CONTINUATION_MARKER = "\\"

_LINE_BREAK_RE = re.compile(r"\r\n?")


def split_lines(text: str) -> list[str]:
    """Trim the outer whitespace of ``text`` and split it into lines.

    Whitespace inside a line, and leading indentation of every line but
    the first, is preserved. ``\\r\\n`` and bare ``\\r`` count as ``\\n``.

    Args:
        text: Arbitrary author text.

    Returns:
        The lines in order. Empty or whitespace-only input gives ``[]``.
    """
    stripped = _LINE_BREAK_RE.sub("\n", text).strip()
    if not stripped:
        return []
    return stripped.split("\n")


def join_lines(lines: list[str]) -> str:
    """Rejoin lines with ``\\n`` and trim the result."""
    return "\n".join(lines).strip()


@dataclass(frozen=True)
class LineProfile:
    """Context-free facts about one terminal line."""

    text: str
    starts_with_prompt: bool
    is_comment: bool
    is_empty: bool
    ends_with_backslash: bool


def classify_line(line: str) -> LineProfile:
    """Profile a single line without looking at its neighbours.

    Args:
        line: One line of terminal text.

    Returns:
        The line's :class:`LineProfile`.
    """
    return LineProfile(
        text=line,
        starts_with_prompt=line.startswith(PROMPT_GLYPHS),
        is_comment=line.startswith(COMMENT_GLYPH),
        is_empty=not line.strip(),
        ends_with_backslash=line.rstrip().endswith(CONTINUATION_MARKER),
    )


def classify_lines(text: str) -> list[LineProfile]:
    return [classify_line(line) for line in split_lines(text)]
