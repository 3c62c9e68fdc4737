"""Terminal session parser.

Classification runs in two explicit stages so the continuation rule can be
checked on its own:

1. :func:`~lessonblocks.parsing.lines.classify_lines` profiles every line
   in isolation (prompt glyph, comment glyph, blank, trailing backslash).
2. :func:`fold_continuations` walks the profiles left to right carrying a
   single ``in_continuation`` bit and resolves each line's role.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from lessonblocks.log_setup import TRACE
from lessonblocks.parsing.lines import LineProfile, classify_lines
from lessonblocks.parsing.models import ClassifiedLine, LineRole, TerminalSession

logger = logging.getLogger(__name__)

DEFAULT_TERMINAL_TITLE = "Terminal"


def _resolve_role(profile: LineProfile, is_continuation: bool) -> LineRole:
    # Continuation is checked before comment: "# ..." after a trailing
    # backslash is still part of the command.
    if profile.starts_with_prompt:
        return LineRole.PROMPT
    if is_continuation:
        return LineRole.CONTINUATION
    if profile.is_empty:
        return LineRole.BLANK
    if profile.is_comment:
        return LineRole.COMMENT
    return LineRole.PLAIN


def fold_continuations(profiles: Iterable[LineProfile]) -> list[ClassifiedLine]:
    """Resolve line roles by threading continuation state through profiles.

    A line continues the previous command iff the previous line was a
    command ending in a backslash and this line does not start a new prompt.
    No lookahead is performed.

    Args:
        profiles: Per-line profiles in document order.

    Returns:
        One :class:`ClassifiedLine` per profile, same order.
    """
    classified: list[ClassifiedLine] = []
    in_continuation = False

    for profile in profiles:
        is_continuation = in_continuation and not profile.starts_with_prompt
        is_command = profile.starts_with_prompt or is_continuation

        classified.append(ClassifiedLine(
            text=profile.text,
            role=_resolve_role(profile, is_continuation),
            is_command=is_command,
        ))

        in_continuation = is_command and profile.ends_with_backslash

    return classified


def parse_terminal_lines(text: str) -> list[ClassifiedLine]:
    """Classify every line of a terminal transcript.

    Args:
        text: Raw terminal block text. May be empty.

    Returns:
        Classified lines in order; ``[]`` for empty input.
    """
    lines = fold_continuations(classify_lines(text))
    logger.log(
        TRACE,
        "parse_terminal_lines lines=%d commands=%d",
        len(lines), sum(1 for line in lines if line.is_command),
    )
    return lines


def parse_terminal(text: str, title: str | None = None) -> TerminalSession:
    return TerminalSession(
        title=title or DEFAULT_TERMINAL_TITLE,
        lines=tuple(parse_terminal_lines(text)),
    )


def split_prompt(line: ClassifiedLine) -> tuple[str, str]:
    """Split a PROMPT line into its glyph and the trimmed command text.

    Non-prompt lines have no glyph; their text is returned unchanged.
    """
    if line.role is not LineRole.PROMPT:
        return "", line.text
    return line.text[:1], line.text[1:].strip()
