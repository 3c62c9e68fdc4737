"""List extraction shared by checklist and mistake-list blocks."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lessonblocks.log_setup import TRACE
from lessonblocks.parsing.lines import split_lines
from lessonblocks.parsing.markers import CHECK_MARKERS, CROSS_MARKERS, strip_marker
from lessonblocks.parsing.models import ParsedList

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListStyle:
    """Marker glyphs and fallback title for one list kind."""

    markers: frozenset[str]
    default_title: str


CHECKLIST_STYLE = ListStyle(markers=CHECK_MARKERS, default_title="Key Takeaways")
MISTAKES_STYLE = ListStyle(markers=CROSS_MARKERS, default_title="Common Mistakes")


def extract_items(text: str, markers: frozenset[str]) -> list[str]:
    """Turn list text into cleaned item strings.

    Blank lines are dropped before stripping; a line holding only a marker
    therefore still yields an (empty) item.

    Args:
        text: Raw list block text.
        markers: Leading glyphs to strip, at most one per line.

    Returns:
        Items in source order, duplicates kept.
    """
    return [
        strip_marker(line.strip(), markers).strip()
        for line in split_lines(text)
        if line.strip()
    ]


def parse_list(text: str, style: ListStyle, title: str | None = None) -> ParsedList:
    items = extract_items(text, style.markers)
    logger.log(TRACE, "parse_list items=%d title=%r", len(items), title)
    return ParsedList(title=title or style.default_title, items=tuple(items))


def parse_checklist(text: str, title: str | None = None) -> ParsedList:
    return parse_list(text, CHECKLIST_STYLE, title)


def parse_mistakes(text: str, title: str | None = None) -> ParsedList:
    return parse_list(text, MISTAKES_STYLE, title)
