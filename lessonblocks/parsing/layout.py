"""Layout wrapper blocks (``:::floating`` / ``:::sidebyside``).

Layout wrappers carry no text grammar of their own. They pick a layout
mode, a mirrored position and a width fraction, and hold one piece of
wrapped content (a fenced block or an image) next to the remaining text::

    :::sidebyside:left:small
    ```terminal
    $ make deploy
    ```
    Run the deploy target from the repository root.
    :::
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from lessonblocks.parsing.fences import resolve_language
from lessonblocks.parsing.models import BlockKind


class LayoutMode(Enum):
    FLOATING = "floating"
    SIDE_BY_SIDE = "sidebyside"


Position = Literal["left", "right"]
ContentType = Literal["mermaid", "email", "pager", "terminal", "image", "unknown"]

DEFAULT_POSITION: Position = "right"
DEFAULT_SIZE = "medium"

# Legacy size names and explicit fractions -> normalized fraction
SIZE_FRACTIONS: dict[str, str] = {
    "small": "1/3",
    "medium": "1/2",
    "large": "2/3",
    "1/3": "1/3",
    "1/2": "1/2",
    "2/3": "2/3",
    "full": "full",
}

_FRACTION_VALUES = {"1/3": 1 / 3, "1/2": 1 / 2, "2/3": 2 / 3, "full": 1.0}

_CONTENT_TYPES: dict[BlockKind, ContentType] = {
    BlockKind.EMAIL: "email",
    BlockKind.PAGER_ALERT: "pager",
    BlockKind.TERMINAL: "terminal",
}

_LAYOUT_RE = re.compile(
    r":::(sidebyside|floating)"
    r"(?::(left|right))?"
    r"(?::(small|medium|large|1/3|1/2|2/3|full))?\n"
    r"(.*?):::",
    re.DOTALL,
)
_INNER_FENCE_RE = re.compile(r"```(\w+)\n(.*?)```", re.DOTALL)
_IMAGE_RE = re.compile(r'!\[([^\]]*)\]\(([^)\s]+)(?:\s+"([^"]*)")?\)')


def normalize_size(size: str | None) -> str:
    """Map a size name to a width fraction; unknown sizes become ``1/2``."""
    return SIZE_FRACTIONS.get(size or DEFAULT_SIZE, "1/2")


def width_fraction(size: str | None) -> float:
    return _FRACTION_VALUES[normalize_size(size)]


def mirror(position: str | None) -> Position:
    """Return the opposite side: where the text goes relative to the content."""
    return "right" if position == "left" else "left"


def detect_content_type(language: str) -> ContentType:
    """Classify a fence language for wrapped content."""
    if language.lower() == "mermaid":
        return "mermaid"
    route = resolve_language(language)
    if route is None:
        return "unknown"
    return _CONTENT_TYPES.get(route[0], "unknown")


@dataclass(frozen=True)
class MarkdownSegment:
    content: str


@dataclass(frozen=True)
class LayoutBlock:
    """A wrapper with its placement and wrapped content.

    Exactly one of ``content_raw`` (fenced content) or ``image_src`` is set.
    """

    mode: LayoutMode
    position: Position
    size: str
    content_type: ContentType
    text: str = ""
    language: str = ""
    content_raw: str | None = None
    image_src: str | None = None
    image_alt: str | None = None
    image_caption: str | None = None
    block_index: int = 0

    @property
    def fraction(self) -> str:
        return normalize_size(self.size)


Segment = MarkdownSegment | LayoutBlock


def _wrapped_block(
    mode: LayoutMode, position: Position, size: str, inner: str, index: int
) -> LayoutBlock | None:
    fence = _INNER_FENCE_RE.search(inner)
    if fence:
        language, body = fence.group(1), fence.group(2)
        return LayoutBlock(
            mode=mode,
            position=position,
            size=size,
            content_type=detect_content_type(language),
            text=inner.replace(fence.group(0), "", 1).strip(),
            language=language.lower(),
            content_raw=body.strip(),
            block_index=index,
        )

    image = _IMAGE_RE.search(inner)
    if image:
        alt, src, caption = image.groups()
        return LayoutBlock(
            mode=mode,
            position=position,
            size=size,
            content_type="image",
            text=inner.replace(image.group(0), "", 1).strip(),
            image_src=src,
            image_alt=alt or None,
            image_caption=caption or None,
            block_index=index,
        )

    return None


def parse_layout_blocks(document: str) -> list[Segment]:
    """Split a lesson document into markdown segments and layout wrappers.

    Wrappers holding neither a fenced block nor an image are dropped. A
    document without wrappers comes back as a single markdown segment.

    Args:
        document: Full lesson markdown.

    Returns:
        Segments in document order.
    """
    segments: list[Segment] = []
    last_index = 0
    block_index = 0

    for m in _LAYOUT_RE.finditer(document):
        before = document[last_index:m.start()].strip()
        if before:
            segments.append(MarkdownSegment(content=before))

        mode = LayoutMode(m.group(1))
        position: Position = m.group(2) or DEFAULT_POSITION
        size = m.group(3) or DEFAULT_SIZE

        block = _wrapped_block(mode, position, size, m.group(4), block_index)
        if block is not None:
            segments.append(block)
            block_index += 1

        last_index = m.end()

    remaining = document[last_index:].strip()
    if remaining:
        segments.append(MarkdownSegment(content=remaining))

    if not segments:
        segments.append(MarkdownSegment(content=document))

    return segments
