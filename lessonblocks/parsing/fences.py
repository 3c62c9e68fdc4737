"""Route fenced code blocks in lesson markdown to content block kinds.

Authors embed blocks as fenced code with a language tag::

    ```pager
    @critical | 03:12 UTC | PagerDuty
    Database CPU at 98%
    Replica lag climbing
    ```

The language picks the kind (and for callouts, the variant). Pager and
email blocks may open with an ``@variant`` directive line that is removed
from the raw text before parsing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from lessonblocks.parsing.models import BlockKind, RawBlock

# language -> (kind, variant)
LANGUAGE_ROUTES: dict[str, tuple[BlockKind, str | None]] = {
    "terminal": (BlockKind.TERMINAL, None),
    "bash": (BlockKind.TERMINAL, None),
    "shell": (BlockKind.TERMINAL, None),
    "mistakes": (BlockKind.MISTAKE_LIST, None),
    "errors": (BlockKind.MISTAKE_LIST, None),
    "checklist": (BlockKind.CHECKLIST, None),
    "success": (BlockKind.CHECKLIST, None),
    "info": (BlockKind.CALLOUT, "info"),
    "note": (BlockKind.CALLOUT, "info"),
    "warning": (BlockKind.CALLOUT, "warning"),
    "caution": (BlockKind.CALLOUT, "warning"),
    "tip": (BlockKind.CALLOUT, "tip"),
    "hint": (BlockKind.CALLOUT, "tip"),
    "danger": (BlockKind.CALLOUT, "danger"),
    "critical": (BlockKind.CALLOUT, "danger"),
    "pager": (BlockKind.PAGER_ALERT, None),
    "alert": (BlockKind.PAGER_ALERT, None),
    "notification": (BlockKind.PAGER_ALERT, None),
    "email": (BlockKind.EMAIL, None),
}

# @critical | 03:12 UTC | PagerDuty
_PAGER_DIRECTIVE_RE = re.compile(
    r"^@(critical|warning|info|success)(?:\s*\|\s*(.+?))?(?:\s*\|\s*(.+?))?$"
)
_EMAIL_DIRECTIVE_RE = re.compile(r"^@(critical|warning|info|success)$")

# ```lang\n ... ``` ; body may be empty
_FENCE_RE = re.compile(
    r"^```[ \t]*(?P<lang>[\w-]*)[^\n]*\n(?P<body>.*?)^```[ \t]*$",
    re.MULTILINE | re.DOTALL,
)


@dataclass(frozen=True)
class FencedBlock:
    """A fenced code block located in a document.

    Attributes:
        language: Language tag, lowercased; ``""`` if absent.
        body: Text between the fences without its trailing newline.
        start: Offset of the opening fence.
        end: Offset just past the closing fence.
    """

    language: str
    body: str
    start: int
    end: int


def find_fenced_blocks(document: str) -> list[FencedBlock]:
    """Locate every fenced code block in ``document``, in order."""
    return [
        FencedBlock(
            language=m.group("lang").lower(),
            body=m.group("body").removesuffix("\n"),
            start=m.start(),
            end=m.end(),
        )
        for m in _FENCE_RE.finditer(document)
    ]


def resolve_language(language: str) -> tuple[BlockKind, str | None] | None:
    """Map a fence language to ``(kind, variant)``; None if not a content block."""
    return LANGUAGE_ROUTES.get(language.strip().lower())


def _split_first_line(text: str) -> tuple[str, str]:
    first, _, rest = text.partition("\n")
    return first, rest


def _pager_block(body: str) -> RawBlock:
    first, rest = _split_first_line(body)
    m = _PAGER_DIRECTIVE_RE.match(first.strip())
    if not m:
        return RawBlock(kind=BlockKind.PAGER_ALERT, raw_text=body)

    metadata: dict[str, str] = {}
    if m.group(2):
        metadata["time"] = m.group(2).strip()
    if m.group(3):
        metadata["source"] = m.group(3).strip()
    return RawBlock(
        kind=BlockKind.PAGER_ALERT,
        raw_text=rest,
        variant=m.group(1),
        metadata=metadata,
    )


def _email_block(body: str) -> RawBlock:
    first, rest = _split_first_line(body)
    m = _EMAIL_DIRECTIVE_RE.match(first.strip())
    if not m:
        return RawBlock(kind=BlockKind.EMAIL, raw_text=body)
    return RawBlock(kind=BlockKind.EMAIL, raw_text=rest, variant=m.group(1))


def block_from_fence(language: str, body: str) -> RawBlock | None:
    """Build the RawBlock for a fenced block, or None for ordinary code.

    Args:
        language: The fence's language tag.
        body: The fence body.

    Returns:
        A RawBlock ready for the dispatcher, or None when the language is
        not a content block (e.g. ``python``, ``mermaid``).
    """
    route = resolve_language(language)
    if route is None:
        return None

    kind, variant = route
    if kind is BlockKind.PAGER_ALERT:
        return _pager_block(body)
    if kind is BlockKind.EMAIL:
        return _email_block(body)
    return RawBlock(kind=kind, raw_text=body, variant=variant)
