"""Shared data types for the block-content parsers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

# Sorted (key, value) pairs; hashable so blocks can be cached by value
Metadata = tuple[tuple[str, str], ...]


def freeze_metadata(
    metadata: Mapping[str, str] | Iterable[tuple[str, str]] | None,
) -> Metadata:
    """Return metadata as sorted ``(key, value)`` pairs."""
    if not metadata:
        return ()
    return tuple(sorted(dict(metadata).items()))


class BlockKind(Enum):
    """Content block kinds an author can embed in lesson text."""

    TERMINAL = "terminal"
    EMAIL = "email"
    CHECKLIST = "checklist"
    MISTAKE_LIST = "mistake_list"
    PAGER_ALERT = "pager_alert"
    CALLOUT = "callout"


class LineRole(Enum):
    """Role of a single line inside a terminal session."""

    PROMPT = "prompt"
    CONTINUATION = "continuation"
    COMMENT = "comment"
    BLANK = "blank"
    PLAIN = "plain"


@dataclass(frozen=True)
class RawBlock:
    """One authored block as supplied by the document pipeline.

    Attributes:
        kind: Already-resolved block kind.
        raw_text: Author text, possibly empty. Never mutated by parsers.
        variant: Kind-specific variant name, or None for the kind default.
        title: Optional title override.
        metadata: Extra presentational fields (e.g. alert ``time``/``source``).
            A mapping is accepted and stored as sorted pairs.
    """

    kind: BlockKind
    raw_text: str = ""
    variant: str | None = None
    title: str | None = None
    metadata: Metadata = ()

    def __post_init__(self):
        object.__setattr__(self, "metadata", freeze_metadata(self.metadata))


@dataclass(frozen=True)
class ClassifiedLine:
    """A terminal line with its resolved role.

    ``is_command`` is only ever true for PROMPT and CONTINUATION lines.
    """

    text: str
    role: LineRole
    is_command: bool = False


@dataclass(frozen=True)
class TerminalSession:
    title: str
    lines: tuple[ClassifiedLine, ...] = ()


@dataclass(frozen=True)
class ParsedEmail:
    """Email excerpt split into optional headers and a body.

    ``from_`` carries the ``From:`` header; ``from`` is a keyword.
    """

    body: str = ""
    from_: str | None = None
    to: str | None = None
    subject: str | None = None
    date: str | None = None


@dataclass(frozen=True)
class ParsedList:
    title: str
    items: tuple[str, ...] = ()


@dataclass(frozen=True)
class AlertContent:
    """First line as title, remaining lines as body. Neither is ever None."""

    title: str = ""
    body: str = ""


@dataclass(frozen=True)
class CalloutContent:
    """A callout: a heading (explicit or variant default) over split text."""

    heading: str
    content: AlertContent = field(default_factory=AlertContent)


BlockValue = Union[TerminalSession, ParsedEmail, ParsedList, AlertContent, CalloutContent]


@dataclass(frozen=True)
class ParsedBlock:
    """Parsed payload with the presentational fields echoed through."""

    kind: BlockKind
    value: BlockValue
    variant: str | None = None
    title: str | None = None
    metadata: Metadata = ()

    def __post_init__(self):
        object.__setattr__(self, "metadata", freeze_metadata(self.metadata))
