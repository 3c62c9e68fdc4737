"""Email preview parser: a leading header block followed by a body."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from lessonblocks.log_setup import TRACE
from lessonblocks.parsing.lines import join_lines, split_lines
from lessonblocks.parsing.models import ParsedEmail

logger = logging.getLogger(__name__)

EMAIL_VARIANTS = ("info", "warning", "critical", "success")
DEFAULT_EMAIL_VARIANT = "info"

# Header name -> ParsedEmail field
HEADER_FIELDS = {
    "from": "from_",
    "to": "to",
    "subject": "subject",
    "date": "date",
}

_HEADER_RE = re.compile(
    r"^(?P<name>from|to|subject|date):\s*(?P<value>\S.*)$", re.IGNORECASE
)
_SEPARATOR = "---"


@dataclass
class HeaderBlock:
    """Result of scanning the header block.

    Attributes:
        headers: ParsedEmail field name -> value for recognized headers.
        body_start: Index of the first body line.
    """

    headers: dict[str, str] = field(default_factory=dict)
    body_start: int = 0


def match_header(line: str) -> tuple[str, str] | None:
    """Return ``(field, value)`` if ``line`` is a recognized header line."""
    m = _HEADER_RE.match(line)
    if not m:
        return None
    return HEADER_FIELDS[m.group("name").lower()], m.group("value").strip()


def parse_header_block(lines: list[str]) -> HeaderBlock:
    """Scan leading lines for From/To/Subject/Date headers.

    Scanning stops at:

    - a ``---`` line, or a blank line once a header was consumed: the body
      starts on the following line;
    - the first other line that is not a recognized header: the body starts
      at that line.

    Args:
        lines: Email lines, outer whitespace already trimmed.

    Returns:
        The recognized headers and the index where the body begins.
    """
    block = HeaderBlock()

    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped == _SEPARATOR or (not stripped and block.headers):
            block.body_start = i + 1
            break

        header = match_header(line)
        if header is None:
            block.body_start = i
            break

        name, value = header
        block.headers[name] = value
        block.body_start = i + 1

    return block


def parse_email(text: str) -> ParsedEmail:
    """Parse an email excerpt into headers and body.

    Text without any recognized header becomes the body unchanged (apart
    from outer trimming).

    Args:
        text: Raw email block text.

    Returns:
        ParsedEmail with a body that is always a string.
    """
    lines = split_lines(text)
    block = parse_header_block(lines)
    email = ParsedEmail(body=join_lines(lines[block.body_start:]), **block.headers)
    logger.log(
        TRACE,
        "parse_email headers=%s body_len=%d",
        sorted(block.headers), len(email.body),
    )
    return email

