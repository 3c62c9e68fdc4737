"""Title/body splitting for pager alerts and callouts."""

from __future__ import annotations

import logging

from lessonblocks.log_setup import TRACE
from lessonblocks.parsing.lines import join_lines, split_lines
from lessonblocks.parsing.models import AlertContent, CalloutContent

logger = logging.getLogger(__name__)

ALERT_VARIANTS = ("critical", "warning", "info", "success")
DEFAULT_ALERT_VARIANT = "critical"

CALLOUT_TITLES = {
    "info": "Info",
    "warning": "Warning",
    "tip": "Pro Tip",
    "danger": "Important",
}
DEFAULT_CALLOUT_VARIANT = "info"


def split_alert_content(text: str) -> AlertContent:
    """Split text into its first line and the rest.

    Args:
        text: Raw alert text.

    Returns:
        AlertContent whose title is the first trimmed line (``""`` for
        empty input) and whose body is the remaining lines, trimmed.
    """
    lines = split_lines(text)
    if not lines:
        return AlertContent()
    content = AlertContent(title=lines[0].strip(), body=join_lines(lines[1:]))
    logger.log(TRACE, "split_alert_content body_lines=%d", len(lines) - 1)
    return content


def parse_callout(
    text: str, variant: str | None = None, title: str | None = None
) -> CalloutContent:
    """Build a callout: explicit title, else the variant's default heading."""
    heading = title or CALLOUT_TITLES.get(
        variant or DEFAULT_CALLOUT_VARIANT, CALLOUT_TITLES[DEFAULT_CALLOUT_VARIANT]
    )
    return CalloutContent(heading=heading, content=split_alert_content(text))
