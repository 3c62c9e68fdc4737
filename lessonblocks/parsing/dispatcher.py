"""Route a RawBlock to the parser for its kind.

Each kind maps to a plain function in :data:`PARSERS`; there is no parser
class hierarchy. Parsers are total, so :func:`parse_block` never raises for
any ``raw_text``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from lessonblocks.config import BlocksConfig
from lessonblocks.log_setup import TRACE
from lessonblocks.parsing.alerts import (
    ALERT_VARIANTS,
    CALLOUT_TITLES,
    DEFAULT_ALERT_VARIANT,
    DEFAULT_CALLOUT_VARIANT,
    parse_callout,
    split_alert_content,
)
from lessonblocks.parsing.email_preview import (
    DEFAULT_EMAIL_VARIANT,
    EMAIL_VARIANTS,
    parse_email,
)
from lessonblocks.parsing.lists import (
    CHECKLIST_STYLE,
    MISTAKES_STYLE,
    ListStyle,
    parse_list,
)
from lessonblocks.parsing.models import BlockKind, BlockValue, ParsedBlock, RawBlock
from lessonblocks.parsing.terminal import parse_terminal

logger = logging.getLogger(__name__)

Parser = Callable[[RawBlock, BlocksConfig], BlockValue]

# kind -> (allowed variants, default variant); kinds without variants omitted
VARIANTS: dict[BlockKind, tuple[tuple[str, ...], str]] = {
    BlockKind.EMAIL: (EMAIL_VARIANTS, DEFAULT_EMAIL_VARIANT),
    BlockKind.PAGER_ALERT: (ALERT_VARIANTS, DEFAULT_ALERT_VARIANT),
    BlockKind.CALLOUT: (tuple(CALLOUT_TITLES), DEFAULT_CALLOUT_VARIANT),
}


def resolve_variant(kind: BlockKind, variant: str | None) -> str | None:
    """Return ``variant`` if valid for ``kind``, else the kind's default."""
    if kind not in VARIANTS:
        return variant
    allowed, default = VARIANTS[kind]
    if variant in allowed:
        return variant
    if variant is not None:
        logger.debug("Unknown %s variant %r, using %r", kind.value, variant, default)
    return default


def _terminal(block: RawBlock, config: BlocksConfig) -> BlockValue:
    return parse_terminal(block.raw_text, block.title or config.terminal_title)


def _email(block: RawBlock, config: BlocksConfig) -> BlockValue:
    return parse_email(block.raw_text)


def _list_parser(style: ListStyle, title_attr: str) -> Parser:
    def _parse(block: RawBlock, config: BlocksConfig) -> BlockValue:
        default_title = getattr(config, title_attr) or style.default_title
        return parse_list(block.raw_text, style, block.title or default_title)
    return _parse


def _pager_alert(block: RawBlock, config: BlocksConfig) -> BlockValue:
    return split_alert_content(block.raw_text)


def _callout(block: RawBlock, config: BlocksConfig) -> BlockValue:
    variant = resolve_variant(BlockKind.CALLOUT, block.variant)
    return parse_callout(block.raw_text, variant=variant, title=block.title)


PARSERS: dict[BlockKind, Parser] = {
    BlockKind.TERMINAL: _terminal,
    BlockKind.EMAIL: _email,
    BlockKind.CHECKLIST: _list_parser(CHECKLIST_STYLE, "checklist_title"),
    BlockKind.MISTAKE_LIST: _list_parser(MISTAKES_STYLE, "mistakes_title"),
    BlockKind.PAGER_ALERT: _pager_alert,
    BlockKind.CALLOUT: _callout,
}


def parse_block(block: RawBlock, config: BlocksConfig | None = None) -> ParsedBlock:
    """Parse one block and echo its presentational fields.

    Args:
        block: The block to parse. Its kind must already be resolved.
        config: Configured default titles; built-in defaults when omitted.

    Returns:
        ParsedBlock with the kind-specific value, the resolved variant,
        the caller's title and the metadata.
    """
    config = config or BlocksConfig()
    value = PARSERS[block.kind](block, config)
    logger.log(TRACE, "parse_block kind=%s value=%s", block.kind.value, type(value).__name__)
    return ParsedBlock(
        kind=block.kind,
        value=value,
        variant=resolve_variant(block.kind, block.variant),
        title=block.title,
        metadata=block.metadata,
    )


def parse_blocks(blocks: list[RawBlock], config: BlocksConfig | None = None) -> list[ParsedBlock]:
    return [parse_block(block, config) for block in blocks]
