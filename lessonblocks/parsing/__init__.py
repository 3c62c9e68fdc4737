"""Block-content parsers: lines → markers/headers → per-kind parsers → dispatcher."""

from lessonblocks.parsing.dispatcher import parse_block, parse_blocks  # noqa: F401
from lessonblocks.parsing.models import BlockKind, ParsedBlock, RawBlock  # noqa: F401

__all__ = ["BlockKind", "ParsedBlock", "RawBlock", "parse_block", "parse_blocks"]
