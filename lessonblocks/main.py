from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from enum import Enum
from pathlib import Path

from lessonblocks.config import AppConfig, ConfigError, load_config
from lessonblocks.log_setup import setup_logging
from lessonblocks.parsing.dispatcher import parse_block
from lessonblocks.parsing.fences import block_from_fence, find_fenced_blocks
from lessonblocks.parsing.models import ParsedBlock
from lessonblocks.rendering.html_renderer import render_document
from lessonblocks.rendering.themes import build_theme_table

logger = logging.getLogger(__name__)


# Python field name -> JSON key, where a keyword forced a different name
_JSON_KEYS = {"from_": "from"}


def _jsonable(value):
    """Convert parsed dataclasses and enums into JSON-friendly values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        data = {}
        for f in dataclasses.fields(value):
            item = getattr(value, f.name)
            if f.name == "metadata":
                item = dict(item)
            data[_JSON_KEYS.get(f.name, f.name)] = _jsonable(item)
        return data
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    return value


def parse_document_blocks(document: str, config: AppConfig) -> list[ParsedBlock]:
    """Parse every content-block fence in a lesson document."""
    parsed: list[ParsedBlock] = []
    for fence in find_fenced_blocks(document):
        raw = block_from_fence(fence.language, fence.body)
        if raw is not None:
            parsed.append(parse_block(raw, config.blocks))
    return parsed


def run(document: str, config: AppConfig, output_format: str = "html") -> str:
    """Render a lesson document as HTML or dump its parsed blocks as JSON."""
    if output_format == "json":
        blocks = parse_document_blocks(document, config)
        logger.info("Parsed %d content blocks", len(blocks))
        return json.dumps(_jsonable(blocks), indent=2, ensure_ascii=False)

    themes = build_theme_table(config.render.theme_overrides)
    return render_document(
        document, themes, config.blocks, wrap=config.render.wrap_document
    )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the content blocks embedded in a lesson markdown file"
    )
    parser.add_argument("file", help="Lesson markdown file ('-' reads stdin)")
    parser.add_argument("-c", "--config", default=None,
                        help="Path to YAML config file (optional)")
    parser.add_argument("--format", choices=("html", "json"), default="html",
                        help="Output rendered HTML or the parsed blocks as JSON")
    parser.add_argument("--debug", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("--trace", action="store_true",
                        help="Enable trace mode (writes trace file to debug/)")
    parser.add_argument("--verbose", action="store_true",
                        help="With --trace, also send trace output to terminal")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Only log warnings and errors")
    return parser.parse_args(argv)


def _read_document(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``lessonblocks`` command."""
    args = _parse_args(argv)
    setup_logging(
        debug=args.debug, trace=args.trace, verbose=args.verbose, quiet=args.quiet
    )

    try:
        config = load_config(args.config) if args.config else AppConfig()
    except ConfigError as exc:
        logger.error("%s", exc)
        return 1

    debug = config.debug
    debug.enabled = debug.enabled or args.debug
    debug.trace = debug.trace or args.trace
    debug.verbose = debug.verbose or args.verbose
    if (debug.enabled, debug.trace, debug.verbose) != (args.debug, args.trace, args.verbose):
        # config file asked for more logging than the command line
        setup_logging(
            debug=debug.enabled, trace=debug.trace, verbose=debug.verbose, quiet=args.quiet
        )

    try:
        document = _read_document(args.file)
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.file, exc)
        return 1

    sys.stdout.write(run(document, config, args.format))
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
