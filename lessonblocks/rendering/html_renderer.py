"""Render parsed blocks to HTML fragments.

The renderer is the consumer of the parsing layer: it applies each kind's
display policy (prompt glyph tokens, omitted email headers, muted comments)
and looks up CSS classes in a :class:`~lessonblocks.rendering.themes.ThemeTable`.
All author text is HTML-escaped.
"""

from __future__ import annotations

import html as _html_mod
import logging
from collections.abc import Callable
from enum import Enum

from lessonblocks.config import BlocksConfig
from lessonblocks.parsing.dispatcher import parse_block
from lessonblocks.parsing.fences import block_from_fence, find_fenced_blocks
from lessonblocks.parsing.layout import (
    LayoutBlock,
    LayoutMode,
    MarkdownSegment,
    mirror,
    parse_layout_blocks,
)
from lessonblocks.parsing.models import (
    AlertContent,
    BlockKind,
    CalloutContent,
    LineRole,
    ParsedBlock,
    ParsedEmail,
    ParsedList,
    TerminalSession,
)
from lessonblocks.parsing.terminal import split_prompt
from lessonblocks.rendering.themes import (
    PULSING_VARIANTS,
    Theme,
    ThemeTable,
    email_badge,
)

logger = logging.getLogger(__name__)


class ImageState(Enum):
    """Load state reported by whoever fetches the image."""

    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


WIDTH_CLASSES = {
    "1/3": "w-1/3",
    "1/2": "w-1/2",
    "2/3": "w-2/3",
    "full": "w-full",
}


def _escape(text: str) -> str:
    return _html_mod.escape(text, quote=False)


def _attr(text: str) -> str:
    return _html_mod.escape(text, quote=True)


def _multiline(text: str) -> str:
    """Escape text and keep its line breaks."""
    return "<br>".join(_escape(line) for line in text.split("\n"))


# --- Per-kind renderers ---


def render_terminal(session: TerminalSession, theme: Theme) -> str:
    """Terminal window with one row per classified line.

    Blank (whitespace-only) lines become spacer rows with no text.
    """
    rows: list[str] = []
    for line in session.lines:
        if not line.text.strip():
            rows.append('<div class="terminal-spacer"></div>')
            continue

        if line.role is LineRole.PROMPT:
            glyph, command = split_prompt(line)
            rows.append(
                f'<div class="terminal-line command">'
                f'<span class="prompt {theme.get("prompt_color", "")}">{_escape(glyph)}</span> '
                f'<span class="{theme.get("command_color", "")}">{_escape(command)}</span></div>'
            )
        elif line.role is LineRole.CONTINUATION:
            rows.append(
                f'<div class="terminal-line continuation">'
                f'<span class="pl-5 {theme.get("command_color", "")}">{_escape(line.text)}</span></div>'
            )
        elif line.role is LineRole.COMMENT:
            rows.append(
                f'<div class="terminal-line comment">'
                f'<span class="italic {theme.get("comment_color", "")}">{_escape(line.text)}</span></div>'
            )
        else:
            rows.append(
                f'<div class="terminal-line output">'
                f'<span class="{theme.get("output_color", "")}">{_escape(line.text)}</span></div>'
            )

    return (
        f'<div class="block terminal">'
        f'<div class="terminal-header">{_escape(session.title)}</div>'
        f'<div class="terminal-body font-mono {theme.get("bg", "")}">{"".join(rows)}</div>'
        f"</div>"
    )


def render_email(email: ParsedEmail, theme: Theme, variant: str | None) -> str:
    """Email card; absent headers are omitted entirely."""
    header = (
        f'<div class="email-bar {theme.get("header_bg", "")}">'
        f'<span class="email-badge {theme.get("icon_color", "")}">{email_badge(variant)}</span>'
    )
    if email.date:
        header += f'<span class="email-date">{_escape(email.date)}</span>'
    header += "</div>"

    meta: list[str] = []
    for label, value, color in (
        ("From:", email.from_, theme.get("from_color", "")),
        ("To:", email.to, theme.get("text_color", "")),
        ("Subject:", email.subject, theme.get("subject_color", "")),
    ):
        if value:
            meta.append(
                f'<div class="email-meta"><span class="{theme.get("meta_color", "")}">{label}</span> '
                f'<span class="{color}">{_escape(value)}</span></div>'
            )

    body = ""
    if email.body:
        body = f'<div class="email-body {theme.get("text_color", "")}">{_multiline(email.body)}</div>'

    return (
        f'<div class="block email {theme.get("bg", "")} {theme.get("border", "")}">'
        f"{header}{''.join(meta)}{body}</div>"
    )


def render_list(parsed: ParsedList, theme: Theme, css: str) -> str:
    items = "".join(f"<li>{_escape(item)}</li>" for item in parsed.items)
    return (
        f'<div class="block {css} {theme.get("bg", "")} {theme.get("border", "")}">'
        f'<div class="list-title {theme.get("icon_color", "")}">{_escape(parsed.title)}</div>'
        f"<ul>{items}</ul></div>"
    )


def render_pager(
    alert: AlertContent, theme: Theme, variant: str | None, metadata: dict[str, str],
    default_source: str,
) -> str:
    source = metadata.get("source") or default_source
    bar = f'<div class="pager-bar {theme.get("header_bg", "")}">'
    if variant in PULSING_VARIANTS:
        bar += f'<span class="pulse {theme.get("pulse_color", "")}"></span>'
    bar += f'<span class="pager-source">{_escape(source)}</span>'
    if metadata.get("time"):
        bar += f'<span class="pager-time">{_escape(metadata["time"])}</span>'
    bar += "</div>"

    body = ""
    if alert.body:
        body = f'<div class="pager-body {theme.get("text_color", "")}">{_multiline(alert.body)}</div>'

    return (
        f'<div class="block pager {theme.get("bg", "")} {theme.get("border", "")}">{bar}'
        f'<div class="pager-title {theme.get("title_color", "")}">{_escape(alert.title)}</div>'
        f"{body}</div>"
    )


def render_callout(callout: CalloutContent, theme: Theme) -> str:
    lines = [callout.content.title] if callout.content.title else []
    if callout.content.body:
        lines.extend(callout.content.body.split("\n"))
    paragraphs = "".join(f"<p>{_escape(line)}</p>" for line in lines)
    return (
        f'<div class="block callout {theme.get("bg", "")} {theme.get("border", "")}">'
        f'<div class="callout-title {theme.get("title_color", "")}">{_escape(callout.heading)}</div>'
        f'<div class="callout-body">{paragraphs}</div></div>'
    )


Renderer = Callable[[ParsedBlock, Theme, BlocksConfig], str]

RENDERERS: dict[BlockKind, Renderer] = {
    BlockKind.TERMINAL: lambda b, t, c: render_terminal(b.value, t),
    BlockKind.EMAIL: lambda b, t, c: render_email(b.value, t, b.variant),
    BlockKind.CHECKLIST: lambda b, t, c: render_list(b.value, t, "checklist"),
    BlockKind.MISTAKE_LIST: lambda b, t, c: render_list(b.value, t, "mistakes"),
    BlockKind.PAGER_ALERT: lambda b, t, c: render_pager(
        b.value, t, b.variant, dict(b.metadata), c.pager_source
    ),
    BlockKind.CALLOUT: lambda b, t, c: render_callout(b.value, t),
}


def render_block(
    block: ParsedBlock,
    themes: ThemeTable | None = None,
    config: BlocksConfig | None = None,
) -> str:
    """Render one parsed block to an HTML fragment.

    Args:
        block: Output of :func:`~lessonblocks.parsing.dispatcher.parse_block`.
        themes: Theme lookups; built-in defaults when omitted.
        config: Block defaults (pager source); built-in defaults when omitted.

    Returns:
        HTML fragment for the block.
    """
    themes = themes or ThemeTable()
    config = config or BlocksConfig()
    theme = themes.lookup(block.kind, block.variant)
    return RENDERERS[block.kind](block, theme, config)


# --- Images and layout wrappers ---


def render_image(
    src: str,
    alt: str | None = None,
    caption: str | None = None,
    state: ImageState = ImageState.LOADING,
) -> str:
    """Render an image for the given load state.

    Loading shows a skeleton under the (hidden) image, an error replaces the
    image with a failure notice naming the source.
    """
    if state is ImageState.ERROR:
        figure = (
            f'<div class="image-error">Failed to load image'
            f'<span class="image-src">{_escape(src)}</span></div>'
        )
    else:
        skeleton = '<div class="image-skeleton"></div>' if state is ImageState.LOADING else ""
        hidden = ' style="opacity: 0"' if state is ImageState.LOADING else ""
        figure = f'{skeleton}<img src="{_attr(src)}" alt="{_attr(alt or "")}"{hidden}>'

    if caption:
        figure += f"<figcaption>{_escape(caption)}</figcaption>"
    return f'<figure class="block image">{figure}</figure>'


def _wrapped_content(
    block: LayoutBlock, themes: ThemeTable, config: BlocksConfig,
    image_state: ImageState,
) -> str:
    if block.content_type == "image" and block.image_src:
        return render_image(block.image_src, block.image_alt, block.image_caption, image_state)

    raw = block_from_fence(block.language, block.content_raw or "")
    if raw is None:
        language = f' class="language-{_attr(block.language)}"' if block.language else ""
        return f"<pre><code{language}>{_escape(block.content_raw or '')}</code></pre>"
    return render_block(parse_block(raw, config), themes, config)


def render_layout(
    block: LayoutBlock,
    themes: ThemeTable | None = None,
    config: BlocksConfig | None = None,
    image_state: ImageState = ImageState.LOADING,
) -> str:
    """Render a floating or side-by-side wrapper.

    ``left`` places the wrapped content before the text, ``right`` after it;
    the width class follows the normalized size fraction.
    """
    themes = themes or ThemeTable()
    config = config or BlocksConfig()
    width = WIDTH_CLASSES[block.fraction]
    content = _wrapped_content(block, themes, config, image_state)
    text = f'<div class="layout-text">{_multiline(block.text)}</div>' if block.text else ""

    if block.mode is LayoutMode.FLOATING:
        float_class = "float-left mr-6" if block.position == "left" else "float-right ml-6"
        return (
            f'<div class="layout floating">'
            f'<div class="{float_class} {width}">{content}</div>{text}</div>'
        )

    side = f'<div class="layout-content {width}">{content}</div>'
    # text sits on the mirrored side of the content
    ordered = text + side if mirror(block.position) == "left" else side + text
    return f'<div class="layout sidebyside flex">{ordered}</div>'


def render_markdown(
    markdown: str,
    themes: ThemeTable | None = None,
    config: BlocksConfig | None = None,
) -> str:
    """Replace every content-block fence in ``markdown`` with its HTML.

    Fences in other languages and all prose are left untouched for the
    downstream markdown renderer.
    """
    themes = themes or ThemeTable()
    config = config or BlocksConfig()
    parts: list[str] = []
    last = 0
    rendered = 0

    for fence in find_fenced_blocks(markdown):
        raw = block_from_fence(fence.language, fence.body)
        if raw is None:
            continue
        parts.append(markdown[last:fence.start])
        parts.append(render_block(parse_block(raw, config), themes, config))
        last = fence.end
        rendered += 1

    parts.append(markdown[last:])
    logger.debug("render_markdown replaced %d fenced blocks", rendered)
    return "".join(parts)


def render_document(
    document: str,
    themes: ThemeTable | None = None,
    config: BlocksConfig | None = None,
    wrap: bool = False,
) -> str:
    """Render a whole lesson: layout wrappers first, then content fences.

    Args:
        document: Lesson markdown.
        themes: Theme lookups.
        config: Block defaults.
        wrap: Wrap the result in a minimal standalone HTML page.

    Returns:
        The document with layout wrappers and content blocks rendered.
    """
    segments = parse_layout_blocks(document)
    rendered: list[str] = []
    for segment in segments:
        if isinstance(segment, MarkdownSegment):
            rendered.append(render_markdown(segment.content, themes, config))
        else:
            rendered.append(render_layout(segment, themes, config))

    body = "\n\n".join(rendered)
    if not wrap:
        return body
    return (
        '<!DOCTYPE html>\n<html><head><meta charset="utf-8"></head>\n'
        f"<body>\n{body}\n</body></html>\n"
    )
