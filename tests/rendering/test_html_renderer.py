"""Tests for HTML rendering of parsed blocks and lesson documents."""

from lessonblocks.config import BlocksConfig
from lessonblocks.parsing.dispatcher import parse_block
from lessonblocks.parsing.layout import LayoutBlock, LayoutMode
from lessonblocks.parsing.models import BlockKind, RawBlock
from lessonblocks.rendering.html_renderer import (
    ImageState,
    render_block,
    render_document,
    render_image,
    render_layout,
    render_markdown,
)
from lessonblocks.rendering.themes import build_theme_table


def _render(kind: BlockKind, text: str, **kwargs) -> str:
    return render_block(parse_block(RawBlock(kind=kind, raw_text=text, **kwargs)))


# ---------------------------------------------------------------------------
# Per-kind rendering
# ---------------------------------------------------------------------------

class TestRenderTerminal:
    def test_prompt_glyph_token(self):
        html = _render(BlockKind.TERMINAL, "$ ls -la")
        assert '<span class="prompt text-emerald-400">$</span>' in html
        assert "ls -la</span>" in html

    def test_comment_muted(self):
        html = _render(BlockKind.TERMINAL, "# setup")
        assert '<span class="italic text-gray-500"># setup</span>' in html

    def test_output_escaped(self):
        html = _render(BlockKind.TERMINAL, "output <b>&</b>")
        assert "output &lt;b&gt;&amp;&lt;/b&gt;" in html
        assert "<b>" not in html

    def test_continuation_and_spacer(self):
        html = _render(BlockKind.TERMINAL, "$ a \\\n  --flag\n\nok")
        assert "terminal-line continuation" in html
        assert '<div class="terminal-spacer"></div>' in html
        assert "terminal-line output" in html

    def test_title(self):
        html = _render(BlockKind.TERMINAL, "$ ls", title="Deploy")
        assert '<div class="terminal-header">Deploy</div>' in html


class TestRenderEmail:
    def test_absent_headers_omitted(self):
        html = _render(BlockKind.EMAIL, "Just a plain message")
        assert "From:" not in html
        assert "Subject:" not in html
        assert "email-date" not in html
        assert "Just a plain message" in html
        assert ">EMAIL<" in html

    def test_headers_and_badge(self):
        html = _render(
            BlockKind.EMAIL,
            "From: a@x.com\nDate: Monday\n\nLine one\nLine two",
            variant="critical",
        )
        assert ">URGENT<" in html
        assert "a@x.com" in html
        assert '<span class="email-date">Monday</span>' in html
        assert "Line one<br>Line two" in html
        assert "bg-red-600" in html

    def test_empty_body_has_no_body_div(self):
        assert "email-body" not in _render(BlockKind.EMAIL, "From: a@x.com")


class TestRenderLists:
    def test_checklist_items(self):
        html = _render(BlockKind.CHECKLIST, "✓ Item one\n- Item <two>")
        assert "<li>Item one</li>" in html
        assert "<li>Item &lt;two&gt;</li>" in html
        assert "Key Takeaways" in html

    def test_mistakes_title(self):
        html = _render(BlockKind.MISTAKE_LIST, "✗ a", title="Pitfalls")
        assert "Pitfalls" in html
        assert 'class="block mistakes' in html


class TestRenderPager:
    def test_default_source_and_pulse(self):
        html = _render(BlockKind.PAGER_ALERT, "DB down\nReplica lag")
        assert '<span class="pager-source">ALERT</span>' in html
        assert 'class="pulse' in html
        assert "DB down" in html
        assert "Replica lag" in html

    def test_metadata_and_no_pulse_for_info(self):
        html = _render(
            BlockKind.PAGER_ALERT, "Deployed", variant="info",
            metadata={"time": "10:00", "source": "CI"},
        )
        assert '<span class="pager-source">CI</span>' in html
        assert '<span class="pager-time">10:00</span>' in html
        assert 'class="pulse' not in html

    def test_configured_source(self):
        parsed = parse_block(RawBlock(kind=BlockKind.PAGER_ALERT, raw_text="x"))
        html = render_block(parsed, config=BlocksConfig(pager_source="OPSGENIE"))
        assert "OPSGENIE" in html


class TestRenderCallout:
    def test_heading_and_lines(self):
        html = _render(BlockKind.CALLOUT, "Rotate keys\nUse the vault.", variant="tip")
        assert "Pro Tip" in html
        assert "<p>Rotate keys</p><p>Use the vault.</p>" in html
        assert "bg-violet-50" in html

    def test_theme_override(self):
        parsed = parse_block(RawBlock(kind=BlockKind.CALLOUT, raw_text="x", variant="tip"))
        themes = build_theme_table({"callout": {"tip": {"bg": "bg-fuchsia-50"}}})
        assert "bg-fuchsia-50" in render_block(parsed, themes)


# ---------------------------------------------------------------------------
# Images and layout
# ---------------------------------------------------------------------------

class TestRenderImage:
    def test_loading(self):
        html = render_image("a.png", "Alt")
        assert "image-skeleton" in html
        assert 'style="opacity: 0"' in html

    def test_loaded(self):
        html = render_image("a.png", "Alt", state=ImageState.LOADED)
        assert '<img src="a.png" alt="Alt">' in html
        assert "image-skeleton" not in html

    def test_error(self):
        html = render_image("missing.png", state=ImageState.ERROR, caption="Fig 1")
        assert "Failed to load image" in html
        assert "missing.png" in html
        assert "<img" not in html
        assert "<figcaption>Fig 1</figcaption>" in html

    def test_src_attribute_escaped(self):
        html = render_image('a.png" onerror="x', state=ImageState.LOADED)
        assert 'src="a.png&quot; onerror=&quot;x"' in html


def _layout(**kwargs) -> LayoutBlock:
    defaults = dict(
        mode=LayoutMode.SIDE_BY_SIDE,
        position="right",
        size="medium",
        content_type="terminal",
        text="Explanation",
        language="terminal",
        content_raw="$ make",
    )
    defaults.update(kwargs)
    return LayoutBlock(**defaults)


class TestRenderLayout:
    def test_sidebyside_right(self):
        html = render_layout(_layout())
        assert html.index("layout-text") < html.index("layout-content")
        assert "w-1/2" in html
        assert "prompt" in html

    def test_sidebyside_left_small(self):
        html = render_layout(_layout(position="left", size="small"))
        assert html.index("layout-content") < html.index("layout-text")
        assert "w-1/3" in html

    def test_floating_left(self):
        html = render_layout(_layout(mode=LayoutMode.FLOATING, position="left", size="large"))
        assert "float-left mr-6 w-2/3" in html

    def test_mermaid_as_code(self):
        html = render_layout(_layout(content_type="mermaid", language="mermaid", content_raw="graph TD"))
        assert '<pre><code class="language-mermaid">graph TD</code></pre>' in html

    def test_image_content(self):
        html = render_layout(
            _layout(content_type="image", language="", content_raw=None, image_src="a.png"),
            image_state=ImageState.ERROR,
        )
        assert "Failed to load image" in html


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

class TestRenderDocument:
    def test_content_fences_replaced(self, lesson_document):
        html = render_markdown(lesson_document)
        assert "```terminal" not in html
        assert "```email" not in html
        assert "```pager" not in html
        assert ">IMPORTANT<" in html
        assert "PagerDuty" in html
        assert "API error rate above 5%" in html

    def test_prose_and_other_code_untouched(self, lesson_document):
        html = render_markdown(lesson_document)
        assert html.startswith("# Deploying the service\n\nStart by building the image.")
        assert "```python\nprint('not a content block')\n```" in html

    def test_render_document_layout(self):
        doc = "Intro\n\n:::floating:left:small\n![](a.png)\nSide text\n:::\n\n```note\nRemember\n```"
        html = render_document(doc)
        assert html.startswith("Intro")
        assert "float-left mr-6 w-1/3" in html
        assert "Remember" in html
        assert "```note" not in html

    def test_wrap(self):
        html = render_document("text", wrap=True)
        assert html.startswith("<!DOCTYPE html>")
        assert "<body>\ntext\n</body>" in html

    def test_document_without_blocks(self):
        assert render_document("plain") == "plain"
