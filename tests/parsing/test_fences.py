"""Tests for fenced-block discovery and language routing."""

import pytest

from lessonblocks.parsing.fences import (
    LANGUAGE_ROUTES,
    block_from_fence,
    find_fenced_blocks,
    resolve_language,
)
from lessonblocks.parsing.models import BlockKind, RawBlock


class TestResolveLanguage:
    @pytest.mark.parametrize("language,kind,variant", [
        ("terminal", BlockKind.TERMINAL, None),
        ("bash", BlockKind.TERMINAL, None),
        ("shell", BlockKind.TERMINAL, None),
        ("mistakes", BlockKind.MISTAKE_LIST, None),
        ("errors", BlockKind.MISTAKE_LIST, None),
        ("checklist", BlockKind.CHECKLIST, None),
        ("success", BlockKind.CHECKLIST, None),
        ("note", BlockKind.CALLOUT, "info"),
        ("caution", BlockKind.CALLOUT, "warning"),
        ("hint", BlockKind.CALLOUT, "tip"),
        ("critical", BlockKind.CALLOUT, "danger"),
        ("notification", BlockKind.PAGER_ALERT, None),
        ("email", BlockKind.EMAIL, None),
    ])
    def test_routes(self, language, kind, variant):
        assert resolve_language(language) == (kind, variant)

    def test_case_insensitive(self):
        assert resolve_language("NOTE") == (BlockKind.CALLOUT, "info")

    def test_ordinary_code(self):
        assert resolve_language("python") is None
        assert resolve_language("mermaid") is None
        assert resolve_language("") is None

    def test_every_kind_reachable(self):
        assert {kind for kind, _ in LANGUAGE_ROUTES.values()} == set(BlockKind)


class TestFindFencedBlocks:
    def test_lesson_document(self, lesson_document):
        fences = find_fenced_blocks(lesson_document)
        assert [f.language for f in fences] == [
            "terminal", "email", "checklist", "python", "pager",
        ]
        assert fences[0].body == "$ docker build \\\n  -t api:latest .\nSuccessfully built 3f2a"

    def test_offsets_cover_fence(self, lesson_document):
        fence = find_fenced_blocks(lesson_document)[2]
        chunk = lesson_document[fence.start:fence.end]
        assert chunk.startswith("```checklist\n")
        assert chunk.endswith("```")

    def test_empty_body(self):
        fences = find_fenced_blocks("```tip\n```\n")
        assert len(fences) == 1
        assert fences[0].body == ""

    def test_language_lowercased_and_info_string_ignored(self):
        fences = find_fenced_blocks("```Terminal title=deploy\n$ ls\n```")
        assert fences[0].language == "terminal"
        assert fences[0].body == "$ ls"

    def test_no_fences(self):
        assert find_fenced_blocks("plain prose only") == []

    def test_unclosed_fence_ignored(self):
        assert find_fenced_blocks("```terminal\n$ ls\n") == []


class TestBlockFromFence:
    def test_pager_directive_full(self):
        block = block_from_fence("pager", "@critical | 03:12 UTC | PagerDuty\nDB down\nlag")
        assert block == RawBlock(
            kind=BlockKind.PAGER_ALERT,
            raw_text="DB down\nlag",
            variant="critical",
            metadata={"time": "03:12 UTC", "source": "PagerDuty"},
        )

    def test_pager_directive_variant_only(self):
        block = block_from_fence("alert", "@warning\nDisk at 90%")
        assert block.variant == "warning"
        assert block.metadata == ()
        assert block.raw_text == "Disk at 90%"

    def test_pager_directive_time_only(self):
        block = block_from_fence("pager", "@info | 10:00\nDeploy finished")
        assert dict(block.metadata) == {"time": "10:00"}

    def test_pager_without_directive(self):
        block = block_from_fence("pager", "Disk full\nClean /var/log")
        assert block.variant is None
        assert block.raw_text == "Disk full\nClean /var/log"

    def test_pager_unknown_directive_is_content(self):
        block = block_from_fence("pager", "@bogus | x\nbody")
        assert block.variant is None
        assert block.raw_text == "@bogus | x\nbody"

    def test_email_directive(self):
        block = block_from_fence("email", "@critical\nFrom: a@x.com")
        assert block.variant == "critical"
        assert block.raw_text == "From: a@x.com"

    def test_email_directive_rejects_extra_fields(self):
        block = block_from_fence("email", "@critical | 10:00\nFrom: a@x.com")
        assert block.variant is None
        assert block.raw_text.startswith("@critical")

    def test_callout_variant_from_language(self):
        block = block_from_fence("warning", "Mind the gap")
        assert block == RawBlock(kind=BlockKind.CALLOUT, raw_text="Mind the gap", variant="warning")

    def test_ordinary_code_returns_none(self):
        assert block_from_fence("python", "print(1)") is None

    def test_directive_only(self):
        block = block_from_fence("pager", "@critical")
        assert block.variant == "critical"
        assert block.raw_text == ""
