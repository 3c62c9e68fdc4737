"""Variant -> CSS class tables for each block kind.

These are presentation lookups only. Parsers never read them; the renderer
receives a :class:`ThemeTable` built from the defaults below plus any
``render.themes`` overrides from the config file.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field

from lessonblocks.parsing.models import BlockKind

logger = logging.getLogger(__name__)

Theme = dict[str, str]

EMAIL_THEMES: dict[str, Theme] = {
    "info": {
        "bg": "bg-slate-50",
        "header_bg": "bg-slate-600",
        "border": "border-slate-200",
        "icon_color": "text-white",
        "from_color": "text-slate-800",
        "subject_color": "text-slate-900",
        "text_color": "text-slate-700",
        "meta_color": "text-slate-500",
    },
    "warning": {
        "bg": "bg-amber-50",
        "header_bg": "bg-amber-500",
        "border": "border-amber-200",
        "icon_color": "text-white",
        "from_color": "text-amber-800",
        "subject_color": "text-amber-900",
        "text_color": "text-amber-700",
        "meta_color": "text-amber-600",
    },
    "critical": {
        "bg": "bg-red-50",
        "header_bg": "bg-red-600",
        "border": "border-red-200",
        "icon_color": "text-white",
        "from_color": "text-red-800",
        "subject_color": "text-red-900",
        "text_color": "text-red-700",
        "meta_color": "text-red-600",
    },
    "success": {
        "bg": "bg-emerald-50",
        "header_bg": "bg-emerald-500",
        "border": "border-emerald-200",
        "icon_color": "text-white",
        "from_color": "text-emerald-800",
        "subject_color": "text-emerald-900",
        "text_color": "text-emerald-700",
        "meta_color": "text-emerald-600",
    },
}

PAGER_THEMES: dict[str, Theme] = {
    "critical": {
        "bg": "bg-red-50",
        "header_bg": "bg-red-600",
        "border": "border-red-200",
        "title_color": "text-red-800",
        "text_color": "text-red-700",
        "pulse_color": "bg-red-400",
    },
    "warning": {
        "bg": "bg-amber-50",
        "header_bg": "bg-amber-500",
        "border": "border-amber-200",
        "title_color": "text-amber-800",
        "text_color": "text-amber-700",
        "pulse_color": "bg-amber-400",
    },
    "info": {
        "bg": "bg-blue-50",
        "header_bg": "bg-blue-500",
        "border": "border-blue-200",
        "title_color": "text-blue-800",
        "text_color": "text-blue-700",
        "pulse_color": "bg-blue-400",
    },
    "success": {
        "bg": "bg-emerald-50",
        "header_bg": "bg-emerald-500",
        "border": "border-emerald-200",
        "title_color": "text-emerald-800",
        "text_color": "text-emerald-700",
        "pulse_color": "bg-emerald-400",
    },
}

CALLOUT_THEMES: dict[str, Theme] = {
    "info": {
        "bg": "bg-blue-50",
        "border": "border-blue-100",
        "icon_color": "text-blue-600",
        "title_color": "text-blue-900",
    },
    "warning": {
        "bg": "bg-amber-50",
        "border": "border-amber-100",
        "icon_color": "text-amber-600",
        "title_color": "text-amber-900",
    },
    "tip": {
        "bg": "bg-violet-50",
        "border": "border-violet-100",
        "icon_color": "text-violet-600",
        "title_color": "text-violet-900",
    },
    "danger": {
        "bg": "bg-red-50",
        "border": "border-red-100",
        "icon_color": "text-red-600",
        "title_color": "text-red-900",
    },
}

# Kinds without variants use a single "default" entry
TERMINAL_THEMES: dict[str, Theme] = {
    "default": {
        "bg": "bg-gray-900",
        "prompt_color": "text-emerald-400",
        "command_color": "text-gray-100",
        "comment_color": "text-gray-500",
        "output_color": "text-gray-400",
    },
}

CHECKLIST_THEMES: dict[str, Theme] = {
    "default": {"bg": "bg-emerald-50", "border": "border-emerald-200", "icon_color": "text-emerald-600"},
}

MISTAKES_THEMES: dict[str, Theme] = {
    "default": {"bg": "bg-red-50", "border": "border-red-200", "icon_color": "text-red-600"},
}

DEFAULT_THEMES: dict[BlockKind, dict[str, Theme]] = {
    BlockKind.TERMINAL: TERMINAL_THEMES,
    BlockKind.EMAIL: EMAIL_THEMES,
    BlockKind.CHECKLIST: CHECKLIST_THEMES,
    BlockKind.MISTAKE_LIST: MISTAKES_THEMES,
    BlockKind.PAGER_ALERT: PAGER_THEMES,
    BlockKind.CALLOUT: CALLOUT_THEMES,
}

# Pager variants that show a pulsing dot in the header bar
PULSING_VARIANTS = frozenset({"critical", "warning"})


def email_badge(variant: str | None) -> str:
    """Header-bar label for an email variant."""
    if variant == "critical":
        return "URGENT"
    if variant == "warning":
        return "IMPORTANT"
    return "EMAIL"


@dataclass
class ThemeTable:
    """Resolved theme lookups for every block kind."""

    themes: dict[BlockKind, dict[str, Theme]] = field(
        default_factory=lambda: copy.deepcopy(DEFAULT_THEMES)
    )

    def lookup(self, kind: BlockKind, variant: str | None = None) -> Theme:
        """Return the theme for ``kind``/``variant``.

        Unknown or missing variants fall back to ``default`` and then to the
        kind's first declared variant, so a lookup always yields a theme.
        """
        variants = self.themes.get(kind) or {}
        if variant in variants:
            return variants[variant]
        if "default" in variants:
            return variants["default"]
        return next(iter(variants.values()), {})


def build_theme_table(
    overrides: dict[str, dict[str, dict[str, str]]] | None = None,
) -> ThemeTable:
    """Merge config overrides (kind value -> variant -> fields) over the defaults.

    Unknown kind names are skipped with a warning. Overrides may add new variants.
    """
    table = ThemeTable()
    for kind_name, variants in (overrides or {}).items():
        try:
            kind = BlockKind(kind_name)
        except ValueError:
            logger.warning("Ignoring theme overrides for unknown block kind %r", kind_name)
            continue
        kind_themes = table.themes.setdefault(kind, {})
        for variant, fields in variants.items():
            kind_themes.setdefault(variant, {}).update(fields)
    return table
