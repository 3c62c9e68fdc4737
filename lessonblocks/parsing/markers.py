"""Leading list-marker glyphs and the stripper shared by list blocks."""

from __future__ import annotations

import re
from functools import lru_cache

# Generic bullets accepted by every list kind: dash, asterisk, bullet, en dash
BULLET_MARKERS = frozenset({"-", "*", "•", "–"})

# Check mark, heavy check mark, square root (used as a check), ballot box
# with check, white heavy check mark
CHECK_MARKERS = frozenset({"✓", "✔", "√", "☑", "✅"}) | BULLET_MARKERS

# Ballot X, heavy ballot X, multiplication sign, multiplication X, heavy
# multiplication X, cross mark
CROSS_MARKERS = frozenset({"✗", "✘", "×", "✕", "✖", "❌"}) | BULLET_MARKERS

# Emoji presentation selector typed after glyphs such as ✔️ and ✖️
VARIATION_SELECTOR = "\ufe0f"


@lru_cache(maxsize=None)
def _marker_re(markers: frozenset[str]) -> re.Pattern[str]:
    # Longest first so multi-codepoint glyphs win over their prefixes
    alternatives = "|".join(
        re.escape(m) for m in sorted(markers, key=len, reverse=True)
    )
    return re.compile(rf"^(?:{alternatives}){VARIATION_SELECTOR}?\s*")


def strip_marker(line: str, markers: frozenset[str]) -> str:
    """Remove at most one leading marker glyph and the whitespace after it.

    Lines that do not start with a recognized glyph are returned unchanged,
    so unknown markers pass through as item text.

    Args:
        line: One list line, already trimmed by the caller.
        markers: Glyphs recognized for this list kind.

    Returns:
        The line without its marker.
    """
    if not markers:
        return line
    return _marker_re(markers).sub("", line, count=1)
