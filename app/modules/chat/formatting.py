"""Readability cleanup for free-text answers containing numbered steps."""

from __future__ import annotations

import re

# A marker only starts a step at the start of a line or right after a colon
_MISSING_SPACE = re.compile(r"(^|:[ \t]*)(\d{1,3})([.)])(?=[A-Z])", re.MULTILINE)
_INLINE_MARKER = re.compile(r"(?<=[:.!?])[ \t]+(\d{1,3}[.)]\s)")
_BLANK_RUNS = re.compile(r"\n\s*\n(\s*\n)+")


def clean_numbered_steps(text: str) -> str:
    """Put each numbered step on its own line.

    ``"Steps: 1.Mix the flour. 2. Bake it."`` style output is common from chat
    models; markers get a trailing space, markers following a sentence or a
    colon start a new line, and runs of blank lines collapse to one. Version
    numbers and section references (``3.x``, ``4.b``) are left alone.
    """
    if not text or not isinstance(text, str):
        return text
    s = _MISSING_SPACE.sub(r"\1\2\3 ", text)
    s = _INLINE_MARKER.sub(r"\n\1", s)
    s = _BLANK_RUNS.sub("\n\n", s)
    return s.strip()
