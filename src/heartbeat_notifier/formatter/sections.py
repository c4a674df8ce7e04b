"""Title/value section templates for markdown message bodies."""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)

# Values longer than this move to their own line under LENGTH_CONDITIONAL
LONG_VALUE_THRESHOLD = 9


class SectionLayout(Enum):
    """How a title and its value are laid out."""

    INLINE = "setting-00"
    INLINE_NEWLINE_AFTER = "setting-01"
    BLOCK_NEWLINE_BEFORE = "setting-02"
    BULLETED_BLOCK = "setting-03"
    LENGTH_CONDITIONAL = "setting-04"
    NEWLINE_BEFORE_TITLE = "setting-05"


def _resolve_layout(layout: SectionLayout | str) -> SectionLayout:
    if isinstance(layout, SectionLayout):
        return layout
    try:
        return SectionLayout(layout)
    except ValueError:
        logger.debug(f"Unknown section layout {layout!r}, using inline format")
        return SectionLayout.INLINE


class SectionFormatter:
    """Renders a (title, value) pair with one of the ``SectionLayout`` templates.

    Unknown layouts fall back to ``SectionLayout.INLINE``.
    """

    def format(self, title: str, value: str, layout: SectionLayout | str) -> str:
        layout = _resolve_layout(layout)

        if layout is SectionLayout.INLINE_NEWLINE_AFTER:
            return f"*{title}:* {value}\n"
        if layout is SectionLayout.BLOCK_NEWLINE_BEFORE:
            return f"\n*{title}:*\n{value}"
        if layout is SectionLayout.BULLETED_BLOCK:
            return f"\n*{title}:*\n - {value}"
        if layout is SectionLayout.LENGTH_CONDITIONAL:
            if len(value) > LONG_VALUE_THRESHOLD:
                return f"\n*{title}:*\n{value}"
            return f"\n*{title}:* {value}"
        if layout is SectionLayout.NEWLINE_BEFORE_TITLE:
            return f"\n*{title}:* {value}"
        return f"*{title}:* {value}"
