"""Priority ordering and display text for monitor tags."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from heartbeat_notifier.models import Tag

logger = logging.getLogger(__name__)

PRIORITY_ORDER: dict[str, int] = {
    "p0": 1,
    "p1": 2,
    "p2": 3,
    "p3": 4,
    "p4": 5,
    "internal": 6,
    "external": 6,
}
DEFAULT_PRIORITY = 7
NO_TAGS_TEXT = "No tags"

PLAIN_SEPARATOR = ", "
STRUCTURED_SEPARATOR = "\n - "

_PRIORITY_PREFIX = re.compile(r"^([pP]\d)")


def get_tag_priority(tag: Tag) -> int:
    """Get the sort priority of a tag. Lower sorts first."""
    if tag.priority_hint is not None:
        return tag.priority_hint

    name = tag.name
    exact = PRIORITY_ORDER.get(name.lower())
    if exact is not None:
        return exact

    match = _PRIORITY_PREFIX.match(name)
    if match:
        return PRIORITY_ORDER.get(match.group(1).lower(), DEFAULT_PRIORITY)

    logger.debug(f"Tag {name!r} has no known priority, defaulting to {DEFAULT_PRIORITY}")
    return DEFAULT_PRIORITY


class TagPrioritizer:
    """Orders tags by severity and renders them for display."""

    def sort(self, tags: Iterable[Tag]) -> list[Tag]:
        """Sort tags by ascending priority. Equal priorities keep input order."""
        return sorted(tags, key=get_tag_priority)

    def render(self, tags: Iterable[Tag], *, structured: bool = False) -> str:
        """Render tag names in priority order.

        Args:
            tags: Tags to render.
            structured: Join as a bulleted list instead of commas.

        Returns:
            Display text, or ``NO_TAGS_TEXT`` when there are no tags.
        """
        ordered = self.sort(tags)
        if not ordered:
            return NO_TAGS_TEXT

        separator = STRUCTURED_SEPARATOR if structured else PLAIN_SEPARATOR
        return separator.join(tag.name for tag in ordered)
