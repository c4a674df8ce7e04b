"""Message assembly for heartbeat notifications.

This module turns a monitor, its latest heartbeat and the notification
options into a ``RenderedMessage``: a one-line preview plus, for rich
messages, a single colour-tagged attachment holding a header, a markdown
section with the monitor details, and optional action buttons.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from heartbeat_notifier.errors import BlockConstructionError, FormattingError
from heartbeat_notifier.formatter.classifier import AlertClassifier, StatusClassification
from heartbeat_notifier.formatter.links import ActionLinkBuilder
from heartbeat_notifier.formatter.sections import SectionFormatter, SectionLayout
from heartbeat_notifier.formatter.tags import TagPrioritizer
from heartbeat_notifier.formatter.timefmt import TimeFormatter
from heartbeat_notifier.formatter.timezones import TimezoneDirectory
from heartbeat_notifier.models import (
    ActionsBlock,
    Attachment,
    Block,
    HeaderBlock,
    MonitorDescriptor,
    MonitorEvent,
    MonitorStatus,
    NotificationConfig,
    RenderedMessage,
    SectionBlock,
)

DEFAULT_TITLE = "Uptime Monitor"
DEFAULT_USERNAME = "Uptime Monitor (bot)"
NO_DETAILS_TEXT = "No additional information"
EMPTY_DETAILS = "N/A"


def _text(value: object) -> str | None:
    """Stripped string form of a value, or None if empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _flag(value: bool) -> str | None:
    return "Yes" if value else None


class MessageAssembler:
    """Builds rich or plain notification messages.

    The output depends only on the arguments, so formatting the same
    inputs twice yields identical payloads.
    """

    def __init__(
        self,
        *,
        title: str = DEFAULT_TITLE,
        classifier: AlertClassifier | None = None,
        timezones: TimezoneDirectory | None = None,
        time_formatter: TimeFormatter | None = None,
        tag_prioritizer: TagPrioritizer | None = None,
        section_formatter: SectionFormatter | None = None,
        link_builder: ActionLinkBuilder | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the assembler.

        Args:
            title: Header text of rich messages and first line of plain ones.
            classifier: Status classifier.
            timezones: Timezone directory.
            time_formatter: Local time formatter.
            tag_prioritizer: Tag ordering and rendering.
            section_formatter: Title/value templates.
            link_builder: Action link builder.
            logger: Logger for recovered errors. Defaults to the module logger.
        """
        self.title = title
        self._log = logger or logging.getLogger(__name__)
        self.classifier = classifier or AlertClassifier()
        self.timezones = timezones or TimezoneDirectory()
        self.time_formatter = time_formatter or TimeFormatter()
        self.tag_prioritizer = tag_prioritizer or TagPrioritizer()
        self.section_formatter = section_formatter or SectionFormatter()
        self.link_builder = link_builder or ActionLinkBuilder(logger=self._log)

    def assemble(
        self,
        config: NotificationConfig,
        text: str,
        monitor: MonitorDescriptor | None = None,
        event: MonitorEvent | None = None,
        base_url: str | None = None,
    ) -> RenderedMessage:
        """Assemble the message for one notification.

        Args:
            config: Notification options.
            text: Notification text supplied by the caller.
            monitor: Monitor the event belongs to, if known.
            event: The heartbeat being reported, if any.
            base_url: Dashboard base URL for the dashboard link.

        Returns:
            RenderedMessage with zero attachments (plain) or one (rich).
        """
        if monitor is None or not monitor.name:
            monitor = MonitorDescriptor.fallback()
        rich_allowed = event is not None
        if event is None:
            event = MonitorEvent(status=MonitorStatus.UNKNOWN, message=text)

        classification = self.classifier.classify(event.status)
        preview = f"{classification.icon} {monitor.name} {classification.phrase}"

        plain = RenderedMessage(
            text=f"{self.title}\n{text}",
            channel=config.channel,
            username=config.username or DEFAULT_USERNAME,
            icon_emoji=config.icon_emoji,
        )

        if not (config.rich_message and rich_allowed):
            self._log.debug("Plain text format applied")
            return plain

        try:
            blocks = self.build_blocks(base_url, monitor, event, classification)
        except BlockConstructionError as e:
            self._log.error(f"Failed to build rich message blocks, sending plain text: {e}")
            return plain

        return RenderedMessage(
            text=preview,
            channel=plain.channel,
            username=plain.username,
            icon_emoji=plain.icon_emoji,
            attachments=(Attachment(color=classification.accent_color, blocks=blocks),),
        )

    def build_blocks(
        self,
        base_url: str | None,
        monitor: MonitorDescriptor,
        event: MonitorEvent,
        classification: StatusClassification,
    ) -> tuple[Block, ...]:
        """Build header, detail section and action blocks.

        Raises:
            BlockConstructionError: If any part of the block list fails.
        """
        try:
            blocks: list[Block] = [HeaderBlock(text=self.title)]
            sections = self._build_sections(monitor, event, classification)
            blocks.append(SectionBlock(text="\n".join(sections)))

            links = self.link_builder.build(base_url, monitor)
            if links:
                blocks.append(ActionsBlock(elements=tuple(links)))
            else:
                self._log.debug("No action buttons available to add")
        except Exception as e:
            raise BlockConstructionError(f"Message block construction failed: {e}") from e

        return tuple(blocks)

    def _build_sections(
        self,
        monitor: MonitorDescriptor,
        event: MonitorEvent,
        classification: StatusClassification,
    ) -> list[str]:
        """Formatted sections in display order, skipping empty values."""
        status_text = classification.status_text or _text(event.message) or NO_DETAILS_TEXT

        details = _text(event.message)
        if details == EMPTY_DETAILS:
            details = None

        location: tuple[str | None, str | None, str | None] = (None, None, None)
        if event.timezone:
            zone = self.timezones.lookup(event.timezone)
            location = (zone.continent, zone.country, zone.local_zone_name)

        tags = None
        if monitor.tags:
            tags = self.tag_prioritizer.render(monitor.tags, structured=True)

        interval = _text(monitor.interval)
        resend_interval = _text(monitor.resend_interval)

        inline = SectionLayout.INLINE
        newline_title = SectionLayout.NEWLINE_BEFORE_TITLE
        entries: list[tuple[str, str | None, SectionLayout]] = [
            ("Monitor", monitor.name, inline),
            ("Status", status_text, inline),
            ("Type", _text(monitor.type), inline),
            ("Port", _text(monitor.port), inline),
            ("Interval", f"{interval} Seconds" if interval else None, inline),
            ("Retries", _text(monitor.max_retries), inline),
            (
                "Resend Notification After",
                f"{resend_interval} Failures" if resend_interval else None,
                inline,
            ),
            ("Continent", location[0], newline_title),
            ("Country", location[1], inline),
            ("Time-zone", location[2], inline),
            ("Day", self._format_time(self.time_formatter.format_weekday, event), inline),
            ("Date", self._format_time(self.time_formatter.format_calendar_date, event), inline),
            ("Time", self._format_time(self.time_formatter.format_clock_time, event), inline),
            ("Tags", tags, SectionLayout.BULLETED_BLOCK),
            ("Description", _text(monitor.description), SectionLayout.BLOCK_NEWLINE_BEFORE),
            ("Keyword", _text(monitor.keyword), newline_title),
            ("Invert Keyword", _flag(monitor.invert_keyword), newline_title),
            ("Upside Down", _flag(monitor.upside_down), newline_title),
            ("Ignore TLS", _flag(monitor.ignore_tls), newline_title),
            ("Details", details, SectionLayout.LENGTH_CONDITIONAL),
        ]

        return [
            self.section_formatter.format(title, value, layout)
            for title, value, layout in entries
            if value
        ]

    def _format_time(
        self,
        formatter: Callable[[object, str | None], str],
        event: MonitorEvent,
    ) -> str | None:
        """Run a time formatter, omitting the field if the input is incomplete."""
        try:
            return formatter(event.local_date_time, event.timezone)
        except FormattingError as e:
            self._log.debug(f"Omitting time field: {e}")
            return None
