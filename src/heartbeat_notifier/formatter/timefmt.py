"""Local day, date and time strings for heartbeat timestamps."""

from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from heartbeat_notifier.errors import FormattingError

# English names regardless of the process locale
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def parse_timestamp(value: datetime | str) -> datetime:
    """Parse a timestamp into an aware datetime. Naive values are UTC."""
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except (ValueError, AttributeError) as e:
            raise FormattingError(f"Invalid timestamp: {value!r}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


class TimeFormatter:
    """Formats an absolute timestamp in a given IANA timezone."""

    def to_local(self, timestamp: datetime | str | None, zone_id: str | None) -> datetime:
        """Convert a timestamp to local time in ``zone_id``.

        Raises:
            FormattingError: If either argument is missing or invalid.
        """
        if not timestamp or not zone_id:
            raise FormattingError("Both timestamp and timezone are required")

        try:
            zone = ZoneInfo(zone_id)
        except (ZoneInfoNotFoundError, ValueError, OSError) as e:
            raise FormattingError(f"Unknown timezone: {zone_id!r}") from e

        parsed = parse_timestamp(timestamp)
        try:
            return parsed.astimezone(zone)
        except OverflowError as e:
            raise FormattingError(
                f"Timestamp out of range in {zone_id}: {parsed.isoformat()}"
            ) from e

    def format_weekday(self, timestamp: datetime | str | None, zone_id: str | None) -> str:
        """Full weekday name, e.g. ``Monday``."""
        local = self.to_local(timestamp, zone_id)
        return WEEKDAY_NAMES[local.weekday()]

    def format_calendar_date(
        self, timestamp: datetime | str | None, zone_id: str | None
    ) -> str:
        """Calendar date as ``Jan 01, 2024``."""
        local = self.to_local(timestamp, zone_id)
        return f"{MONTH_ABBREVIATIONS[local.month - 1]} {local.day:02d}, {local.year}"

    def format_clock_time(self, timestamp: datetime | str | None, zone_id: str | None) -> str:
        """24-hour clock time as ``HH:MM:SS``."""
        local = self.to_local(timestamp, zone_id)
        return f"{local.hour:02d}:{local.minute:02d}:{local.second:02d}"
