"""Status icon, phrase and accent colour for heartbeat events."""

from __future__ import annotations

from dataclasses import dataclass

from heartbeat_notifier.models import MonitorStatus

# Accent colours (hex)
COLOR_DOWN = "#e01e5a"
COLOR_UP = "#2eb886"
COLOR_WARNING = "#f0a500"
COLOR_INFO = "#2196F3"
COLOR_UNKNOWN = "#808080"

TEST_STATUS_TEXT = (
    "This notification has been manually triggered to test the notification system."
)


@dataclass(frozen=True)
class StatusClassification:
    """Display attributes for a status.

    Attributes:
        icon: Emoji prefix for the preview text.
        phrase: Text following the monitor name in the preview.
        accent_color: Attachment colour.
        status_text: Wording of the Status section in rich bodies. None means
            the event message should be shown instead.
    """

    icon: str
    phrase: str
    accent_color: str
    status_text: str | None = None


STATUS_CLASSIFICATIONS: dict[MonitorStatus, StatusClassification] = {
    MonitorStatus.DOWN: StatusClassification(
        icon="🔴",
        phrase="went down!",
        accent_color=COLOR_DOWN,
        status_text="went down!",
    ),
    MonitorStatus.UP: StatusClassification(
        icon="🟢",
        phrase="is back online!",
        accent_color=COLOR_UP,
        status_text="is back online!",
    ),
    MonitorStatus.PENDING: StatusClassification(
        icon="🟡",
        phrase="is pending...",
        accent_color=COLOR_WARNING,
        status_text="is pending...",
    ),
    MonitorStatus.MAINTENANCE: StatusClassification(
        icon="⚙️",
        phrase="is under maintenance!",
        accent_color=COLOR_INFO,
        status_text="is under maintenance!",
    ),
    MonitorStatus.CERTIFICATE_WARNING: StatusClassification(
        icon="🔒",
        phrase="- This certificate is about to expire.",
        accent_color=COLOR_WARNING,
    ),
    MonitorStatus.TEST: StatusClassification(
        icon="🔵",
        phrase=f"- {TEST_STATUS_TEXT}",
        accent_color=COLOR_INFO,
        status_text=TEST_STATUS_TEXT,
    ),
    MonitorStatus.REPORT: StatusClassification(
        icon="🚩",
        phrase="- Fallback Message, issue detected",
        accent_color=COLOR_DOWN,
    ),
    MonitorStatus.UNKNOWN: StatusClassification(
        icon="❓",
        phrase="- Status Unknown",
        accent_color=COLOR_UNKNOWN,
    ),
}


class AlertClassifier:
    """Maps a status to its display attributes.

    The table covers every ``MonitorStatus`` member, and raw codes are
    normalized with ``MonitorStatus.from_code`` so unrecognised input lands
    on ``MonitorStatus.UNKNOWN``.
    """

    def classify(self, status: MonitorStatus | int | str | None) -> StatusClassification:
        return STATUS_CLASSIFICATIONS[MonitorStatus.from_code(status)]
