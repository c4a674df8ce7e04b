"""Data models shared by the formatter and alerter modules."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from heartbeat_notifier.errors import ConfigurationError

DEFAULT_ICON_EMOJI = ":robot_face:"
FALLBACK_MONITOR_NAME = "Unknown Monitor"


class MonitorStatus(Enum):
    """Kind of heartbeat being reported."""

    DOWN = "down"
    UP = "up"
    PENDING = "pending"
    MAINTENANCE = "maintenance"
    CERTIFICATE_WARNING = "certificate_warning"
    TEST = "test"
    REPORT = "report"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: object) -> MonitorStatus:
        """Normalize a heartbeat status code, name, or member.

        Numeric codes follow the heartbeat wire values (0 = down ... 6 = report).
        Anything unrecognised maps to UNKNOWN.
        """
        if isinstance(code, cls):
            return code
        if isinstance(code, bool):
            return cls.UNKNOWN
        if isinstance(code, int):
            return _STATUS_BY_CODE.get(code, cls.UNKNOWN)
        if isinstance(code, str):
            key = code.strip().lower().replace("-", "_").replace(" ", "_")
            if key.isdigit():
                return _STATUS_BY_CODE.get(int(key), cls.UNKNOWN)
            try:
                return cls(key)
            except ValueError:
                return cls.UNKNOWN
        return cls.UNKNOWN


_STATUS_BY_CODE: dict[int, MonitorStatus] = {
    0: MonitorStatus.DOWN,
    1: MonitorStatus.UP,
    2: MonitorStatus.PENDING,
    3: MonitorStatus.MAINTENANCE,
    4: MonitorStatus.CERTIFICATE_WARNING,
    5: MonitorStatus.TEST,
    6: MonitorStatus.REPORT,
}


@dataclass(frozen=True)
class MonitorEvent:
    """One observed status transition of a monitored resource.

    Attributes:
        status: Kind of event.
        message: Free text supplied with the heartbeat.
        local_date_time: When the event happened. Naive values are UTC.
        timezone: IANA zone identifier used for display.
    """

    status: MonitorStatus = MonitorStatus.UNKNOWN
    message: str = ""
    local_date_time: datetime | str | None = None
    timezone: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MonitorEvent:
        """Create a MonitorEvent from a heartbeat dictionary."""
        message = data.get("message", data.get("msg"))
        return cls(
            status=MonitorStatus.from_code(data.get("status")),
            message=str(message) if message is not None else "",
            local_date_time=data.get("local_date_time", data.get("localDateTime")),
            timezone=data.get("timezone"),
        )


@dataclass(frozen=True)
class Tag:
    """A label attached to a monitor.

    Attributes:
        name: Tag name, e.g. ``P1`` or ``internal``.
        priority_hint: Explicit priority. Takes precedence over the name.
    """

    name: str
    priority_hint: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Tag:
        """Create a Tag from a dictionary."""
        hint = data.get("priority_hint", data.get("priorityHint"))
        return cls(
            name=str(data["name"]),
            priority_hint=int(hint) if hint is not None else None,
        )


@dataclass(frozen=True)
class MonitorDescriptor:
    """Static description of a monitor."""

    name: str
    id: int | str | None = None
    type: str | None = None
    port: int | None = None
    interval: int | None = None
    max_retries: int | None = None
    resend_interval: int | None = None
    description: str | None = None
    keyword: str | None = None
    invert_keyword: bool = False
    upside_down: bool = False
    ignore_tls: bool = False
    tags: tuple[Tag, ...] = ()
    address: str | None = None
    hostname: str | None = None

    @classmethod
    def fallback(cls) -> MonitorDescriptor:
        """Descriptor used when the caller has no monitor to report on."""
        return cls(name=FALLBACK_MONITOR_NAME)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MonitorDescriptor:
        """Create a MonitorDescriptor from a monitor dictionary."""
        port = data.get("port")
        return cls(
            name=str(data.get("name") or ""),
            id=data.get("id"),
            type=data.get("type"),
            port=port if isinstance(port, int) and not isinstance(port, bool) else None,
            interval=data.get("interval"),
            max_retries=data.get("max_retries", data.get("maxretries")),
            resend_interval=data.get("resend_interval", data.get("resendInterval")),
            description=data.get("description"),
            keyword=data.get("keyword"),
            invert_keyword=bool(data.get("invert_keyword", data.get("invertKeyword", False))),
            upside_down=bool(data.get("upside_down", data.get("upsideDown", False))),
            ignore_tls=bool(data.get("ignore_tls", data.get("ignoreTls", False))),
            tags=tuple(Tag.from_dict(t) for t in data.get("tags") or ()),
            address=data.get("address", data.get("url")),
            hostname=data.get("hostname"),
        )


class NotificationConfig(BaseModel):
    """Options for a single webhook notification.

    Accepts snake_case names, camelCase names, and the legacy
    ``slack*`` keys stored by older notification records.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    webhook_url: str = Field(
        default="",
        validation_alias=AliasChoices("webhook_url", "webhookURL", "slackwebhookURL"),
    )
    channel: str = Field(
        default="",
        validation_alias=AliasChoices("channel", "slackchannel"),
    )
    username: str = Field(
        default="",
        validation_alias=AliasChoices("username", "slackusername"),
    )
    icon_emoji: str = Field(
        default=DEFAULT_ICON_EMOJI,
        validation_alias=AliasChoices("icon_emoji", "iconEmoji", "slackiconemo"),
    )
    channel_notify_all: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "channel_notify_all", "channelNotifyAll", "slackchannelnotify"
        ),
    )
    rich_message: bool = Field(
        default=False,
        validation_alias=AliasChoices("rich_message", "richMessage", "slackrichmessage"),
    )
    legacy_button_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("legacy_button_url", "legacyButtonURL", "slackbutton"),
    )

    @field_validator("webhook_url", "channel", "username", mode="before")
    @classmethod
    def none_as_empty(cls, v: object) -> object:
        """Treat null values as unset."""
        return "" if v is None else v

    @field_validator("icon_emoji", mode="before")
    @classmethod
    def default_icon(cls, v: object) -> object:
        """Apply the default icon when none is configured."""
        return v or DEFAULT_ICON_EMOJI

    @field_validator("legacy_button_url", mode="before")
    @classmethod
    def empty_as_none(cls, v: object) -> object:
        """Treat an empty legacy URL as unset."""
        return v or None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> NotificationConfig:
        """Build a config from a stored notification record.

        Raises:
            ConfigurationError: If a value has the wrong type.
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid notification configuration: {e}") from e


@dataclass(frozen=True)
class TimezoneInfo:
    """Geographic context for an IANA zone identifier."""

    continent: str
    country: str
    local_zone_name: str


@dataclass(frozen=True)
class ActionLink:
    """A clickable reference rendered as a button."""

    text: str
    value: str
    url: str

    def to_dict(self) -> dict[str, object]:
        """Render as a button element."""
        return {
            "type": "button",
            "text": {"type": "plain_text", "text": self.text},
            "value": self.value,
            "url": self.url,
        }


@dataclass(frozen=True)
class HeaderBlock:
    """Bold title line at the top of an attachment."""

    text: str

    def to_dict(self) -> dict[str, object]:
        return {"type": "header", "text": {"type": "plain_text", "text": self.text}}


@dataclass(frozen=True)
class SectionBlock:
    """Markdown section, either a single text body or a list of fields."""

    text: str | None = None
    fields: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        block: dict[str, object] = {"type": "section"}
        if self.text is not None:
            block["text"] = {"type": "mrkdwn", "text": self.text}
        if self.fields:
            block["fields"] = [{"type": "mrkdwn", "text": f} for f in self.fields]
        return block


@dataclass(frozen=True)
class ActionsBlock:
    """Row of action buttons."""

    elements: tuple[ActionLink, ...]

    def to_dict(self) -> dict[str, object]:
        return {"type": "actions", "elements": [e.to_dict() for e in self.elements]}


Block = HeaderBlock | SectionBlock | ActionsBlock


@dataclass(frozen=True)
class Attachment:
    """Colour-tagged container for rich message blocks."""

    color: str
    blocks: tuple[Block, ...]

    def to_dict(self) -> dict[str, object]:
        return {"color": self.color, "blocks": [b.to_dict() for b in self.blocks]}


@dataclass(frozen=True)
class RenderedMessage:
    """A formatted notification ready for delivery.

    Attributes:
        text: Preview text, or the whole body for plain messages.
        channel: Target channel.
        username: Sender display name.
        icon_emoji: Sender icon.
        attachments: Zero or one rich attachment.
    """

    text: str
    channel: str
    username: str
    icon_emoji: str
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)

    @property
    def is_rich(self) -> bool:
        """Return True if the message carries a structured attachment."""
        return bool(self.attachments)

    def to_payload(self) -> dict[str, object]:
        """Serialize to the webhook JSON body."""
        return {
            "text": self.text,
            "channel": self.channel,
            "username": self.username,
            "icon_emoji": self.icon_emoji,
            "attachments": [a.to_dict() for a in self.attachments],
        }
