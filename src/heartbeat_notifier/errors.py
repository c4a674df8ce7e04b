"""Exception hierarchy for the notifier.

Only ``ConfigurationError`` and ``DeliveryError`` ever reach callers of
``AlertDispatcher.send``. The remaining errors are raised inside the
formatting pipeline and recovered where they occur.
"""

from __future__ import annotations


class NotifierError(Exception):
    """Base class for all notifier errors."""


class ConfigurationError(NotifierError):
    """A required notification setting is missing or invalid."""


class FormattingError(NotifierError):
    """A time or timezone field could not be formatted."""


class BlockConstructionError(NotifierError):
    """The rich message block list could not be assembled."""


class LinkBuildError(NotifierError):
    """An action link could not be built for a monitor."""


class MigrationError(NotifierError):
    """Migrating the legacy button URL into the settings store failed."""


class DeliveryError(NotifierError):
    """The webhook call failed.

    Attributes:
        status_code: HTTP status returned by the webhook, if any.
        response_body: Raw response body returned by the webhook, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
