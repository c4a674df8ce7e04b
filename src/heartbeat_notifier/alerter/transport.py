"""Webhook delivery over HTTP."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from heartbeat_notifier.errors import DeliveryError

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Protocol for the outbound delivery boundary."""

    async def post(self, url: str, payload: dict[str, object]) -> str:
        """POST a JSON payload. Returns the response body."""
        ...


class WebhookTransport:
    """Posts JSON payloads to incoming-webhook URLs.

    Makes exactly one attempt per call. Retries and rate limiting belong
    to whatever schedules the notifications.
    """

    def __init__(self, *, timeout: float = 10.0) -> None:
        """Initialize the transport.

        Args:
            timeout: HTTP request timeout in seconds.
        """
        self.timeout = timeout

    async def post(self, url: str, payload: dict[str, object]) -> str:
        """POST ``payload`` as JSON to ``url``.

        Returns:
            The response body.

        Raises:
            DeliveryError: On timeout, transport failure or a 4xx/5xx response.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            body = e.response.text
            logger.error(f"Webhook returned {status}: {body}")
            raise DeliveryError(
                f"Webhook returned HTTP {status}",
                status_code=status,
                response_body=body,
            ) from e
        except httpx.TimeoutException as e:
            logger.warning(f"Webhook timeout after {self.timeout}s")
            raise DeliveryError(f"Webhook timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            logger.error(f"Webhook error: {e}")
            raise DeliveryError(f"Webhook request failed: {e}") from e

        logger.debug(f"Webhook responded {response.status_code}")
        return response.text
