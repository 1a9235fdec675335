"""Microsoft Teams incoming webhook channel implementation."""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx

from crashlytics_teams_notifier.notifier.errors import DeliveryError

logger = logging.getLogger(__name__)

WebhookUrlProvider = Callable[[], str]


class TeamsChannel:
    """Teams incoming webhook channel for sending adaptive cards.

    Makes exactly one POST per message. Failures are logged and raised as
    DeliveryError so the invoking platform records the invocation as failed.
    """

    def __init__(self, webhook_url: str | WebhookUrlProvider) -> None:
        """Initialize Teams channel.

        Args:
            webhook_url: Teams webhook URL, or a callable returning it. A
                callable is resolved on every send.
        """
        self._webhook_url = webhook_url
        self.name = "teams"

    def _resolve_webhook_url(self) -> str:
        if callable(self._webhook_url):
            return self._webhook_url()
        return self._webhook_url

    async def send(self, message: dict[str, object]) -> None:
        """Send a message document to the Teams webhook.

        Args:
            message: Teams message document, serialized as JSON.

        Raises:
            DeliveryError: On transport errors or a non-success response.
        """
        webhook_url = self._resolve_webhook_url()

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    webhook_url,
                    json=message,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.error(f"Failed to send Teams notification: {e}")
            raise DeliveryError(f"Teams webhook request failed: {e}") from e

        if not response.is_success:
            body = response.text
            logger.error(f"Failed to send Teams notification: {response.status_code} {body}")
            raise DeliveryError(
                f"Teams webhook returned {response.status_code}",
                status_code=response.status_code,
                body=body,
            )

        logger.info(f"Teams notification sent. Status: {response.status_code}")
