"""Exceptions raised while delivering notifications."""

from __future__ import annotations


class DeliveryError(Exception):
    """Raised when a webhook delivery fails.

    Attributes:
        status_code: HTTP status returned by the endpoint, or None on transport errors.
        body: Response body, if one was received.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class WebhookNotConfiguredError(Exception):
    """Raised when no webhook URL is available at delivery time."""
