"""Crashlytics alert handlers.

Each handler turns one alert event into one Teams message and awaits its
delivery. Nothing is kept between invocations, so a handler instance can
serve concurrent events.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Protocol

from crashlytics_teams_notifier.events.models import (
    ALERT_TYPE_NEW_NONFATAL_ISSUE,
    ALERT_TYPE_VELOCITY,
    NewNonfatalIssueEvent,
    VelocityAlertEvent,
)
from crashlytics_teams_notifier.notifier.card import build_card
from crashlytics_teams_notifier.notifier.formatter import CrashlyticsFormatter

if TYPE_CHECKING:
    from crashlytics_teams_notifier.notifier.models import CardSpec

logger = logging.getLogger(__name__)


class UnsupportedAlertTypeError(ValueError):
    """Raised when a CloudEvent carries an alert type with no handler."""


class MessageChannel(Protocol):
    """Protocol for message delivery channels."""

    name: str

    async def send(self, message: dict[str, object]) -> None:
        """Send a message document. Raises DeliveryError on failure."""
        ...


class CrashlyticsAlertHandler:
    """Forwards Crashlytics alerts to a message channel."""

    def __init__(
        self,
        channel: MessageChannel,
        formatter: CrashlyticsFormatter | None = None,
        *,
        dry_run: bool = False,
    ) -> None:
        """Initialize the handler.

        Args:
            channel: Channel the built cards are delivered to.
            formatter: Event formatter, defaults to CrashlyticsFormatter.
            dry_run: Log built cards instead of sending them.
        """
        self.channel = channel
        self.formatter = formatter or CrashlyticsFormatter()
        self.dry_run = dry_run

    async def _deliver(self, spec: CardSpec) -> None:
        message = build_card(spec)

        if self.dry_run:
            logger.info(
                f"Dry run, not sending to {self.channel.name}:\n"
                f"{json.dumps(message, indent=2, ensure_ascii=False)}"
            )
            return

        await self.channel.send(message)

    async def handle_velocity_alert(self, event: VelocityAlertEvent) -> None:
        """Send a velocity alert card.

        Raises:
            DeliveryError: If the channel fails to deliver the card.
        """
        logger.info(f"Crashlytics velocity alert received: {event}")
        await self._deliver(self.formatter.format_velocity_alert(event))

    async def handle_new_nonfatal_issue(self, event: NewNonfatalIssueEvent) -> None:
        """Send a new non-fatal issue card.

        Raises:
            DeliveryError: If the channel fails to deliver the card.
        """
        logger.info(f"Crashlytics new non-fatal issue received: {event}")
        await self._deliver(self.formatter.format_new_nonfatal_issue(event))

    async def handle_cloud_event(
        self,
        cloud_event: dict[str, Any],
        alert_type: str | None = None,
    ) -> None:
        """Route a Firebase Alerts CloudEvent to the matching handler.

        Args:
            cloud_event: The CloudEvent as a dictionary.
            alert_type: Overrides the event's ``alerttype`` attribute.

        Raises:
            UnsupportedAlertTypeError: If the alert type has no handler.
            DeliveryError: If the channel fails to deliver the card.
        """
        alert_type = alert_type or cloud_event.get("alerttype") or cloud_event.get("alertType")

        if alert_type == ALERT_TYPE_VELOCITY:
            await self.handle_velocity_alert(VelocityAlertEvent.from_cloud_event(cloud_event))
        elif alert_type == ALERT_TYPE_NEW_NONFATAL_ISSUE:
            await self.handle_new_nonfatal_issue(
                NewNonfatalIssueEvent.from_cloud_event(cloud_event)
            )
        else:
            raise UnsupportedAlertTypeError(f"Unsupported alert type: {alert_type!r}")
