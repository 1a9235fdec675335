"""Notification channel implementations."""

from crashlytics_teams_notifier.notifier.channels.teams import TeamsChannel, WebhookUrlProvider

__all__ = [
    "TeamsChannel",
    "WebhookUrlProvider",
]
