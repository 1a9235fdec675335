"""Notifier layer - Adaptive card formatting and Teams delivery."""

from crashlytics_teams_notifier.notifier.card import build_card, build_test_card
from crashlytics_teams_notifier.notifier.channels.teams import TeamsChannel
from crashlytics_teams_notifier.notifier.errors import DeliveryError, WebhookNotConfiguredError
from crashlytics_teams_notifier.notifier.formatter import CrashlyticsFormatter
from crashlytics_teams_notifier.notifier.models import AccentColor, CardSpec, Fact

__all__ = [
    "AccentColor",
    "CardSpec",
    "CrashlyticsFormatter",
    "DeliveryError",
    "Fact",
    "TeamsChannel",
    "WebhookNotConfiguredError",
    "build_card",
    "build_test_card",
]
