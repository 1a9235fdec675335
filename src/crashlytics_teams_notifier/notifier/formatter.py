"""Crashlytics alert formatter.

This module maps Crashlytics alert events onto CardSpec values: fixed
headlines per alert kind, a fixed fact order, display strings for every
fact, and the Firebase Console deep link.
"""

from __future__ import annotations

from datetime import datetime

from crashlytics_teams_notifier.events.models import NewNonfatalIssueEvent, VelocityAlertEvent
from crashlytics_teams_notifier.notifier.models import AccentColor, CardSpec, Fact

FIREBASE_CONSOLE_ISSUE_URL = (
    "https://console.firebase.google.com/project/_/crashlytics/app/{app_id}/issues/{issue_id}"
)

# Placeholder for absent values
NOT_AVAILABLE = "N/A"

# strftime format for the process locale's date and time representation
DISPLAY_TIME_FORMAT = "%c"

VELOCITY_EMOJI = "🔥"
VELOCITY_HEADLINE = "Crashlytics Velocity Alert"
VELOCITY_SUBHEADLINE = "A crash issue is rapidly impacting users"

NEW_NONFATAL_EMOJI = "⚠️"
NEW_NONFATAL_HEADLINE = "New Non-Fatal Issue Detected"
NEW_NONFATAL_SUBHEADLINE = "Crashlytics found a new non-fatal error in your app"


def build_console_link(app_id: str, issue_id: str) -> str:
    """Build the Firebase Console URL for a Crashlytics issue."""
    return FIREBASE_CONSOLE_ISSUE_URL.format(app_id=app_id, issue_id=issue_id)


def value_or_na(value: str | None) -> str:
    """Return the value, or "N/A" if it is None or empty."""
    return value if value else NOT_AVAILABLE


def format_number(value: int | float | None) -> str:
    """Format a number for display, dropping a trailing ``.0`` on whole floats."""
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_percentage(value: int | float | None) -> str:
    """Format a percentage value with a ``%`` suffix."""
    if value is None:
        return NOT_AVAILABLE
    return f"{format_number(value)}%"


def format_alert_time(value: datetime | None, now: datetime | None = None) -> str:
    """Format an alert timestamp in local time.

    When the event carries no timestamp the current time is used instead,
    so the card then shows delivery time rather than detection time.

    Args:
        value: Event timestamp, naive values are taken as local time.
        now: Override for the current time.

    Returns:
        Locale-formatted date-time string.
    """
    if value is None:
        value = now or datetime.now()
    return value.astimezone().strftime(DISPLAY_TIME_FORMAT)


class CrashlyticsFormatter:
    """Formats Crashlytics alert events into card specs."""

    def format_velocity_alert(self, event: VelocityAlertEvent) -> CardSpec:
        """Format a velocity alert.

        Args:
            event: The velocity alert to format.

        Returns:
            CardSpec with the velocity fact set.
        """
        issue = event.issue
        facts = (
            Fact("💥 Crash Count", format_number(event.crash_count)),
            Fact("📊 Sessions Affected", format_percentage(event.crash_percentage)),
            Fact("📱 App Version", value_or_na(issue.app_version)),
            Fact("🏷️ First Seen In", value_or_na(event.first_version)),
            Fact("🆔 Issue ID", value_or_na(issue.id)),
            Fact("📦 App ID", value_or_na(event.app_id)),
            Fact("🕐 Alert Time", format_alert_time(event.create_time)),
        )

        return CardSpec(
            emoji=VELOCITY_EMOJI,
            headline=VELOCITY_HEADLINE,
            subheadline=VELOCITY_SUBHEADLINE,
            issue_title=issue.title,
            issue_subtitle=issue.subtitle,
            facts=facts,
            console_link=build_console_link(event.app_id, issue.id),
            accent_color=AccentColor.ATTENTION,
        )

    def format_new_nonfatal_issue(self, event: NewNonfatalIssueEvent) -> CardSpec:
        """Format a new non-fatal issue alert."""
        issue = event.issue
        facts = (
            Fact("🆔 Issue ID", value_or_na(issue.id)),
            Fact("📱 App Version", value_or_na(issue.app_version)),
            Fact("📦 App ID", value_or_na(event.app_id)),
            Fact("🕐 Detected At", format_alert_time(event.create_time)),
        )

        return CardSpec(
            emoji=NEW_NONFATAL_EMOJI,
            headline=NEW_NONFATAL_HEADLINE,
            subheadline=NEW_NONFATAL_SUBHEADLINE,
            issue_title=issue.title,
            issue_subtitle=issue.subtitle,
            facts=facts,
            console_link=build_console_link(event.app_id, issue.id),
            accent_color=AccentColor.WARNING,
        )
