"""Crashlytics alert event models."""

from crashlytics_teams_notifier.events.models import (
    ALERT_TYPE_NEW_NONFATAL_ISSUE,
    ALERT_TYPE_VELOCITY,
    CrashlyticsIssue,
    NewNonfatalIssueEvent,
    VelocityAlertEvent,
    parse_timestamp,
)

__all__ = [
    "ALERT_TYPE_NEW_NONFATAL_ISSUE",
    "ALERT_TYPE_VELOCITY",
    "CrashlyticsIssue",
    "NewNonfatalIssueEvent",
    "VelocityAlertEvent",
    "parse_timestamp",
]
