"""Data models for Crashlytics alert events."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

logger = logging.getLogger(__name__)

# Firebase Alerts CloudEvent ``alerttype`` values
ALERT_TYPE_VELOCITY = "crashlytics.velocity"
ALERT_TYPE_NEW_NONFATAL_ISSUE = "crashlytics.newNonfatalIssue"


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an RFC 3339 string, epoch milliseconds or datetime.

    Returns None for missing or unparseable values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, int | float):
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except (OverflowError, OSError, ValueError):
        logger.debug(f"Ignoring unparseable createTime: {value!r}")
        return None


def _parse_float(value: Any) -> float | None:
    """Parse a finite number, returning None for anything else."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(result):
        return None
    return result


def _parse_count(value: Any) -> int | float | None:
    """Parse a count, keeping fractional values rather than truncating them."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    result = _parse_float(value)
    if result is not None and result.is_integer():
        return int(result)
    return result


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _split_cloud_event(cloud_event: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """Extract (app_id, payload) from a Firebase Alerts CloudEvent."""
    data = cloud_event.get("data") or {}
    app_id = cloud_event.get("appId") or cloud_event.get("appid") or data.get("appId") or ""
    payload = data.get("payload") or {}
    return str(app_id), payload


@dataclass(frozen=True)
class CrashlyticsIssue:
    """A Crashlytics issue as delivered in alert payloads."""

    id: str
    title: str | None = None
    subtitle: str | None = None
    app_version: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> CrashlyticsIssue:
        """Create a CrashlyticsIssue from a dictionary."""
        data = data or {}
        return cls(
            id=str(data.get("id") or ""),
            title=_optional_str(data.get("title")),
            subtitle=_optional_str(data.get("subtitle")),
            app_version=_optional_str(data.get("appVersion")),
        )


@dataclass(frozen=True)
class VelocityAlertEvent:
    """A crash issue rapidly impacting a share of user sessions.

    Attributes:
        app_id: Firebase application ID.
        issue: The issue that triggered the alert.
        create_time: When the alert was created, if reported.
        crash_count: Crashes within the velocity window.
        crash_percentage: Percentage of sessions affected.
        first_version: First app version in which the issue appeared.
    """

    app_id: str
    issue: CrashlyticsIssue
    create_time: datetime | None = None
    crash_count: int | float | None = None
    crash_percentage: float | None = None
    first_version: str | None = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any], app_id: str) -> VelocityAlertEvent:
        """Create a VelocityAlertEvent from an alert payload dictionary."""
        return cls(
            app_id=app_id,
            issue=CrashlyticsIssue.from_dict(payload.get("issue")),
            create_time=parse_timestamp(payload.get("createTime")),
            crash_count=_parse_count(payload.get("crashCount")),
            crash_percentage=_parse_float(payload.get("crashPercentage")),
            first_version=_optional_str(payload.get("firstVersion")),
        )

    @classmethod
    def from_cloud_event(cls, cloud_event: dict[str, Any]) -> VelocityAlertEvent:
        """Create a VelocityAlertEvent from a Firebase Alerts CloudEvent."""
        app_id, payload = _split_cloud_event(cloud_event)
        return cls.from_dict(payload, app_id)


@dataclass(frozen=True)
class NewNonfatalIssueEvent:
    """A non-fatal issue seen for the first time."""

    app_id: str
    issue: CrashlyticsIssue
    create_time: datetime | None = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any], app_id: str) -> NewNonfatalIssueEvent:
        """Create a NewNonfatalIssueEvent from an alert payload dictionary."""
        return cls(
            app_id=app_id,
            issue=CrashlyticsIssue.from_dict(payload.get("issue")),
            create_time=parse_timestamp(payload.get("createTime")),
        )

    @classmethod
    def from_cloud_event(cls, cloud_event: dict[str, Any]) -> NewNonfatalIssueEvent:
        """Create a NewNonfatalIssueEvent from a Firebase Alerts CloudEvent."""
        app_id, payload = _split_cloud_event(cloud_event)
        return cls.from_dict(payload, app_id)
