"""Shared test fixtures."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import pytest

from crashlytics_teams_notifier.config import clear_settings_cache
from crashlytics_teams_notifier.events.models import (
    CrashlyticsIssue,
    NewNonfatalIssueEvent,
    VelocityAlertEvent,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

# 2026-03-01T12:30:00Z
CREATE_TIME_MS = 1772368200000


@pytest.fixture(autouse=True)
def clear_cache(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate each test from ambient settings."""
    for var in ("TEAMS_WEBHOOK_URL", "LOG_LEVEL", "DRY_RUN"):
        monkeypatch.delenv(var, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def full_issue() -> CrashlyticsIssue:
    """Create an issue with every field populated."""
    return CrashlyticsIssue(
        id="I1",
        title="NPE",
        subtitle="at Foo.bar",
        app_version="2.1.0",
    )


@pytest.fixture
def velocity_event(full_issue: CrashlyticsIssue) -> VelocityAlertEvent:
    """Create a fully populated velocity alert."""
    return VelocityAlertEvent(
        app_id="app1",
        issue=full_issue,
        create_time=datetime.fromtimestamp(CREATE_TIME_MS / 1000, tz=UTC),
        crash_count=42,
        crash_percentage=3.5,
        first_version="2.0.9",
    )


@pytest.fixture
def nonfatal_event(full_issue: CrashlyticsIssue) -> NewNonfatalIssueEvent:
    """Create a fully populated new non-fatal issue alert."""
    return NewNonfatalIssueEvent(
        app_id="app1",
        issue=full_issue,
        create_time=datetime(2026, 3, 1, 12, 30, tzinfo=UTC),
    )


@pytest.fixture
def velocity_cloud_event() -> dict[str, Any]:
    """Create a Firebase Alerts CloudEvent for a velocity alert."""
    return {
        "specversion": "1.0",
        "type": "google.firebase.firebasealerts.alerts.v1.published",
        "source": "//firebasealerts.googleapis.com/projects/1234",
        "alerttype": "crashlytics.velocity",
        "appId": "app1",
        "data": {
            "createTime": "2026-03-01T12:30:00Z",
            "payload": {
                "@type": (
                    "type.googleapis.com/google.events.firebase.firebasealerts.v1."
                    "CrashlyticsVelocityAlertPayload"
                ),
                "issue": {
                    "id": "I1",
                    "title": "NPE",
                    "subtitle": "at Foo.bar",
                    "appVersion": "2.1.0",
                },
                "createTime": "2026-03-01T12:30:00Z",
                "crashCount": 42,
                "crashPercentage": 3.5,
                "firstVersion": "2.0.9",
            },
        },
    }


@pytest.fixture
def nonfatal_cloud_event() -> dict[str, Any]:
    """Create a Firebase Alerts CloudEvent for a new non-fatal issue."""
    return {
        "specversion": "1.0",
        "type": "google.firebase.firebasealerts.alerts.v1.published",
        "alerttype": "crashlytics.newNonfatalIssue",
        "appId": "app2",
        "data": {
            "payload": {
                "issue": {
                    "id": "N7",
                    "title": "IOException",
                    "appVersion": "3.0.0",
                },
            },
        },
    }
