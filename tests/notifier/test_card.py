"""Tests for the adaptive card builder."""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Any

import pytest

from crashlytics_teams_notifier.notifier.card import (
    ADAPTIVE_CARD_CONTENT_TYPE,
    UNKNOWN_ISSUE_TITLE,
    build_card,
    build_test_card,
)
from crashlytics_teams_notifier.notifier.models import AccentColor, CardSpec, Fact

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def sample_spec() -> CardSpec:
    """Create a sample card spec."""
    return CardSpec(
        emoji="🔥",
        headline="Crashlytics Velocity Alert",
        subheadline="A crash issue is rapidly impacting users",
        issue_title="NPE",
        issue_subtitle="at Foo.bar",
        facts=(
            Fact("🆔 Issue ID", "I1"),
            Fact("📦 App ID", "app1"),
        ),
        console_link="https://console.firebase.google.com/project/_/crashlytics/app/app1/issues/I1",
        accent_color=AccentColor.ATTENTION,
    )


def _content(message: dict[str, Any]) -> dict[str, Any]:
    content: dict[str, Any] = message["attachments"][0]["content"]
    return content


# ============================================================================
# build_card Tests
# ============================================================================


class TestBuildCard:
    """Tests for build_card."""

    def test_envelope(self, sample_spec: CardSpec) -> None:
        """Message uses the Teams adaptive card envelope."""
        message = build_card(sample_spec)

        assert message["type"] == "message"
        attachments = message["attachments"]
        assert isinstance(attachments, list)
        assert len(attachments) == 1
        assert attachments[0]["contentType"] == ADAPTIVE_CARD_CONTENT_TYPE

        content = _content(message)
        assert content["$schema"] == "http://adaptivecards.io/schemas/adaptive-card.json"
        assert content["type"] == "AdaptiveCard"
        assert content["version"] == "1.4"

    def test_block_order(self, sample_spec: CardSpec) -> None:
        """Body is header, title, subtitle, separator, facts."""
        body = _content(build_card(sample_spec))["body"]

        assert [block["type"] for block in body] == [
            "ColumnSet",
            "TextBlock",
            "TextBlock",
            "ColumnSet",
            "FactSet",
        ]
        assert body[3] == {
            "type": "ColumnSet",
            "separator": True,
            "spacing": "Medium",
            "columns": [],
        }

    def test_header(self, sample_spec: CardSpec) -> None:
        """Header shows the emoji beside the colored headline."""
        header = _content(build_card(sample_spec))["body"][0]
        emoji_column, text_column = header["columns"]

        assert emoji_column["width"] == "auto"
        assert emoji_column["items"] == [{"type": "TextBlock", "text": "🔥", "size": "ExtraLarge"}]
        assert text_column["width"] == "stretch"
        assert text_column["items"][0] == {
            "type": "TextBlock",
            "text": "Crashlytics Velocity Alert",
            "weight": "Bolder",
            "size": "Large",
            "color": "Attention",
        }
        assert text_column["items"][1] == {
            "type": "TextBlock",
            "text": "A crash issue is rapidly impacting users",
            "spacing": "None",
            "isSubtle": True,
        }

    def test_issue_blocks(self, sample_spec: CardSpec) -> None:
        """Issue title and subtitle blocks carry their styles."""
        body = _content(build_card(sample_spec))["body"]

        assert body[1] == {
            "type": "TextBlock",
            "text": "NPE",
            "weight": "Bolder",
            "size": "Medium",
            "wrap": True,
            "spacing": "Medium",
        }
        assert body[2] == {
            "type": "TextBlock",
            "text": "at Foo.bar",
            "isSubtle": True,
            "wrap": True,
            "spacing": "None",
        }

    @pytest.mark.parametrize("subtitle", [None, ""])
    def test_subtitle_omitted(self, sample_spec: CardSpec, subtitle: str | None) -> None:
        """Empty subtitles drop the block instead of rendering it empty."""
        body = _content(build_card(replace(sample_spec, issue_subtitle=subtitle)))["body"]

        assert len(body) == 4
        assert [block["type"] for block in body] == [
            "ColumnSet",
            "TextBlock",
            "ColumnSet",
            "FactSet",
        ]

    @pytest.mark.parametrize("title", [None, ""])
    def test_unknown_issue_title(self, sample_spec: CardSpec, title: str | None) -> None:
        """Missing issue titles are replaced."""
        body = _content(build_card(replace(sample_spec, issue_title=title)))["body"]
        assert body[1]["text"] == UNKNOWN_ISSUE_TITLE

    def test_facts_in_order(self, sample_spec: CardSpec) -> None:
        """Facts keep their given order."""
        fact_set = _content(build_card(sample_spec))["body"][-1]
        assert fact_set == {
            "type": "FactSet",
            "facts": [
                {"title": "🆔 Issue ID", "value": "I1"},
                {"title": "📦 App ID", "value": "app1"},
            ],
        }

    def test_action(self, sample_spec: CardSpec) -> None:
        """A single action opens the console link."""
        actions = _content(build_card(sample_spec))["actions"]
        assert actions == [
            {
                "type": "Action.OpenUrl",
                "title": "🔍 View in Firebase Console",
                "url": sample_spec.console_link,
            }
        ]

    def test_json_serializable(self, sample_spec: CardSpec) -> None:
        """Output serializes to JSON with the accent as a plain string."""
        encoded = json.dumps(build_card(sample_spec))
        assert '"color": "Attention"' in encoded


class TestBuildTestCard:
    """Tests for build_test_card."""

    def test_minimal_card(self) -> None:
        """Test card is a single text block without actions."""
        message = build_test_card()
        content = _content(message)

        assert message["type"] == "message"
        assert len(content["body"]) == 1
        assert content["body"][0]["type"] == "TextBlock"
        assert "actions" not in content
