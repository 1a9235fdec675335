"""Microsoft Teams adaptive card builder.

This module renders a CardSpec into the Teams incoming-webhook message
envelope. Field names and values are fixed by the adaptive card schema.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from crashlytics_teams_notifier.notifier.models import CardSpec, Fact

# Adaptive card envelope
ADAPTIVE_CARD_CONTENT_TYPE = "application/vnd.microsoft.card.adaptive"
ADAPTIVE_CARD_SCHEMA = "http://adaptivecards.io/schemas/adaptive-card.json"
ADAPTIVE_CARD_VERSION = "1.4"

UNKNOWN_ISSUE_TITLE = "Unknown issue"
VIEW_IN_CONSOLE_TITLE = "🔍 View in Firebase Console"


def wrap_card(body: list[dict[str, object]], actions: list[dict[str, object]]) -> dict[str, object]:
    """Wrap card body and actions in the Teams message envelope."""
    content: dict[str, object] = {
        "$schema": ADAPTIVE_CARD_SCHEMA,
        "type": "AdaptiveCard",
        "version": ADAPTIVE_CARD_VERSION,
        "body": body,
    }
    if actions:
        content["actions"] = actions

    return {
        "type": "message",
        "attachments": [
            {
                "contentType": ADAPTIVE_CARD_CONTENT_TYPE,
                "content": content,
            }
        ],
    }


def _header_block(spec: CardSpec) -> dict[str, object]:
    return {
        "type": "ColumnSet",
        "columns": [
            {
                "type": "Column",
                "width": "auto",
                "items": [{"type": "TextBlock", "text": spec.emoji, "size": "ExtraLarge"}],
            },
            {
                "type": "Column",
                "width": "stretch",
                "items": [
                    {
                        "type": "TextBlock",
                        "text": spec.headline,
                        "weight": "Bolder",
                        "size": "Large",
                        "color": spec.accent_color.value,
                    },
                    {
                        "type": "TextBlock",
                        "text": spec.subheadline,
                        "spacing": "None",
                        "isSubtle": True,
                    },
                ],
            },
        ],
    }


def _fact_set_block(facts: tuple[Fact, ...]) -> dict[str, object]:
    return {
        "type": "FactSet",
        "facts": [{"title": fact.label, "value": fact.value} for fact in facts],
    }


def build_card(spec: CardSpec) -> dict[str, object]:
    """Build a Teams adaptive card message from a card spec.

    Never raises: an absent issue title renders as "Unknown issue" and an
    empty subtitle drops the subtitle block entirely.

    Args:
        spec: Normalized card contents.

    Returns:
        JSON-serializable Teams message document.
    """
    body: list[dict[str, object]] = [
        _header_block(spec),
        {
            "type": "TextBlock",
            "text": spec.issue_title or UNKNOWN_ISSUE_TITLE,
            "weight": "Bolder",
            "size": "Medium",
            "wrap": True,
            "spacing": "Medium",
        },
    ]

    if spec.issue_subtitle:
        body.append(
            {
                "type": "TextBlock",
                "text": spec.issue_subtitle,
                "isSubtle": True,
                "wrap": True,
                "spacing": "None",
            }
        )

    # Separator
    body.append({"type": "ColumnSet", "separator": True, "spacing": "Medium", "columns": []})
    body.append(_fact_set_block(spec.facts))

    actions: list[dict[str, object]] = [
        {
            "type": "Action.OpenUrl",
            "title": VIEW_IN_CONSOLE_TITLE,
            "url": spec.console_link,
        }
    ]

    return wrap_card(body, actions)


def build_test_card() -> dict[str, object]:
    """Build a minimal card for checking that the webhook is wired up."""
    body: list[dict[str, object]] = [
        {
            "type": "TextBlock",
            "text": "🔥 Test: Crashlytics velocity alert is working!",
            "weight": "Bolder",
            "size": "Large",
        }
    ]
    return wrap_card(body, [])
