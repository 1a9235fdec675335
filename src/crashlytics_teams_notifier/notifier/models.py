"""Data models for the notifier module."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AccentColor(str, Enum):
    """Adaptive card text colors used for the card headline."""

    ATTENTION = "Attention"
    WARNING = "Warning"
    GOOD = "Good"
    DEFAULT = "Default"


@dataclass(frozen=True)
class Fact:
    """A single label/value row in a card's fact table."""

    label: str
    value: str


@dataclass(frozen=True)
class CardSpec:
    """Normalized card contents, ready to be rendered as an adaptive card.

    Attributes:
        emoji: Large glyph shown in the header.
        headline: Bold header text, colored by ``accent_color``.
        subheadline: Subtle text under the headline.
        issue_title: Crash or error title. Rendered as "Unknown issue" when absent.
        issue_subtitle: Optional extra context. Omitted from the card when empty.
        facts: Rows of the fact table, in display order.
        console_link: Target of the "view in console" action.
        accent_color: Headline color.
    """

    emoji: str
    headline: str
    subheadline: str
    issue_title: str | None
    issue_subtitle: str | None
    facts: tuple[Fact, ...]
    console_link: str
    accent_color: AccentColor = AccentColor.DEFAULT
