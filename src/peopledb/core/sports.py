"""
Sport enumeration.

This module defines the closed set of sports a person can pick as a favorite.
Each sport has three representations that are kept apart:

- the canonical token (the enum value), which is what gets written to CSV;
- a human-readable display label;
- an emoji icon used by the front-ends.
"""

from enum import Enum
from typing import Optional


class Sport(str, Enum):
    """A favorite sport. The value is the canonical lowercase CSV token."""

    BASEBALL = "baseball"
    SOCCER = "soccer"
    BASKETBALL = "basketball"
    TENNIS = "tennis"
    GOLF = "golf"
    HOCKEY = "hockey"
    CRICKET = "cricket"
    RUGBY = "rugby"
    HANDBALL = "handball"
    FOOTBALL = "football"
    VOLLEYBALL = "volleyball"
    WATER_POLO = "water_polo"
    EQUESTRIAN = "equestrian"
    SWIMMING = "swimming"
    RUNNING = "running"
    CYCLING = "cycling"
    SKATING = "skating"
    SKATEBOARDING = "skateboarding"
    SURFING = "surfing"
    SKIING = "skiing"
    SNOWBOARDING = "snowboarding"
    ROWING = "rowing"
    WRESTLING = "wrestling"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Display label, e.g. 'Water polo'."""
        return SPORT_LABELS[self]

    @property
    def emoji(self) -> str:
        """Emoji icon, empty for Sport.OTHER."""
        return SPORT_EMOJI.get(self, "")

    @property
    def display(self) -> str:
        """Label prefixed with the icon, as shown in tables and combo boxes."""
        return f"{self.emoji} {self.label}".strip()

    @classmethod
    def lookup(cls, text: str) -> Optional["Sport"]:
        """
        Find a sport by token or display label, ignoring case.

        Spaces and hyphens are treated as underscores, so 'Water polo',
        'water-polo' and 'WATER_POLO' all resolve to Sport.WATER_POLO.

        Args:
            text: User or file input.

        Returns:
            The matching Sport, or None if nothing matches.
        """
        key = text.strip().lower().replace(" ", "_").replace("-", "_")
        return _LOOKUP.get(key)


# Display labels, in the order shown by the front-ends
SPORT_LABELS = {
    Sport.BASEBALL: "Baseball",
    Sport.SOCCER: "Soccer",
    Sport.BASKETBALL: "Basketball",
    Sport.TENNIS: "Tennis",
    Sport.GOLF: "Golf",
    Sport.HOCKEY: "Hockey",
    Sport.CRICKET: "Cricket",
    Sport.RUGBY: "Rugby",
    Sport.HANDBALL: "Handball",
    Sport.FOOTBALL: "Football",
    Sport.VOLLEYBALL: "Volleyball",
    Sport.WATER_POLO: "Water polo",
    Sport.EQUESTRIAN: "Equestrian",
    Sport.SWIMMING: "Swimming",
    Sport.RUNNING: "Running",
    Sport.CYCLING: "Cycling",
    Sport.SKATING: "Skating",
    Sport.SKATEBOARDING: "Skateboarding",
    Sport.SURFING: "Surfing",
    Sport.SKIING: "Skiing",
    Sport.SNOWBOARDING: "Snowboarding",
    Sport.ROWING: "Rowing",
    Sport.WRESTLING: "Wrestling",
    Sport.OTHER: "Other",
}

SPORT_EMOJI = {
    Sport.BASEBALL: "⚾",
    Sport.SOCCER: "⚽",
    Sport.BASKETBALL: "\U0001f3c0",
    Sport.TENNIS: "\U0001f3be",
    Sport.GOLF: "⛳",
    Sport.HOCKEY: "\U0001f3d2",
    Sport.CRICKET: "\U0001f3cf",
    Sport.RUGBY: "\U0001f3c9",
    Sport.HANDBALL: "\U0001f93e",
    Sport.FOOTBALL: "\U0001f3c8",
    Sport.VOLLEYBALL: "\U0001f3d0",
    Sport.WATER_POLO: "\U0001f93d",
    Sport.EQUESTRIAN: "\U0001f40e",
    Sport.SWIMMING: "\U0001f3ca",
    Sport.RUNNING: "\U0001f3c3",
    Sport.CYCLING: "\U0001f6b4",
    Sport.SKATING: "\U0001f6fc",
    Sport.SKATEBOARDING: "\U0001f6f9",
    Sport.SURFING: "\U0001f3c4",
    Sport.SKIING: "\U0001f3bf",
    Sport.SNOWBOARDING: "\U0001f3c2",
    Sport.ROWING: "\U0001f6a3",
    Sport.WRESTLING: "\U0001f93c",
}

_LOOKUP = {}
for _sport in Sport:
    _LOOKUP[_sport.value] = _sport
    _LOOKUP[SPORT_LABELS[_sport].lower().replace(" ", "_")] = _sport


def all_sports() -> list[Sport]:
    """
    Get every sport in display order.

    Returns:
        List of all Sport members, Sport.OTHER last.
    """
    return list(SPORT_LABELS.keys())


def known_sport_tokens() -> list[str]:
    """Canonical tokens of all sports, for help and error texts."""
    return [sport.value for sport in all_sports()]
