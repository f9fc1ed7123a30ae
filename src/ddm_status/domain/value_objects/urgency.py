"""Urgency bands for a pending enforced update.

The band drives the colour of the status badge and of the "days remaining"
figure shown to the user.
"""
from __future__ import annotations

import enum

# ---------------------------------------------------------------------------
# Day thresholds, inclusive upper bounds checked in order.
# ---------------------------------------------------------------------------
_DAY_BANDS: list[tuple[int, str]] = [
    (1, "critical"),
    (3, "high"),
    (7, "medium"),
]

_COLOURS: dict[str, str] = {
    "none": "green",
    "critical": "red",
    "high": "orange",
    "medium": "yellow",
    "low": "blue",
    "unknown": "gray",
}

BADGE_UP_TO_DATE = "✓"
BADGE_UNKNOWN = "–"


class Urgency(str, enum.Enum):
    """How close the machine is to a forced update.

    Values:
        NONE: The installed OS satisfies the enforcement.
        CRITICAL: One day or less left (including overdue).
        HIGH: Two or three days left.
        MEDIUM: Four to seven days left.
        LOW: More than a week left.
        UNKNOWN: An update is required but the deadline is unknown.
    """

    NONE = "none"
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"

    @property
    def colour(self) -> str:
        """Display colour name for this band."""
        return _COLOURS[self.value]

    @property
    def is_pending(self) -> bool:
        return self is not Urgency.NONE

    @classmethod
    def from_days(cls, days_remaining: int | None) -> Urgency:
        """Map days remaining to a band; ``None`` means the deadline is unknown."""
        if days_remaining is None:
            return cls.UNKNOWN
        for limit, name in _DAY_BANDS:
            if days_remaining <= limit:
                return cls(name)
        return cls.LOW

    @classmethod
    def for_status(cls, is_up_to_date: bool, days_remaining: int | None) -> Urgency:
        if is_up_to_date:
            return cls.NONE
        return cls.from_days(days_remaining)


def badge_label(is_up_to_date: bool, days_remaining: int | None) -> str:
    """Short label drawn on the status badge: a tick, a day count, or a dash."""
    if is_up_to_date:
        return BADGE_UP_TO_DATE
    if days_remaining is not None:
        return str(days_remaining)
    return BADGE_UNKNOWN
