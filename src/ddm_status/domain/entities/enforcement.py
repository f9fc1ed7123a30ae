"""Enforcement entities produced by the evaluator.

An :class:`EnforcementRecord` is the parsed form of the most recent
``EnforcedInstallDate`` line of the install log.  An
:class:`EnforcementStatus` is the evaluation of that record against the
installed OS version at a given instant.  Both are immutable and rebuilt on
every refresh.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ddm_status.domain.value_objects.urgency import Urgency, badge_label
from ddm_status.domain.value_objects.version import Version


@dataclass(frozen=True, slots=True)
class EnforcementRecord:
    """Deadline and required version taken from one enforcement log line.

    Attributes:
        deadline: Naive local time by which the update must be installed.
        required_version: Minimum OS version demanded by the enforcement.
    """

    deadline: datetime
    required_version: Version

    def to_dict(self) -> dict[str, Any]:
        return {
            "deadline": self.deadline.isoformat(),
            "required_version": str(self.required_version),
        }


@dataclass(frozen=True, slots=True)
class EnforcementStatus:
    """Outcome of evaluating the latest enforcement against the installed OS.

    Attributes:
        is_up_to_date: True when no enforcement applies or the installed
            version satisfies it.
        days_remaining: Calendar days until the deadline, negative once it
            has passed; None when no enforcement was found.
        record: The enforcement the status was derived from, if any.
    """

    is_up_to_date: bool
    days_remaining: int | None = None
    record: EnforcementRecord | None = None

    @classmethod
    def up_to_date(cls) -> EnforcementStatus:
        """Status used whenever no usable enforcement entry exists."""
        return cls(is_up_to_date=True)

    # -- derived helpers ------------------------------------------------------

    @property
    def urgency(self) -> Urgency:
        return Urgency.for_status(self.is_up_to_date, self.days_remaining)

    @property
    def badge(self) -> str:
        """Label for the status badge: tick, day count, or dash."""
        return badge_label(self.is_up_to_date, self.days_remaining)

    @property
    def required_version(self) -> Version | None:
        return self.record.required_version if self.record else None

    @property
    def deadline(self) -> datetime | None:
        return self.record.deadline if self.record else None

    @property
    def is_overdue(self) -> bool:
        return (
            not self.is_up_to_date
            and self.days_remaining is not None
            and self.days_remaining < 0
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary for JSON output."""
        return {
            "is_up_to_date": self.is_up_to_date,
            "days_remaining": self.days_remaining,
            "urgency": self.urgency.value,
            "colour": self.urgency.colour,
            "badge": self.badge,
            "record": self.record.to_dict() if self.record else None,
        }
