"""Status snapshot entity.

A :class:`StatusSnapshot` is everything one refresh learned about the
machine.  Snapshots are immutable: a refresh builds a new one and the holder
swaps it in whole, so a reader never observes a half-updated state.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ddm_status.domain.entities.enforcement import EnforcementStatus
from ddm_status.domain.entities.system_health import DiskSpace, Uptime
from ddm_status.domain.value_objects.preferences import Preferences
from ddm_status.domain.value_objects.urgency import BADGE_UNKNOWN, Urgency

INSTALLED_VERSION_PLACEHOLDER = BADGE_UNKNOWN


def format_deadline(deadline: datetime | None) -> str:
    """Long date with short time, e.g. ``March 13, 2026 at 12:00``."""
    if deadline is None:
        return BADGE_UNKNOWN
    return f"{deadline:%B} {deadline.day}, {deadline:%Y} at {deadline:%H:%M}"


@dataclass(frozen=True, slots=True)
class StatusSnapshot:
    """Result of one refresh of every status input."""

    installed_version: str
    enforcement: EnforcementStatus
    refreshed_at: datetime
    disk: DiskSpace = field(default_factory=DiskSpace)
    uptime: Uptime = field(default_factory=Uptime)
    update_staged: bool = False
    preferences: Preferences = field(default_factory=Preferences)

    # -- derived helpers ------------------------------------------------------

    @property
    def is_up_to_date(self) -> bool:
        return self.enforcement.is_up_to_date

    @property
    def urgency(self) -> Urgency:
        return self.enforcement.urgency

    @property
    def badge(self) -> str:
        return self.enforcement.badge

    @property
    def disk_space_ok(self) -> bool:
        return self.disk.is_ok(self.preferences.minimum_free_percent)

    @property
    def uptime_ok(self) -> bool:
        return self.uptime.is_ok(self.preferences.excessive_uptime_days)

    @property
    def deadline_formatted(self) -> str:
        return format_deadline(self.enforcement.deadline)

    @property
    def headline(self) -> str:
        return "macOS is up to date" if self.is_up_to_date else "Update required"

    def to_dict(self) -> dict[str, Any]:
        """Serialize the snapshot for JSON output."""
        return {
            "installed_version": self.installed_version,
            "headline": self.headline,
            "enforcement": self.enforcement.to_dict(),
            "deadline_formatted": self.deadline_formatted,
            "update_staged": self.update_staged,
            "disk": {**self.disk.to_dict(), "ok": self.disk_space_ok},
            "uptime": {**self.uptime.to_dict(), "ok": self.uptime_ok},
            "preferences": self.preferences.to_dict(),
            "refreshed_at": self.refreshed_at.isoformat(),
        }
