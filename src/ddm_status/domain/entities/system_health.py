"""Disk and uptime readings with their health checks."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

_BYTES_PER_GB = 1_000_000_000


@dataclass(frozen=True, slots=True)
class DiskSpace:
    """Free and total capacity of the boot volume, in bytes."""

    free_bytes: int = 0
    total_bytes: int = 0

    def __post_init__(self) -> None:
        if self.free_bytes < 0 or self.total_bytes < 0:
            raise ValueError(
                f"Disk sizes must be non-negative, got free={self.free_bytes} "
                f"total={self.total_bytes}"
            )

    @property
    def free_gb(self) -> float:
        return self.free_bytes / _BYTES_PER_GB

    @property
    def free_percent(self) -> float:
        if self.total_bytes == 0:
            return 0.0
        return self.free_bytes / self.total_bytes * 100

    def is_ok(self, minimum_percent: int) -> bool:
        """True when the free share meets *minimum_percent*."""
        return self.free_percent >= minimum_percent

    def describe(self) -> str:
        return f"{self.free_gb:.1f} GB ({self.free_percent:.0f}%)"

    def to_dict(self) -> dict[str, Any]:
        return {
            "free_bytes": self.free_bytes,
            "total_bytes": self.total_bytes,
            "free_gb": round(self.free_gb, 1),
            "free_percent": round(self.free_percent, 1),
        }


@dataclass(frozen=True, slots=True)
class Uptime:
    """Time since the last boot, counted in calendar days."""

    boot_time: datetime | None = None
    now: datetime | None = None

    @property
    def days_since_reboot(self) -> int:
        if self.boot_time is None or self.now is None:
            return 0
        return max((self.now.date() - self.boot_time.date()).days, 0)

    def is_ok(self, excessive_days: int) -> bool:
        """True unless the machine has been up *excessive_days* or longer.

        A threshold of ``0`` disables the check.
        """
        return excessive_days == 0 or self.days_since_reboot < excessive_days

    def describe(self) -> str:
        days = self.days_since_reboot
        return "Today" if days == 0 else f"{days} day(s) ago"

    def to_dict(self) -> dict[str, Any]:
        return {
            "boot_time": self.boot_time.isoformat() if self.boot_time else None,
            "days_since_reboot": self.days_since_reboot,
        }
