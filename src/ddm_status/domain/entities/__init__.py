"""Domain entities for the DDM status tool."""
from __future__ import annotations

from ddm_status.domain.entities.enforcement import EnforcementRecord, EnforcementStatus
from ddm_status.domain.entities.snapshot import StatusSnapshot, format_deadline
from ddm_status.domain.entities.system_health import DiskSpace, Uptime

__all__: list[str] = [
    "DiskSpace",
    "EnforcementRecord",
    "EnforcementStatus",
    "StatusSnapshot",
    "Uptime",
    "format_deadline",
]
