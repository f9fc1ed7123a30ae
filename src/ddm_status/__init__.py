"""ddm-status: software-update enforcement status for managed Macs.

Parses the declarative device management (DDM) enforcement entries that
``softwareupdated`` writes to ``/var/log/install.log``, compares the
required OS version with the installed one, and combines the result with
disk and uptime health into a :class:`StatusSnapshot` for display.
"""
from __future__ import annotations

from ddm_status.domain.entities.enforcement import EnforcementRecord, EnforcementStatus
from ddm_status.domain.entities.snapshot import StatusSnapshot
from ddm_status.domain.value_objects.version import Version, compare_versions
from ddm_status.engine.evaluator import (
    EnforcementEvaluator,
    evaluate,
    parse_latest_enforcement,
)

__version__ = "1.0.0"

__all__ = [
    "EnforcementEvaluator",
    "EnforcementRecord",
    "EnforcementStatus",
    "StatusSnapshot",
    "Version",
    "compare_versions",
    "evaluate",
    "parse_latest_enforcement",
]
