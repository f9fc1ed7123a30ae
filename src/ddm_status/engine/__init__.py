"""
ddm-status engine.

Classes exported:
    EnforcementEvaluator -- parses the latest DDM enforcement entry of the
                            install log and evaluates it against the
                            installed OS version.
    StatusRefresher      -- collects every input, builds a StatusSnapshot and
                            keeps it fresh on a periodic loop.
"""

from __future__ import annotations

from ddm_status.engine.evaluator import EnforcementEvaluator
from ddm_status.engine.refresher import StatusRefresher

__all__ = ["EnforcementEvaluator", "StatusRefresher"]
