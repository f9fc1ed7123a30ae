"""Value objects for the DDM status domain layer.

Re-exports all public value objects so consumers can write::

    from ddm_status.domain.value_objects import Urgency, Version
"""
from __future__ import annotations

from ddm_status.domain.value_objects.preferences import PREFERENCE_DOMAIN, Preferences
from ddm_status.domain.value_objects.urgency import Urgency, badge_label
from ddm_status.domain.value_objects.version import Version, compare_versions

__all__: list[str] = [
    "PREFERENCE_DOMAIN",
    "Preferences",
    "Urgency",
    "Version",
    "badge_label",
    "compare_versions",
]
