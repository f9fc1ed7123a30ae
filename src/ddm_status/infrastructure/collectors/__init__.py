"""
ddm-status infrastructure -- System collectors.

Thin adapters that read the raw inputs of a refresh from the running
machine.  Each collector either returns its reading or raises
``CollectorError`` (``PreferencesError`` for a broken preference file); the
refresher substitutes a placeholder and carries on.

Classes exported:
    Collectors        -- protocol the refresher depends on.
    SystemCollectors  -- the real implementation, driven by ``Settings``.
"""

from __future__ import annotations

import platform
from datetime import datetime
from pathlib import Path
from typing import Protocol

import psutil
import structlog

from ddm_status.config import Settings
from ddm_status.domain.entities.system_health import DiskSpace
from ddm_status.domain.value_objects.preferences import Preferences
from ddm_status.shared.exceptions import CollectorError, PreferencesError

logger = structlog.get_logger(__name__)

__all__ = ["Collectors", "SystemCollectors", "load_preferences"]


class Collectors(Protocol):
    """Sources of every input a refresh needs."""

    def installed_version(self) -> str: ...

    def enforcement_log(self) -> str: ...

    def disk_space(self) -> DiskSpace: ...

    def boot_time(self) -> datetime: ...

    def update_staged(self) -> bool: ...

    def preferences(self) -> Preferences: ...


def load_preferences(managed_path: Path, local_path: Path) -> Preferences:
    """Load preferences, the managed file taking priority over the local one.

    The first existing file is used even if it turns out to be invalid; a
    missing pair of files yields defaults.
    """
    for source, path in (("managed", managed_path), ("local", local_path)):
        try:
            found = path.is_file()
        except OSError as exc:
            raise PreferencesError(
                f"Cannot inspect preference file {path}: {exc}",
                context={"path": str(path), "source": source},
            ) from exc
        if found:
            logger.debug("preferences_source_selected", source=source, path=str(path))
            return Preferences.from_json_file(path)
    logger.debug("preferences_using_defaults")
    return Preferences()


class SystemCollectors:
    """Collectors reading the local macOS machine."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def installed_version(self) -> str:
        release, _, _ = platform.mac_ver()
        if not release:
            raise CollectorError(
                "macOS product version unavailable",
                context={"platform": platform.system()},
            )
        return release

    def enforcement_log(self) -> str:
        path = self._settings.install_log_path
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise CollectorError(
                f"Cannot read enforcement log {path}: {exc}",
                context={"path": str(path)},
            ) from exc
        logger.debug("enforcement_log_read", path=str(path), size=len(raw))
        return raw.decode("utf-8", errors="replace")

    def disk_space(self) -> DiskSpace:
        path = self._settings.disk_path
        try:
            usage = psutil.disk_usage(str(path))
        except OSError as exc:
            raise CollectorError(
                f"Cannot read disk usage of {path}: {exc}",
                context={"path": str(path)},
            ) from exc
        return DiskSpace(free_bytes=usage.free, total_bytes=usage.total)

    def boot_time(self) -> datetime:
        try:
            return datetime.fromtimestamp(psutil.boot_time())
        except (OSError, RuntimeError) as exc:
            raise CollectorError(f"Cannot read boot time: {exc}") from exc

    def update_staged(self) -> bool:
        marker = self._settings.staged_update_marker
        try:
            return marker.exists()
        except OSError as exc:
            raise CollectorError(
                f"Cannot inspect staged update marker {marker}: {exc}",
                context={"path": str(marker)},
            ) from exc

    def preferences(self) -> Preferences:
        return load_preferences(
            self._settings.managed_preferences_path,
            self._settings.local_preferences_path,
        )
