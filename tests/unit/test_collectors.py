"""Tests for the system collectors and preference lookup."""
from __future__ import annotations

import json
from datetime import datetime

import pytest

from ddm_status.domain.value_objects.preferences import Preferences
from ddm_status.infrastructure import collectors as collectors_mod
from ddm_status.infrastructure.collectors import SystemCollectors, load_preferences
from ddm_status.shared.exceptions import CollectorError, PreferencesError


def _write_prefs(path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


# --- installed_version ---


def test_installed_version_from_platform(settings, monkeypatch):
    monkeypatch.setattr(collectors_mod.platform, "mac_ver", lambda: ("26.2", ("", "", ""), "arm64"))
    assert SystemCollectors(settings).installed_version() == "26.2"


def test_installed_version_unavailable(settings, monkeypatch):
    monkeypatch.setattr(collectors_mod.platform, "mac_ver", lambda: ("", ("", "", ""), ""))
    with pytest.raises(CollectorError, match="product version unavailable"):
        SystemCollectors(settings).installed_version()


# --- enforcement_log ---


def test_enforcement_log_read(settings, enforcement_log):
    settings.install_log_path.write_text(enforcement_log, encoding="utf-8")
    assert SystemCollectors(settings).enforcement_log() == enforcement_log


def test_enforcement_log_invalid_utf8_is_replaced(settings):
    settings.install_log_path.write_bytes(b"bad \xff byte\n|EnforcedInstallDate:x|")
    text = SystemCollectors(settings).enforcement_log()
    assert "�" in text
    assert "EnforcedInstallDate" in text


def test_enforcement_log_missing(settings):
    with pytest.raises(CollectorError) as excinfo:
        SystemCollectors(settings).enforcement_log()
    assert excinfo.value.context["path"] == str(settings.install_log_path)


# --- disk_space / boot_time / update_staged ---


def test_disk_space_reads_volume(settings):
    disk = SystemCollectors(settings).disk_space()
    assert disk.total_bytes > 0
    assert 0 <= disk.free_bytes <= disk.total_bytes


def test_disk_space_missing_volume(settings, tmp_path):
    settings.disk_path = tmp_path / "does-not-exist"
    with pytest.raises(CollectorError, match="Cannot read disk usage"):
        SystemCollectors(settings).disk_space()


def test_boot_time(settings, monkeypatch):
    stamp = datetime(2026, 3, 8, 7, 30).timestamp()
    monkeypatch.setattr(collectors_mod.psutil, "boot_time", lambda: stamp)
    assert SystemCollectors(settings).boot_time() == datetime(2026, 3, 8, 7, 30)


def test_boot_time_failure(settings, monkeypatch):
    def broken() -> float:
        raise OSError("sysctl failed")

    monkeypatch.setattr(collectors_mod.psutil, "boot_time", broken)
    with pytest.raises(CollectorError, match="boot time"):
        SystemCollectors(settings).boot_time()


def test_update_staged(settings):
    collectors = SystemCollectors(settings)
    assert collectors.update_staged() is False
    settings.staged_update_marker.mkdir()
    assert collectors.update_staged() is True


class _DeniedPath:
    """Path stand-in whose stat calls fail the way an unreadable directory does."""

    def __init__(self, name: str) -> None:
        self.name = name

    def exists(self) -> bool:
        raise PermissionError(13, "Permission denied", self.name)

    is_file = exists

    def __str__(self) -> str:
        return self.name


def test_update_staged_permission_denied(settings):
    settings.staged_update_marker = _DeniedPath("/System/Volumes/Update/Prepared")
    with pytest.raises(CollectorError, match="staged update marker") as excinfo:
        SystemCollectors(settings).update_staged()
    assert isinstance(excinfo.value.__cause__, PermissionError)


# --- preferences ---


def test_preferences_default_without_files(settings):
    assert SystemCollectors(settings).preferences() == Preferences()


def test_preferences_local_file(settings):
    _write_prefs(settings.local_preferences_path, {"SupportTeamName": "Local Desk"})
    assert SystemCollectors(settings).preferences().support_team_name == "Local Desk"


def test_preferences_managed_takes_priority(settings):
    _write_prefs(settings.local_preferences_path, {"SupportTeamName": "Local Desk"})
    _write_prefs(settings.managed_preferences_path, {"SupportTeamName": "Managed Desk"})
    assert SystemCollectors(settings).preferences().support_team_name == "Managed Desk"


def test_preferences_permission_denied(settings):
    _write_prefs(settings.local_preferences_path, {"SupportTeamName": "Local Desk"})
    settings.managed_preferences_path = _DeniedPath("/Library/Managed Preferences/prefs.json")
    with pytest.raises(PreferencesError, match="Cannot inspect") as excinfo:
        SystemCollectors(settings).preferences()
    assert excinfo.value.context["source"] == "managed"


def test_preferences_invalid_managed_does_not_fall_through(settings):
    _write_prefs(settings.local_preferences_path, {"SupportTeamName": "Local Desk"})
    settings.managed_preferences_path.parent.mkdir(parents=True, exist_ok=True)
    settings.managed_preferences_path.write_text("{broken", encoding="utf-8")
    with pytest.raises(PreferencesError):
        load_preferences(settings.managed_preferences_path, settings.local_preferences_path)
