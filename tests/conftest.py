"""Root conftest: shared fixtures for all test suites."""
from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import pytest
import structlog

# Insert src/ at the front of sys.path so ``import ddm_status`` works from a
# plain checkout as well as from an editable install.
_src = str(Path(__file__).resolve().parent.parent / "src")
if _src not in sys.path:
    sys.path.insert(0, _src)

from ddm_status.config import Settings  # noqa: E402
from ddm_status.domain.entities.system_health import DiskSpace  # noqa: E402
from ddm_status.domain.value_objects.preferences import Preferences  # noqa: E402
from ddm_status.shared.exceptions import CollectorError  # noqa: E402

ENFORCEMENT_LINE = (
    "2026-03-01 09:12:44+01 host softwareupdated[612]: DDM enforcement "
    "|EnforcedInstallDate:2026-03-13T12:00:00|VersionString:26.3|BuildVersionString:25D5|"
)


@pytest.fixture(autouse=True)
def _quiet_structlog():
    """Route structlog events nowhere so command output stays clean."""
    structlog.reset_defaults()
    structlog.configure(
        processors=[structlog.processors.KeyValueRenderer()],
        logger_factory=structlog.ReturnLoggerFactory(),
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 3, 10, 0, 0, 0)


@pytest.fixture
def enforcement_log() -> str:
    return "\n".join(
        [
            "2026-02-20 08:00:01+01 host installd[301]: PackageKit: ----- Begin install -----",
            ENFORCEMENT_LINE,
            "2026-03-01 09:12:45+01 host softwareupdated[612]: Scan finished",
        ]
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        install_log_path=tmp_path / "install.log",
        managed_preferences_path=tmp_path / "managed" / "prefs.json",
        local_preferences_path=tmp_path / "local" / "prefs.json",
        disk_path=tmp_path,
        staged_update_marker=tmp_path / "Prepared",
        refresh_interval_seconds=0.01,
    )


class StubCollectors:
    """Collectors returning canned readings; a value that is an exception is raised."""

    def __init__(self, **readings: object) -> None:
        self.readings: dict[str, object] = {
            "installed_version": "26.2",
            "enforcement_log": ENFORCEMENT_LINE,
            "disk_space": DiskSpace(free_bytes=50_000_000_000, total_bytes=500_000_000_000),
            "boot_time": datetime(2026, 3, 8, 7, 30),
            "update_staged": False,
            "preferences": Preferences(),
        }
        self.readings.update(readings)
        self.calls: list[str] = []

    def _read(self, name: str) -> object:
        self.calls.append(name)
        value = self.readings[name]
        if isinstance(value, Exception):
            raise value
        return value

    def installed_version(self) -> str:
        return self._read("installed_version")  # type: ignore[return-value]

    def enforcement_log(self) -> str:
        return self._read("enforcement_log")  # type: ignore[return-value]

    def disk_space(self) -> DiskSpace:
        return self._read("disk_space")  # type: ignore[return-value]

    def boot_time(self) -> datetime:
        return self._read("boot_time")  # type: ignore[return-value]

    def update_staged(self) -> bool:
        return self._read("update_staged")  # type: ignore[return-value]

    def preferences(self) -> Preferences:
        return self._read("preferences")  # type: ignore[return-value]


@pytest.fixture
def stub_collectors() -> StubCollectors:
    return StubCollectors()


@pytest.fixture
def failing_collectors() -> StubCollectors:
    return StubCollectors(
        installed_version=CollectorError("no sw_vers"),
        enforcement_log=CollectorError("no log"),
        disk_space=CollectorError("no disk"),
        boot_time=CollectorError("no boot time"),
        update_staged=CollectorError("no marker"),
        preferences=CollectorError("no prefs"),
    )


@pytest.fixture
def make_collectors() -> type[StubCollectors]:
    return StubCollectors
