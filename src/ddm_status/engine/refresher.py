"""Status refresher.

Gathers every input of a refresh from the collectors, evaluates the
enforcement, and swaps the resulting :class:`StatusSnapshot` in as the
current one.  A collector failure never aborts a refresh: the failing input
is replaced by its placeholder and the failure is logged.

The refresher also owns the periodic loop (hourly by default) that keeps the
snapshot fresh while a display is running.
"""
from __future__ import annotations

import asyncio
import contextlib
import uuid
from datetime import datetime
from typing import Callable, TypeVar

import structlog

from ddm_status.config import Settings
from ddm_status.domain.entities.snapshot import INSTALLED_VERSION_PLACEHOLDER, StatusSnapshot
from ddm_status.domain.entities.system_health import DiskSpace, Uptime
from ddm_status.domain.value_objects.preferences import Preferences
from ddm_status.engine.evaluator import EnforcementEvaluator
from ddm_status.infrastructure.collectors import Collectors
from ddm_status.infrastructure.logging import bind_refresh_id, clear_refresh_id
from ddm_status.shared.exceptions import DDMStatusError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

SnapshotCallback = Callable[[StatusSnapshot], None]


class StatusRefresher:
    """Builds status snapshots and keeps the latest one.

    Args:
        settings: Supplies the refresh interval.
        collectors: Sources of the raw inputs.
        evaluator: Enforcement evaluator; a fresh one by default.
        clock: Returns the current local time; ``datetime.now`` by default.
    """

    def __init__(
        self,
        settings: Settings,
        collectors: Collectors,
        evaluator: EnforcementEvaluator | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._settings = settings
        self._collectors = collectors
        self._evaluator = evaluator or EnforcementEvaluator()
        self._clock = clock
        self._current: StatusSnapshot | None = None
        self._subscribers: list[SnapshotCallback] = []
        self._running = False
        self._task: asyncio.Task[None] | None = None
        self._refresh_count = 0

    # ------------------------------------------------------------------
    # Snapshot access
    # ------------------------------------------------------------------

    @property
    def current(self) -> StatusSnapshot | None:
        """The latest snapshot, or None before the first refresh."""
        return self._current

    @property
    def refresh_count(self) -> int:
        return self._refresh_count

    @property
    def is_running(self) -> bool:
        return self._running

    def subscribe(self, callback: SnapshotCallback) -> None:
        """Call *callback* with every new snapshot."""
        self._subscribers.append(callback)

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    def refresh(self) -> StatusSnapshot:
        """Collect all inputs and replace the current snapshot."""
        bind_refresh_id(uuid.uuid4().hex[:12])
        try:
            snapshot = self._build_snapshot()
            self._current = snapshot
            self._refresh_count += 1
            logger.info(
                "status_refreshed",
                installed_version=snapshot.installed_version,
                is_up_to_date=snapshot.is_up_to_date,
                days_remaining=snapshot.enforcement.days_remaining,
                urgency=snapshot.urgency.value,
                disk_space_ok=snapshot.disk_space_ok,
                uptime_ok=snapshot.uptime_ok,
                update_staged=snapshot.update_staged,
            )
            self._notify(snapshot)
        finally:
            clear_refresh_id()
        return snapshot

    def _build_snapshot(self) -> StatusSnapshot:
        now = self._clock()
        collectors = self._collectors

        installed = self._collect(
            "installed_version", collectors.installed_version, INSTALLED_VERSION_PLACEHOLDER
        )
        log_text = self._collect("enforcement_log", collectors.enforcement_log, "")
        disk = self._collect("disk_space", collectors.disk_space, DiskSpace())
        boot_time = self._collect("boot_time", collectors.boot_time, None)
        staged = self._collect("update_staged", collectors.update_staged, False)
        preferences = self._collect("preferences", collectors.preferences, Preferences())

        return StatusSnapshot(
            installed_version=installed,
            enforcement=self._evaluator.evaluate(installed, log_text, now),
            refreshed_at=now,
            disk=disk,
            uptime=Uptime(boot_time=boot_time, now=now),
            update_staged=staged,
            preferences=preferences,
        )

    @staticmethod
    def _collect(name: str, collector: Callable[[], T], placeholder: T) -> T:
        try:
            return collector()
        except DDMStatusError as exc:
            logger.warning("collector_failed", collector=name, **exc.to_dict())
            return placeholder
        except OSError as exc:
            logger.warning("collector_failed", collector=name, error=str(exc))
            return placeholder

    def _notify(self, snapshot: StatusSnapshot) -> None:
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception(
                    "snapshot_subscriber_failed",
                    subscriber=getattr(callback, "__name__", repr(callback)),
                )

    # ------------------------------------------------------------------
    # Periodic loop
    # ------------------------------------------------------------------

    async def run(self) -> None:
        """Refresh now, then every ``refresh_interval_seconds`` until stopped."""
        self._running = True
        interval = self._settings.refresh_interval_seconds
        logger.info("status_refresher_started", interval_seconds=interval)
        try:
            while self._running:
                await asyncio.to_thread(self.refresh)
                await asyncio.sleep(interval)
        finally:
            self._running = False
            logger.info("status_refresher_stopped", refresh_count=self._refresh_count)

    async def start(self) -> None:
        """Start the background refresh loop."""
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        """Stop the background refresh loop and wait for it to finish."""
        self._running = False
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
