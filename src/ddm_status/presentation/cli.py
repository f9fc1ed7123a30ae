"""Command-line entry point: ``ddm-status``.

Subcommands::

    ddm-status status [--json]
    ddm-status evaluate --log-file PATH --installed-version V [--now ISO] [--json]
    ddm-status watch [--json]

Command output goes to stdout; logs go to stderr.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

from ddm_status import __version__
from ddm_status.config import Settings, load_settings
from ddm_status.domain.entities.enforcement import EnforcementStatus
from ddm_status.domain.entities.snapshot import StatusSnapshot, format_deadline
from ddm_status.engine.evaluator import EnforcementEvaluator
from ddm_status.engine.refresher import StatusRefresher
from ddm_status.infrastructure.collectors import SystemCollectors
from ddm_status.infrastructure.logging import get_logger, setup_logging
from ddm_status.shared.exceptions import ConfigurationError

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _mark(ok: bool) -> str:
    return "ok" if ok else "!!"


def render_enforcement(status: EnforcementStatus) -> list[str]:
    if status.is_up_to_date:
        return []
    required = status.required_version
    return [
        "Update",
        f"  Required version: {required if required is not None else '–'}",
        f"  Deadline:         {format_deadline(status.deadline)}",
        f"  Days remaining:   {status.days_remaining if status.days_remaining is not None else 0}"
        f" ({status.urgency.colour})",
    ]


def render_summary(snapshot: StatusSnapshot) -> str:
    """Plain-text summary of a snapshot, one block per topic."""
    prefs = snapshot.preferences
    lines = [
        f"[{snapshot.badge}] {snapshot.headline}",
        f"Installed: {snapshot.installed_version}",
        "",
    ]
    update_block = render_enforcement(snapshot.enforcement)
    if update_block:
        lines.extend(update_block)
        if snapshot.update_staged:
            lines.append("  Update downloaded")
        lines.append("")
    lines.extend(
        [
            "System",
            f"  [{_mark(snapshot.disk_space_ok)}] Disk space:  {snapshot.disk.describe()}",
            f"  [{_mark(snapshot.uptime_ok)}] Last reboot: {snapshot.uptime.describe()}",
            "",
        ]
    )
    contacts = [uri for uri in (prefs.phone_uri, prefs.email_uri, prefs.website_uri) if uri]
    lines.append(prefs.support_team_name)
    lines.extend(f"  {uri}" for uri in contacts)
    return "\n".join(lines)


def _emit(payload: dict[str, Any] | str) -> None:
    if isinstance(payload, dict):
        payload = json.dumps(payload, ensure_ascii=False, sort_keys=True)
    sys.stdout.write(payload + "\n")
    sys.stdout.flush()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _cmd_status(args: argparse.Namespace, settings: Settings) -> int:
    refresher = StatusRefresher(settings, SystemCollectors(settings))
    snapshot = refresher.refresh()
    _emit(snapshot.to_dict() if args.json else render_summary(snapshot))
    return EXIT_OK


def _cmd_evaluate(args: argparse.Namespace, settings: Settings) -> int:
    log_path = Path(args.log_file) if args.log_file else settings.install_log_path
    try:
        log_text = log_path.read_bytes().decode("utf-8", errors="replace")
    except OSError as exc:
        # A missing log means no enforcement, same as in a full refresh
        logger.warning("enforcement_log_unreadable", path=str(log_path), error=str(exc))
        log_text = ""
    status = EnforcementEvaluator().evaluate(args.installed_version, log_text, args.now)
    if args.json:
        _emit(status.to_dict())
    else:
        headline = "up to date" if status.is_up_to_date else "update required"
        _emit("\n".join([f"[{status.badge}] {headline}", *render_enforcement(status)]))
    return EXIT_OK


def _cmd_watch(args: argparse.Namespace, settings: Settings) -> int:
    refresher = StatusRefresher(settings, SystemCollectors(settings))
    if args.json:
        refresher.subscribe(lambda snap: _emit(snap.to_dict()))
    else:
        refresher.subscribe(lambda snap: _emit(render_summary(snap) + "\n"))
    try:
        asyncio.run(refresher.run())
    except KeyboardInterrupt:
        logger.info("watch_interrupted", refresh_count=refresher.refresh_count)
    return EXIT_OK


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _parse_now(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid ISO-8601 datetime: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ddm-status",
        description="Show macOS software-update enforcement status.",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("--log-level", default=None, help="debug, info, warning, error")
    ap.add_argument("--json-logs", action="store_true", default=None, help="emit logs as JSON lines")
    sub = ap.add_subparsers(dest="command", required=True)

    status = sub.add_parser("status", help="refresh once and print the status")
    status.add_argument("--json", action="store_true", help="print the snapshot as JSON")
    status.set_defaults(handler=_cmd_status)

    evaluate = sub.add_parser("evaluate", help="evaluate an enforcement log on explicit inputs")
    evaluate.add_argument("--log-file", help="install log to read (defaults to the configured path)")
    evaluate.add_argument("--installed-version", required=True, help="installed OS version, e.g. 26.2")
    evaluate.add_argument(
        "--now",
        type=_parse_now,
        default=None,
        help="evaluation time as ISO-8601 (defaults to the current local time)",
    )
    evaluate.add_argument("--json", action="store_true", help="print the status as JSON")
    evaluate.set_defaults(handler=_cmd_evaluate)

    watch = sub.add_parser("watch", help="refresh periodically until interrupted")
    watch.add_argument("--json", action="store_true", help="print one JSON snapshot per refresh")
    watch.set_defaults(handler=_cmd_watch)
    return ap


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if getattr(args, "now", None) is None and args.command == "evaluate":
        args.now = datetime.now()

    overrides: dict[str, Any] = {}
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.json_logs:
        overrides["json_logs"] = True
    try:
        settings = load_settings(**overrides)
    except ConfigurationError as exc:
        sys.stderr.write(f"ddm-status: {exc.message}\n")
        return EXIT_CONFIG_ERROR

    setup_logging(level=settings.log_level, json_output=settings.json_logs, log_file=settings.log_file)
    return args.handler(args, settings)


if __name__ == "__main__":
    sys.exit(main())
