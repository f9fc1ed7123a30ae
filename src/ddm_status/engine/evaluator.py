"""
ddm-status engine -- Enforcement evaluator.

Reads the DDM enforcement entries that ``softwareupdated`` appends to the
install log::

    ...|EnforcedInstallDate:2026-03-13T12:00:00|VersionString:26.3|...

and decides whether the installed OS satisfies the most recent one.

Every anomaly (no enforcement line, missing marker, malformed date) is a
"no signal" condition that evaluates to up to date.  Nothing in this module
raises for malformed input and nothing here performs I/O: the log text, the
installed version and the current time are all passed in.
"""

from __future__ import annotations

import re
from datetime import datetime

import structlog

from ddm_status.domain.entities.enforcement import EnforcementRecord, EnforcementStatus
from ddm_status.domain.value_objects.version import Version, compare_versions

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ENFORCEMENT_MARKER = "EnforcedInstallDate"
DEADLINE_FIELD = "EnforcedInstallDate:"
VERSION_FIELD = "VersionString:"
FIELD_SEPARATOR = "|"

DEADLINE_FORMAT = "%Y-%m-%dT%H:%M:%S"
# strptime alone accepts single-digit fields; pin the exact shape first.
_DEADLINE_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}", re.ASCII)

__all__ = [
    "ENFORCEMENT_MARKER",
    "EnforcementEvaluator",
    "compare_versions",
    "evaluate",
    "find_latest_enforcement_line",
    "parse_deadline",
    "parse_enforcement_line",
    "parse_latest_enforcement",
]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def find_latest_enforcement_line(log_text: str) -> str | None:
    """Return the last line of *log_text* mentioning an enforcement, if any."""
    for line in reversed(log_text.splitlines()):
        if ENFORCEMENT_MARKER in line:
            return line
    return None


def parse_deadline(text: str) -> datetime | None:
    """Parse ``YYYY-MM-DDTHH:MM:SS`` as a naive local datetime.

    Fractional seconds and timezone suffixes are rejected.
    """
    if not _DEADLINE_SHAPE.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, DEADLINE_FORMAT)
    except ValueError:
        return None


def parse_enforcement_line(line: str) -> EnforcementRecord | None:
    """Extract deadline and required version from one enforcement line."""
    date_start = line.find(DEADLINE_FIELD)
    version_start = line.find(VERSION_FIELD)
    if date_start < 0 or version_start < 0:
        logger.debug("enforcement_line_incomplete", line=line)
        return None

    after_date = line[date_start + len(DEADLINE_FIELD):]
    date_end = after_date.find(FIELD_SEPARATOR)
    if date_end < 0:
        logger.debug("enforcement_deadline_unterminated", line=line)
        return None
    deadline = parse_deadline(after_date[:date_end])
    if deadline is None:
        logger.debug("enforcement_deadline_malformed", deadline=after_date[:date_end])
        return None

    after_version = line[version_start + len(VERSION_FIELD):]
    version_end = after_version.find(FIELD_SEPARATOR)
    if version_end < 0:
        version_text = after_version.strip()
    else:
        version_text = after_version[:version_end]

    return EnforcementRecord(
        deadline=deadline,
        required_version=Version.parse(version_text),
    )


def parse_latest_enforcement(log_text: str) -> EnforcementRecord | None:
    """Parse the most recent enforcement entry of *log_text*.

    Only the last ``EnforcedInstallDate`` line in document order is
    considered; when it is malformed the result is ``None`` even if earlier
    lines are well formed.
    """
    line = find_latest_enforcement_line(log_text)
    if line is None:
        logger.debug("enforcement_line_not_found")
        return None
    record = parse_enforcement_line(line)
    if record is not None:
        logger.debug(
            "enforcement_record_parsed",
            deadline=record.deadline.isoformat(),
            required_version=str(record.required_version),
        )
    return record


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def _as_naive_local(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def days_between(now: datetime, deadline: datetime) -> int:
    """Whole calendar days from *now* to *deadline*; negative when past."""
    return (deadline.date() - _as_naive_local(now).date()).days


def evaluate(installed_version: str, log_text: str, now: datetime) -> EnforcementStatus:
    """Evaluate the latest enforcement in *log_text* against *installed_version*.

    Pure and deterministic for fixed inputs.  An empty or placeholder
    *installed_version* is compared like any other dotted string.
    """
    record = parse_latest_enforcement(log_text)
    if record is None:
        return EnforcementStatus.up_to_date()

    installed = Version.parse(installed_version)
    status = EnforcementStatus(
        is_up_to_date=installed.compare(record.required_version) >= 0,
        days_remaining=days_between(now, record.deadline),
        record=record,
    )
    logger.debug(
        "enforcement_evaluated",
        installed_version=installed_version,
        required_version=str(record.required_version),
        is_up_to_date=status.is_up_to_date,
        days_remaining=status.days_remaining,
    )
    return status


class EnforcementEvaluator:
    """Stateless facade over the evaluation functions.

    Holds no state between calls and may be shared freely between threads;
    it exists so that callers such as :class:`StatusRefresher` can accept an
    evaluator as a collaborator.
    """

    def parse_latest_enforcement(self, log_text: str) -> EnforcementRecord | None:
        return parse_latest_enforcement(log_text)

    def compare_versions(self, a: str, b: str) -> int:
        return compare_versions(a, b)

    def evaluate(
        self,
        installed_version: str,
        log_text: str,
        now: datetime,
    ) -> EnforcementStatus:
        return evaluate(installed_version, log_text, now)
