"""Exception hierarchy for the DDM status tool.

The enforcement evaluator never raises: malformed log data degrades to
"no enforcement".  Exceptions exist only at the I/O edges (settings,
collectors, preference files).  Every exception carries a machine-readable
``error_code``, a ``severity`` indicator, and an arbitrary ``context`` dict
for structured logging.
"""
from __future__ import annotations

from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Severity levels
# ---------------------------------------------------------------------------

class Severity(str, Enum):
    """Severity levels for status-tool exceptions."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class DDMStatusError(Exception):
    """Root exception for every DDM status failure.

    Attributes:
        message:    Human-readable description.
        error_code: Machine-readable code (e.g. ``"DDM_COLLECTOR_ERROR"``).
        severity:   Impact severity.
        context:    Arbitrary key-value context for structured logging.
    """

    def __init__(
        self,
        message: str = "DDM status error",
        error_code: str = "DDM_ERROR",
        severity: Severity = Severity.MEDIUM,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.context: dict[str, Any] = context or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"error_code={self.error_code!r}, "
            f"severity={self.severity.value!r}, "
            f"message={self.message!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the exception for logs and JSON output."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "context": self.context,
        }


# ---------------------------------------------------------------------------
# Configuration exceptions
# ---------------------------------------------------------------------------

class ConfigurationError(DDMStatusError):
    """Raised when settings are invalid or cannot be loaded."""

    def __init__(self, message: str = "Configuration error", **kwargs: Any) -> None:
        super().__init__(
            message,
            error_code=kwargs.pop("error_code", "DDM_CONFIG_ERROR"),
            severity=kwargs.pop("severity", Severity.HIGH),
            **kwargs,
        )


class PreferencesError(ConfigurationError):
    """Raised when a preference file exists but cannot be parsed."""

    def __init__(self, message: str = "Preference file unreadable", **kwargs: Any) -> None:
        super().__init__(
            message,
            error_code=kwargs.pop("error_code", "DDM_PREFERENCES_ERROR"),
            severity=kwargs.pop("severity", Severity.LOW),
            **kwargs,
        )


# ---------------------------------------------------------------------------
# Collector exceptions
# ---------------------------------------------------------------------------

class CollectorError(DDMStatusError):
    """Raised when a system collector cannot produce its reading."""

    def __init__(self, message: str = "Collector failed", **kwargs: Any) -> None:
        super().__init__(
            message,
            error_code=kwargs.pop("error_code", "DDM_COLLECTOR_ERROR"),
            **kwargs,
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "Severity",
    "DDMStatusError",
    "ConfigurationError",
    "PreferencesError",
    "CollectorError",
]
