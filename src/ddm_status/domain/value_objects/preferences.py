"""Administrator preferences for the status tool.

Preferences are deployed by MDM (managed path) or by hand (local path) as a
JSON object using the same keys as the ``com.github.ddmstatusapp`` domain::

    {
      "MinimumDiskFreePercentage": 15,
      "DaysOfExcessiveUptimeWarning": 14,
      "SupportTeamName": "Service Desk",
      "SupportTeamPhone": "+41 21 000 00 00",
      "SupportTeamEmail": "help@example.org",
      "SupportTeamWebsite": "https://help.example.org"
    }

A key holding a value of the wrong type is ignored and falls back to its
default; the remaining keys still apply.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ddm_status.shared.exceptions import PreferencesError

logger = structlog.get_logger(__name__)

PREFERENCE_DOMAIN = "com.github.ddmstatusapp"

_EXPECTED_TYPES: dict[str, type] = {
    "MinimumDiskFreePercentage": int,
    "DaysOfExcessiveUptimeWarning": int,
    "SupportTeamName": str,
    "SupportTeamPhone": str,
    "SupportTeamEmail": str,
    "SupportTeamWebsite": str,
}


def _has_expected_type(value: Any, expected: type) -> bool:
    # bool is an int subclass; a JSON true is not a percentage
    if expected is int and isinstance(value, bool):
        return False
    return isinstance(value, expected)


class Preferences(BaseModel):
    """Thresholds and support contact shown in the status summary."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    minimum_free_percent: int = Field(
        default=10,
        alias="MinimumDiskFreePercentage",
        description="Free disk percentage below which disk space is flagged.",
    )
    excessive_uptime_days: int = Field(
        default=7,
        alias="DaysOfExcessiveUptimeWarning",
        description="Days since reboot that trigger a warning; 0 disables it.",
    )
    support_team_name: str = Field(default="IT Support", alias="SupportTeamName")
    support_team_phone: str = Field(default="", alias="SupportTeamPhone")
    support_team_email: str = Field(default="", alias="SupportTeamEmail")
    support_team_website: str = Field(default="", alias="SupportTeamWebsite")

    @model_validator(mode="before")
    @classmethod
    def _drop_mistyped(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned: dict[str, Any] = {}
        for key, value in data.items():
            expected = _EXPECTED_TYPES.get(key)
            if expected is not None and not _has_expected_type(value, expected):
                logger.warning(
                    "preference_value_ignored",
                    key=key,
                    expected=expected.__name__,
                    actual=type(value).__name__,
                )
                continue
            cleaned[key] = value
        return cleaned

    # ------------------------------------------------------------------
    # Contact helpers
    # ------------------------------------------------------------------

    @property
    def has_phone(self) -> bool:
        return bool(self.support_team_phone)

    @property
    def has_email(self) -> bool:
        return bool(self.support_team_email)

    @property
    def has_website(self) -> bool:
        return bool(self.support_team_website)

    @property
    def phone_uri(self) -> str | None:
        """``tel:`` URI with spaces stripped, or None when no phone is set."""
        if not self.has_phone:
            return None
        return "tel:" + self.support_team_phone.replace(" ", "")

    @property
    def email_uri(self) -> str | None:
        if not self.has_email:
            return None
        return f"mailto:{self.support_team_email}"

    @property
    def website_uri(self) -> str | None:
        return self.support_team_website or None

    # ------------------------------------------------------------------
    # Persistence helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_json_file(cls, path: Path) -> Preferences:
        """Load preferences from a JSON object file.

        Raises ``PreferencesError`` when the file cannot be read or does not
        hold a JSON object.
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise PreferencesError(
                f"Cannot read preference file {path}: {exc}",
                context={"path": str(path)},
            ) from exc
        if not isinstance(data, dict):
            raise PreferencesError(
                f"Preference file {path} must contain a JSON object",
                context={"path": str(path), "type": type(data).__name__},
            )
        try:
            prefs = cls.model_validate(data)
        except ValidationError as exc:
            raise PreferencesError(
                f"Invalid preference file {path}: {exc}",
                context={"path": str(path)},
            ) from exc
        logger.info("preferences_loaded", path=str(path))
        return prefs

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the preference-domain key names."""
        return self.model_dump(by_alias=True)
