"""Centralized configuration for the DDM status tool."""
from __future__ import annotations

from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from ddm_status.domain.value_objects.preferences import PREFERENCE_DOMAIN
from ddm_status.shared.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Status tool configuration loaded from environment variables."""

    # Inputs
    install_log_path: Path = Path("/var/log/install.log")
    managed_preferences_path: Path = Path(
        f"/Library/Managed Preferences/{PREFERENCE_DOMAIN}.json"
    )
    local_preferences_path: Path = Path(f"/Library/Preferences/{PREFERENCE_DOMAIN}.json")
    disk_path: Path = Path("/")
    staged_update_marker: Path = Path("/System/Volumes/Update/Prepared")

    # Refresh loop
    refresh_interval_seconds: float = Field(default=3600.0, gt=0)

    # Logging
    log_level: str = "info"
    json_logs: bool = False
    log_file: str | None = None

    model_config = {"env_prefix": "DDM_STATUS_", "env_file": ".env", "extra": "ignore"}


def load_settings(**overrides: object) -> Settings:
    """Build settings, turning validation failures into ``ConfigurationError``."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid settings: {exc}",
            context={"errors": exc.errors(include_url=False)},
        ) from exc
