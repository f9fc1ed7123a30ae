"""Test version, urgency and preference value objects."""

import json

import pytest
from pydantic import ValidationError

from ddm_status.domain.value_objects.preferences import Preferences
from ddm_status.domain.value_objects.urgency import Urgency, badge_label
from ddm_status.domain.value_objects.version import Version
from ddm_status.shared.exceptions import PreferencesError


# --- Version ---


def test_version_parse_segments():
    assert Version.parse("26.3.1").segments == (26, 3, 1)
    assert Version.parse("13.0beta").segments == (13,)
    assert Version.parse("").segments == ()
    assert Version.parse("1..2").segments == (1, 2)


def test_version_rejects_signed_and_padded_segments():
    assert Version.parse("-1.2").segments == (2,)
    assert Version.parse(" 26.3").segments == (3,)


def test_version_ordering():
    assert Version.parse("14.0") > Version.parse("13.9.9")
    assert Version.parse("13.2") < Version.parse("13.2.1")
    assert Version.parse("13.2") <= Version.parse("13.2.0")
    assert Version.parse("13.2.0") >= Version.parse("13.2")


def test_version_equality_ignores_trailing_zeros():
    assert Version.parse("13.2") == Version.parse("13.2.0")
    assert hash(Version.parse("13.2")) == hash(Version.parse("13.2.0.0"))
    assert Version.parse("13.2") != Version.parse("13.2.1")


def test_version_str_prefers_raw_text():
    assert str(Version.parse("26.3")) == "26.3"
    assert str(Version(segments=(26, 3))) == "26.3"


def test_version_is_empty():
    assert Version.parse("–").is_empty is True
    assert Version.parse("1").is_empty is False


def test_version_compare_with_other_type():
    assert Version.parse("1") != "1"
    with pytest.raises(TypeError):
        Version.parse("1") < "2"  # noqa: B015


# --- Urgency ---


def test_urgency_from_days():
    assert Urgency.from_days(-4) == Urgency.CRITICAL
    assert Urgency.from_days(1) == Urgency.CRITICAL
    assert Urgency.from_days(2) == Urgency.HIGH
    assert Urgency.from_days(3) == Urgency.HIGH
    assert Urgency.from_days(7) == Urgency.MEDIUM
    assert Urgency.from_days(8) == Urgency.LOW
    assert Urgency.from_days(None) == Urgency.UNKNOWN


def test_urgency_colour():
    assert Urgency.NONE.colour == "green"
    assert Urgency.CRITICAL.colour == "red"
    assert Urgency.HIGH.colour == "orange"
    assert Urgency.MEDIUM.colour == "yellow"
    assert Urgency.LOW.colour == "blue"
    assert Urgency.UNKNOWN.colour == "gray"


def test_urgency_for_status():
    assert Urgency.for_status(True, 0) == Urgency.NONE
    assert Urgency.for_status(False, 5) == Urgency.MEDIUM
    assert Urgency.NONE.is_pending is False
    assert Urgency.UNKNOWN.is_pending is True


def test_badge_label():
    assert badge_label(True, 3) == "✓"
    assert badge_label(False, 3) == "3"
    assert badge_label(False, -1) == "-1"
    assert badge_label(False, None) == "–"


# --- Preferences ---


def test_preferences_defaults():
    p = Preferences()
    assert p.minimum_free_percent == 10
    assert p.excessive_uptime_days == 7
    assert p.support_team_name == "IT Support"
    assert p.has_phone is False
    assert p.phone_uri is None
    assert p.email_uri is None
    assert p.website_uri is None


def test_preferences_from_domain_keys():
    p = Preferences.model_validate(
        {
            "MinimumDiskFreePercentage": 20,
            "DaysOfExcessiveUptimeWarning": 0,
            "SupportTeamName": "Service Desk",
            "SupportTeamPhone": "+41 21 000 00 00",
            "SupportTeamEmail": "help@example.org",
            "SupportTeamWebsite": "https://help.example.org",
        }
    )
    assert p.minimum_free_percent == 20
    assert p.excessive_uptime_days == 0
    assert p.phone_uri == "tel:+41210000000"
    assert p.email_uri == "mailto:help@example.org"
    assert p.website_uri == "https://help.example.org"


def test_preferences_mistyped_key_falls_back_individually():
    p = Preferences.model_validate(
        {
            "MinimumDiskFreePercentage": "15",
            "DaysOfExcessiveUptimeWarning": True,
            "SupportTeamName": 42,
            "SupportTeamEmail": "help@example.org",
            "UnknownKey": "ignored",
        }
    )
    assert p.minimum_free_percent == 10
    assert p.excessive_uptime_days == 7
    assert p.support_team_name == "IT Support"
    assert p.support_team_email == "help@example.org"


def test_preferences_to_dict_uses_domain_keys():
    d = Preferences(support_team_name="Desk").to_dict()
    assert d["SupportTeamName"] == "Desk"
    assert d["MinimumDiskFreePercentage"] == 10


def test_preferences_from_json_file(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({"MinimumDiskFreePercentage": 25}), encoding="utf-8")
    assert Preferences.from_json_file(path).minimum_free_percent == 25


def test_preferences_from_json_file_invalid_json(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(PreferencesError, match="Cannot read preference file"):
        Preferences.from_json_file(path)


def test_preferences_from_json_file_not_an_object(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(PreferencesError, match="JSON object") as excinfo:
        Preferences.from_json_file(path)
    assert excinfo.value.error_code == "DDM_PREFERENCES_ERROR"


def test_preferences_are_frozen():
    p = Preferences()
    with pytest.raises(ValidationError):
        p.minimum_free_percent = 50
