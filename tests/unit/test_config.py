"""
Unit tests for firm_research.config module.

Settings are built with _env_file=None so a developer's .env does not
leak into the assertions.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from firm_research.config import Settings, get_settings
from firm_research.constants import GEOCODE_MIN_CONFIDENCE


def test_defaults():
    settings = Settings(_env_file=None, google_places_api_key=None)
    assert settings.google_places_api_key is None
    assert settings.headless is True
    assert settings.geocode_min_confidence == GEOCODE_MIN_CONFIDENCE
    assert settings.reports_dir == Path("reports")


def test_empty_api_keys_become_none():
    settings = Settings(_env_file=None, opencage_api_key="   ", openai_api_key="")
    assert settings.opencage_api_key is None
    assert settings.openai_api_key is None


def test_keys_from_environment(monkeypatch):
    monkeypatch.setenv("GOOGLE_PLACES_API_KEY", " places-key ")
    settings = Settings(_env_file=None)
    assert settings.google_places_api_key == "places-key"


def test_user_agent_stripped():
    assert Settings(_env_file=None, user_agent="  FirmBot/1.0 ").user_agent == "FirmBot/1.0"


def test_invalid_threshold_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, geocode_min_confidence=11)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, page_load_timeout=0)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
