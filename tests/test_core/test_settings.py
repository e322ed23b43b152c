"""Tests for Settings defaults and environment overrides."""

from linen.core.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.calendar_timezone == "America/Los_Angeles"
    assert settings.guest_token_prefix == "guest-token-"
    assert settings.guest_user_id == "guest-user"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CALENDAR_TIMEZONE", "Europe/London")
    monkeypatch.setenv("LLM_MODEL", "claude-3-haiku-20240307")
    monkeypatch.setenv("AUTO_SEED_THEMES", "true")

    settings = Settings(_env_file=None)

    assert settings.calendar_timezone == "Europe/London"
    assert settings.llm_model == "claude-3-haiku-20240307"
    assert settings.auto_seed_themes is True


def test_cors_origin_list_strips_blanks():
    settings = Settings(_env_file=None, cors_origins=" http://a.test ,,http://b.test")
    assert settings.cors_origin_list() == ["http://a.test", "http://b.test"]
