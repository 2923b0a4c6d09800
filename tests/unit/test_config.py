"""Unit tests for settings validation."""

import pytest

from config import Settings, validate_settings
from exceptions import ConfigurationError


COMPLETE = dict(
    openai_api_key="sk-test",
    resend_api_key="re_test",
    supabase_url="https://db.example.co",
    supabase_key="service-key",
)


@pytest.mark.unit
def test_defaults():
    settings = Settings(_env_file=None, **COMPLETE)

    assert settings.otp_ttl_minutes == 10
    assert settings.resume_temperature == 0.15
    assert settings.resume_max_tokens == 1200
    assert settings.pdf_supersample >= 2
    assert settings.missing_required() == []
    assert validate_settings(settings) is settings


@pytest.mark.unit
def test_missing_secrets_are_listed(monkeypatch):
    for name in ("OPENAI_API_KEY", "RESEND_API_KEY", "SUPABASE_URL", "SUPABASE_KEY"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)

    with pytest.raises(ConfigurationError) as exc:
        validate_settings(settings)

    assert exc.value.details["missing"] == ["RESEND_API_KEY", "SUPABASE_URL", "SUPABASE_KEY", "OPENAI_API_KEY"]


@pytest.mark.unit
def test_required_key_follows_provider():
    settings = Settings(_env_file=None, **{**COMPLETE, "llm_provider": "claude", "claude_api_key": ""})

    assert settings.missing_required() == ["CLAUDE_API_KEY"]


@pytest.mark.unit
def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("OTP_TTL_MINUTES", "5")
    monkeypatch.setenv("SUPABASE_URL", "https://env.example.co")

    settings = Settings(_env_file=None)

    assert settings.otp_ttl_minutes == 5
    assert settings.supabase_url == "https://env.example.co"
