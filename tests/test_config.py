import pytest
from pydantic import ValidationError

from contact_relay.common.config import load_settings
from tests.conftest import make_settings


def test_origins_are_split_and_trimmed():
    settings = make_settings(ALLOWED_ORIGIN=" https://a.example , https://b.example,, ")
    assert settings.allowed_origins == ["https://a.example", "https://b.example"]


def test_empty_origin_list_means_any():
    assert make_settings(ALLOWED_ORIGIN="").allowed_origins == []


def test_api_key_is_stripped_and_masked():
    settings = make_settings(RESEND_API_KEY="  re_abcdefghijkl  ")
    assert settings.RESEND_API_KEY == "re_abcdefghijkl"
    assert settings.masked_api_key == "re_abcde…"


@pytest.mark.parametrize("key", ["", "   ", "sk_live_123", "RE_upper"])
def test_api_key_without_prefix_is_rejected(key):
    with pytest.raises(ValidationError):
        make_settings(RESEND_API_KEY=key)


def test_recipient_is_required():
    with pytest.raises(ValidationError):
        make_settings(TO_EMAIL="  ")


def test_defaults():
    settings = make_settings()
    assert settings.PORT == 3000
    assert settings.RESEND_API_URL == "https://api.resend.com/emails"
    assert 0 < settings.RESEND_TIMEOUT_SECONDS <= 30


def test_settings_are_immutable():
    settings = make_settings()
    with pytest.raises(ValidationError):
        settings.TO_EMAIL = "someone@else.example"


def test_invalid_configuration_exits(monkeypatch):
    monkeypatch.setenv("RESEND_API_KEY", "not-a-resend-key")
    with pytest.raises(SystemExit) as exc_info:
        load_settings()
    assert exc_info.value.code == 1


def test_load_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("RESEND_API_KEY", "re_from_env")
    monkeypatch.setenv("ALLOWED_ORIGIN", "https://a.example")
    monkeypatch.setenv("PORT", "8080")
    settings = load_settings()
    assert settings.RESEND_API_KEY == "re_from_env"
    assert settings.allowed_origins == ["https://a.example"]
    assert settings.PORT == 8080
