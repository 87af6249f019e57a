import pytest

from scrobbler.config import DEFAULT_API_URL, Settings

ENV_VARS = [
    "LASTFM_API_KEY",
    "LASTFM_API_SECRET",
    "LASTFM_SESSION_KEY",
    "LASTFM_USER",
    "LASTFM_PASSWORD",
    "LASTFM_API_URL",
    "REQUEST_TIMEOUT",
    "MAX_REAUTH_ATTEMPTS",
    "LASTFM_FORCE_IPV4",
    "CACHE_SESSION_FILE",
    "LOG_LEVEL",
]


@pytest.fixture
def env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LASTFM_API_KEY", "key1234567890")
    monkeypatch.setenv("LASTFM_API_SECRET", "secret1234567890")
    return monkeypatch


def test_defaults(env):
    settings = Settings.from_env()

    assert settings.lastfm_api_key == "key1234567890"
    assert settings.lastfm_session_key is None
    assert settings.api_url == DEFAULT_API_URL
    assert settings.request_timeout == 30.0
    assert settings.max_reauth_attempts == 1
    assert settings.log_level == "INFO"
    assert not settings.can_authenticate


def test_missing_credentials_raise(env):
    env.delenv("LASTFM_API_SECRET")

    with pytest.raises(RuntimeError, match="LASTFM_API_SECRET"):
        Settings.from_env()


def test_overrides(env):
    env.setenv("LASTFM_SESSION_KEY", " sk ")
    env.setenv("LASTFM_USER", "thom")
    env.setenv("LASTFM_PASSWORD", "hunter2")
    env.setenv("REQUEST_TIMEOUT", "7.5")
    env.setenv("MAX_REAUTH_ATTEMPTS", "2")
    env.setenv("LASTFM_FORCE_IPV4", "yes")
    env.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.lastfm_session_key == "sk"
    assert settings.can_authenticate
    assert settings.request_timeout == 7.5
    assert settings.max_reauth_attempts == 2
    assert settings.lastfm_force_ipv4
    assert settings.log_level == "DEBUG"


def test_invalid_values_fall_back(env):
    env.setenv("REQUEST_TIMEOUT", "soon")
    env.setenv("MAX_REAUTH_ATTEMPTS", "-3")
    env.setenv("LOG_LEVEL", "LOUD")

    settings = Settings.from_env()

    assert settings.request_timeout == 30.0
    assert settings.max_reauth_attempts == 1
    assert settings.log_level == "INFO"
