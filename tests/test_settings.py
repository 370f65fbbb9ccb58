from __future__ import annotations

import pydantic
import pytest

from config.settings import Settings


ENV_VARS = (
    "APP_ENV",
    "LOG_LEVEL",
    "LLM_PROVIDER",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "GEMINI_MODEL",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "PROVIDER_TIMEOUT",
    "PROVIDER_RETRIES",
    "STATIC_DIR",
    "API_PORT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env) -> None:
    settings = Settings.from_env()

    assert settings.provider == "gemini"
    assert settings.gemini_model == "gemini-2.0-flash"
    assert settings.gemini_api_key is None
    assert settings.provider_timeout == 60.0
    assert settings.provider_retries == 0
    assert settings.static_dir == "dist"
    assert settings.port == 8000


def test_reads_environment(clean_env) -> None:
    clean_env.setenv("LLM_PROVIDER", " OpenAI ")
    clean_env.setenv("OPENAI_API_KEY", "sk-env")
    clean_env.setenv("OPENAI_MODEL", "gpt-4o")
    clean_env.setenv("PROVIDER_TIMEOUT", "12.5")
    clean_env.setenv("PROVIDER_RETRIES", "2")
    clean_env.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.provider == "openai"
    assert settings.openai_api_key == "sk-env"
    assert settings.openai_model == "gpt-4o"
    assert settings.provider_timeout == 12.5
    assert settings.provider_retries == 2
    assert settings.log_level == "DEBUG"


def test_google_api_key_is_accepted_for_gemini(clean_env) -> None:
    clean_env.setenv("GOOGLE_API_KEY", "from-google")

    assert Settings.from_env().gemini_api_key == "from-google"


def test_settings_are_immutable() -> None:
    settings = Settings()

    with pytest.raises(pydantic.ValidationError):
        settings.provider = "openai"
