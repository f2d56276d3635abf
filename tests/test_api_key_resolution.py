from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest

from prompt_relay.config import DEFAULT_MODEL, DEFAULT_TIMEOUT_S, RelayConfig, resolve_api_key
from prompt_relay.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "GEMINI_MODEL", "GEMINI_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)


def test_resolve_api_key_prefers_explicit(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-value")
    assert resolve_api_key(" explicit ", "GEMINI_API_KEY") == "explicit"


def test_resolve_api_key_falls_back_to_first_non_empty_env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "  ")
    monkeypatch.setenv("GOOGLE_API_KEY", "google-value")
    assert resolve_api_key(None, "GEMINI_API_KEY", "GOOGLE_API_KEY") == "google-value"


def test_resolve_api_key_returns_empty_when_nothing_set():
    assert resolve_api_key(None, "GEMINI_API_KEY", "GOOGLE_API_KEY") == ""


def test_config_from_env_supports_google_api_key_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "google-value")
    config = RelayConfig.from_env()
    assert config.has_api_key is True
    assert config.require_api_key() == "google-value"


def test_config_from_env_defaults():
    config = RelayConfig.from_env()
    assert config.api_key is None
    assert config.model == DEFAULT_MODEL
    assert config.timeout_s == DEFAULT_TIMEOUT_S


def test_config_from_env_overrides(monkeypatch):
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.0-flash")
    monkeypatch.setenv("GEMINI_TIMEOUT_SECONDS", "5")
    config = RelayConfig.from_env()
    assert config.model == "gemini-2.0-flash"
    assert config.timeout_s == 5.0


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_config_from_env_ignores_bad_timeout(monkeypatch, raw):
    monkeypatch.setenv("GEMINI_TIMEOUT_SECONDS", raw)
    assert RelayConfig.from_env().timeout_s == DEFAULT_TIMEOUT_S


def test_require_api_key_raises_when_missing():
    with pytest.raises(ConfigurationError) as exc_info:
        RelayConfig(api_key=None).require_api_key()
    assert exc_info.value.status_code == 500
    assert exc_info.value.message.startswith("Server API key is not configured")


def test_config_repr_hides_key():
    assert "secret-key-123" not in repr(RelayConfig(api_key="secret-key-123"))
