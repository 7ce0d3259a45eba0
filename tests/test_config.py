"""
tests/test_config.py -- Tests for the SECRET_KEY policy and defaults in core/config.py.

Settings is instantiated directly with keyword overrides rather than through
get_settings(), so the cached singleton the app already holds is untouched.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import Settings

_KEY = "k" * 32


def test_debug_mode_generates_key():
    settings = Settings(debug=True, secret_key="")
    assert len(settings.secret_key) >= 32


def test_production_requires_key():
    with pytest.raises(ValidationError, match="SECRET_KEY is required"):
        Settings(debug=False, secret_key="")


def test_short_key_rejected():
    with pytest.raises(ValidationError, match="at least 32 characters"):
        Settings(debug=True, secret_key="too-short")


def test_explicit_key_kept():
    assert Settings(debug=False, secret_key=_KEY).secret_key == _KEY


def test_defaults():
    settings = Settings(debug=False, secret_key=_KEY)
    assert settings.token_expire_seconds == 24 * 3600
    assert settings.self_registration_enabled is True
    assert settings.login_rate_limit == "10/minute"
    assert settings.database_url.startswith("sqlite:///")


def test_env_override(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", _KEY)
    monkeypatch.setenv("SELF_REGISTRATION_ENABLED", "false")
    monkeypatch.setenv("TOKEN_EXPIRE_SECONDS", "600")
    settings = Settings(debug=False)
    assert settings.self_registration_enabled is False
    assert settings.token_expire_seconds == 600
