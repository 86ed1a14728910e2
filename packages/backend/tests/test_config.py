"""Settings tests — the signing key must fail closed outside dev/test."""

import pytest
from pydantic import ValidationError

from homelist.config import DEV_JWT_SECRET, Settings


def test_development_falls_back_to_dev_key(monkeypatch):
    monkeypatch.delenv("HOMELIST_JWT_SECRET", raising=False)
    settings = Settings(environment="development", jwt_secret="")
    assert settings.jwt_secret == DEV_JWT_SECRET
    assert settings.jwt_secret_is_default


def test_production_without_key_is_fatal(monkeypatch):
    monkeypatch.delenv("HOMELIST_JWT_SECRET", raising=False)
    with pytest.raises(ValidationError, match="HOMELIST_JWT_SECRET"):
        Settings(environment="production", jwt_secret="")


def test_production_rejects_dev_key():
    with pytest.raises(ValidationError):
        Settings(environment="production", jwt_secret=DEV_JWT_SECRET)


def test_production_rejects_short_key():
    with pytest.raises(ValidationError, match="at least 32"):
        Settings(environment="production", jwt_secret="too-short")


def test_production_accepts_real_key():
    secret = "s" * 48
    settings = Settings(environment="production", jwt_secret=secret)
    assert settings.jwt_secret == secret
    assert not settings.jwt_secret_is_default


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("HOMELIST_BCRYPT_ROUNDS", "10")
    monkeypatch.setenv("HOMELIST_ENVIRONMENT", "test")
    settings = Settings()
    assert settings.bcrypt_rounds == 10
    assert settings.environment == "test"
