"""
Tests for environment-driven settings.
"""

import pytest

from cache_aside.config import Settings, create_redis_client

ENV_VARS = ["DATABASE_URL", "REDIS_URL", "CACHE_KEY", "CACHE_TTL", "PORT", "APP_ENV", "NODE_ENV", "LOG_FORMAT"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings()

    assert settings.cache_key == "data"
    assert settings.cache_ttl == 60
    assert settings.api_port == 3000
    assert settings.is_production is False
    assert settings.cache_enabled is False


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/app")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CACHE_TTL", "30")

    settings = Settings()

    assert settings.database_url == "postgresql://u:p@db:5432/app"
    assert settings.api_port == 8080
    assert settings.cache_ttl == 30


def test_cache_requires_production_and_redis_url(monkeypatch):
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379")
    assert Settings().cache_enabled is False

    monkeypatch.setenv("NODE_ENV", "production")
    assert Settings().cache_enabled is True

    monkeypatch.delenv("REDIS_URL")
    assert Settings().cache_enabled is False


def test_app_env_takes_precedence_over_node_env(monkeypatch):
    monkeypatch.setenv("NODE_ENV", "production")
    monkeypatch.setenv("APP_ENV", "staging")

    assert Settings().is_production is False


@pytest.mark.parametrize("kwargs", [{"cache_ttl": 0}, {"log_format": "xml"}])
def test_invalid_settings_raise(kwargs):
    with pytest.raises(ValueError):
        Settings(**kwargs)


def test_redis_client_requires_url():
    with pytest.raises(ValueError):
        create_redis_client(Settings())
