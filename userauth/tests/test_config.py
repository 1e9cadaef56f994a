from __future__ import annotations

import pytest

from userauth.shared.config import AppConfig, SecurityConfig, TokenConfig

STRONG_SECRET = "x" * 48


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("APP_ENV", "JWT_SECRET", "ALLOWED_ORIGINS", "ENABLE_HSTS", "SESSION_TOKEN_TTL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    config = AppConfig(JWT_SECRET="dev-secret")

    assert config.tokens.session_ttl == 3600
    assert config.tokens.reset_ttl == 900
    assert config.tokens.algorithm == "HS256"
    assert config.security.allowed_origins == ["*"]
    assert config.security.expose_internal_errors is True
    assert config.is_production() is False


def test_section_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")
    monkeypatch.setenv("ENABLE_HSTS", "yes")
    monkeypatch.setenv("SESSION_TOKEN_TTL", "120")

    assert SecurityConfig().allowed_origins == ["https://a.example", "https://b.example"]
    assert SecurityConfig().enable_hsts is True
    assert TokenConfig().session_ttl == 120


def test_secret_is_required() -> None:
    with pytest.raises(ValueError):
        AppConfig()


def test_production_rejects_weak_secret() -> None:
    with pytest.raises(SystemExit):
        AppConfig(APP_ENV="production", JWT_SECRET="secret")


def test_production_rejects_short_secret() -> None:
    with pytest.raises(SystemExit):
        AppConfig(APP_ENV="prod", JWT_SECRET="a" * 31)


def test_production_accepts_strong_secret_with_warnings(capsys: pytest.CaptureFixture[str]) -> None:
    config = AppConfig(APP_ENV="production", JWT_SECRET=STRONG_SECRET)

    assert config.is_production() is True
    assert "PRODUCTION SECURITY WARNINGS" in capsys.readouterr().err
