from __future__ import annotations

import pytest

from regcheck.config import DEFAULT_DATABASE_URL, RegcheckConfig, build_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ("DATABASE_URL", "REGCHECK_DEBUG", "LOG_LEVEL", "CORS_ALLOW_ORIGINS", "REGCHECK_ENV_FILE"):
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_env_file(tmp_path) -> None:
    config = build_config(str(tmp_path / "missing.env"))

    assert config.database_url == DEFAULT_DATABASE_URL
    assert config.debug is False
    assert config.log_level == "INFO"
    assert config.cors_allow_origins == ["*"]


def test_env_file_values(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "DATABASE_URL=sqlite:///:memory:\n"
        "REGCHECK_DEBUG=true\n"
        "LOG_LEVEL=debug\n"
        "CORS_ALLOW_ORIGINS=https://a.example, https://b.example\n"
    )

    config = build_config(str(env_file))
    assert config.database_url == "sqlite:///:memory:"
    assert config.debug is True
    assert config.log_level == "DEBUG"
    assert config.cors_allow_origins == ["https://a.example", "https://b.example"]


def test_environment_overrides_env_file(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("LOG_LEVEL=debug\n")
    monkeypatch.setenv("LOG_LEVEL", "warning")

    assert build_config(str(env_file)).log_level == "WARNING"


def test_env_file_path_override(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text("DATABASE_URL=sqlite:///custom.db\n")
    monkeypatch.setenv("REGCHECK_ENV_FILE", str(env_file))

    assert build_config().database_url == "sqlite:///custom.db"


def test_unknown_key_uses_caller_default() -> None:
    config = RegcheckConfig(None)
    assert config("SOMETHING_ELSE", default="fallback") == "fallback"
    assert config("SOME_INT", cast=int, default=3) == 3
