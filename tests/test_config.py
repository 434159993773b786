"""Tests for configuration and startup behaviour."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from src.config import Settings
from src.main import create_app
from src.modules.auth.exceptions import ConfigurationError


def test_missing_secret_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Settings cannot be built without a signing secret."""
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)

    with pytest.raises(ValidationError, match="jwt_secret_key"):
        Settings(_env_file=None)  # type: ignore[call-arg]


def test_secret_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET_KEY", "from-the-environment")

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.jwt_secret_key.get_secret_value() == "from-the-environment"
    assert "from-the-environment" not in repr(settings)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET_KEY", "secret")

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.jwt_algorithm == "HS256"
    assert settings.jwt_expire_seconds == 3600
    assert settings.tracing_enabled is False


def test_empty_secret_stops_app_creation(tmp_path: Path) -> None:
    settings = Settings(
        jwt_secret_key="",  # type: ignore[arg-type]
        database_path=str(tmp_path / "test.db"),
        _env_file=None,  # type: ignore[call-arg]
    )

    with pytest.raises(ConfigurationError):
        create_app(settings)
