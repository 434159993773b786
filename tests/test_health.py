"""Tests for health check endpoint."""

from pathlib import Path

from fastapi.testclient import TestClient

from src.config import Settings
from src.main import create_app


def _settings(tmp_path: Path) -> Settings:
    return Settings(
        jwt_secret_key="test-secret-key-for-testing-only",  # type: ignore[arg-type]
        database_path=str(tmp_path / "test.db"),
        app_version="1.2.3",
        log_json=False,
    )


def test_health_check_returns_healthy(tmp_path: Path) -> None:
    """Health endpoint should return healthy status without a token."""
    with TestClient(create_app(_settings(tmp_path))) as client:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "1.2.3"}


def test_health_check_reports_unavailable_database(tmp_path: Path) -> None:
    """Health endpoint should answer 503 when the database is gone."""
    app = create_app(_settings(tmp_path))
    with TestClient(app) as client:
        database = app.state.database
        connection, database._connection = database._connection, None

        response = client.get("/health")
        database._connection = connection

        assert response.status_code == 503
        assert response.json() == {"message": "Service unhealthy: RuntimeError"}
