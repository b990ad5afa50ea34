# mypy: ignore-errors
# tests/test_health.py
"""Tests for service-level endpoints."""

from fastapi import status
from fastapi.testclient import TestClient

import question_board.main as main_module
from question_board import __version__


def test_health_check(client) -> None:
    """Test the health endpoint."""
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root_describes_api(client) -> None:
    """Test the root endpoint returns basic API information."""
    response = client.get("/")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["version"] == __version__
    assert data["docs"] == "/docs"


def test_startup_creates_tables_when_enabled(app, monkeypatch) -> None:
    """Test the startup hook builds the schema only when asked to."""
    calls = []
    monkeypatch.setattr(main_module, "create_tables", lambda: calls.append(True))

    monkeypatch.setattr(main_module.settings, "auto_create_tables", False)
    with TestClient(app):
        pass
    assert calls == []

    monkeypatch.setattr(main_module.settings, "auto_create_tables", True)
    with TestClient(app):
        pass
    assert calls == [True]
