"""Shared pytest fixtures for the recipebox test suite."""

from __future__ import annotations

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from recipebox.config import get_settings
from recipebox.db.repository import reset_repository_state
from recipebox.server import deps
from recipebox.server.app import create_app
from tests.fakes import FakeSpoonacular


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Ensure each test uses an isolated SQLite database and no real API key."""

    db_path = tmp_path / "test_recipebox.db"
    monkeypatch.setenv("RECIPEBOX_DATABASE_PATH", str(db_path))
    monkeypatch.setenv("RECIPEBOX_SEARCH_DEBOUNCE", "0.01")
    monkeypatch.delenv("SPOONACULAR_KEY", raising=False)
    monkeypatch.delenv("RECIPEBOX_SPOONACULAR_KEY", raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    reset_repository_state()
    yield
    reset_repository_state()
    get_settings.cache_clear()


@pytest.fixture()
def app() -> Generator[FastAPI, None, None]:
    """Create a new FastAPI app instance for each test and reset overrides."""

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    """Return a test client bound to the FastAPI app."""

    return TestClient(app)


@pytest.fixture()
def upstream() -> FakeSpoonacular:
    """In-memory stand-in for the Spoonacular API."""

    return FakeSpoonacular()


@pytest.fixture()
def proxied_client(app, upstream) -> TestClient:
    """Test client whose proxy endpoints talk to the fake upstream with a valid key."""

    app.dependency_overrides[deps.get_upstream_client] = lambda: upstream.client()
    return TestClient(app)
