"""Shared test fixtures for the Scene History backend."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from services.checkpoint_store import CheckpointStore
from services.config_manager import ConfigManager


@pytest.fixture(autouse=True)
def isolated_singletons(tmp_path: Path, monkeypatch):
    """Point the config at a temp dir and start every test with fresh singletons."""
    monkeypatch.setenv("SCENE_HISTORY_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setattr(ConfigManager, "_instance", None)
    monkeypatch.setattr(CheckpointStore, "_instance", None)
    yield


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as test_client:
        yield test_client
