"""Pytest configuration for backend tests.

Points the app at a throwaway songs file and a known admin credential via
FastAPI dependency overrides, so no user config or data is touched.
"""

from pathlib import Path

import bcrypt
import pytest
from fastapi.testclient import TestClient
from loguru import logger

from nowplaying.core.config import AuthConfig, Config
from nowplaying.domain.auth import issue_token
from nowplaying.domain.queue import SongStore
from web.backend.deps import get_config, get_store
from web.backend.main import app

ADMIN_PASSWORD = "hunter2"


@pytest.fixture
def caplog(caplog):
    """Route loguru records into pytest's caplog."""
    handler_id = logger.add(caplog.handler, format="{message}", level="DEBUG")
    yield caplog
    logger.remove(handler_id)


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    config = Config()
    config.storage.songs_file = str(tmp_path / "data" / "songs.md")
    config.auth = AuthConfig(
        jwt_secret="test-secret",
        admin_username="admin",
        admin_password_hash=bcrypt.hashpw(
            ADMIN_PASSWORD.encode(), bcrypt.gensalt(rounds=4)
        ).decode(),
    )
    return config


@pytest.fixture
def store(test_config: Config) -> SongStore:
    return SongStore.from_config(test_config)


@pytest.fixture
def client(test_config: Config, store: SongStore):
    app.dependency_overrides[get_config] = lambda: test_config
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(test_config: Config) -> dict[str, str]:
    token = issue_token("admin", test_config.auth)
    return {"Authorization": f"Bearer {token}"}
