# tests/conftest.py

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from config import Settings
from infrastructure.database import Database
from main import create_app


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(database_url=f"sqlite:///{tmp_path / 'todo.db'}")


@pytest.fixture()
def db(settings: Settings):
    store = Database(settings.database_url)
    store.connect()
    yield store
    store.close()


@pytest.fixture()
def client(settings: Settings):
    """A client whose app has gone through startup, so the store is connected."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client
