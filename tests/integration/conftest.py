from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from foh.api.main import create_app  # noqa: E402
from foh.config import Settings  # noqa: E402
from foh.infrastructure.db.database import Database  # noqa: E402

SQLITE_MEMORY_URL = "sqlite+pysqlite:///:memory:"
SEED_PASSWORD = "123456"


@pytest.fixture
def database():
    db = Database(SQLITE_MEMORY_URL)
    db.open()
    db.create_schema()
    yield db
    db.close()


@pytest.fixture
def client():
    settings = Settings(
        database_url=SQLITE_MEMORY_URL,
        app_env="test",
        db_create_schema=True,
        seed_on_startup=True,
    )
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def login(client: TestClient):
    def _login(email: str, password: str = SEED_PASSWORD):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()

    return _login
