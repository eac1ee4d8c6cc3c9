"""
AudioCraft Backend: Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── store: Empty InMemoryAccountStore
    ├── upload_dir: Temporary upload directory wired into settings
    ├── test_client: HTTPX AsyncClient bound to the app and `store`
    └── signed_up: Helper that signs an account up through the API
"""

import os
import tempfile

# Environment must be in place before audiocraft.config builds its singleton
os.environ["JWT_SECRET"] = "test-signing-key-0123456789abcdef0123456789abcdef"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="audiocraft_test_")
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from audiocraft.config import settings
from audiocraft.database import InMemoryAccountStore, get_account_store


@pytest.fixture
def store():
    """A fresh, empty account store for each test."""
    return InMemoryAccountStore()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """
    Points settings.upload_dir at a per-test directory.

    Tests inspect it afterwards to check that uploads were discarded.
    """
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(path))
    return path


@pytest_asyncio.fixture
async def test_client(store, upload_dir):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    The account store dependency is overridden with the `store` fixture so
    tests can inspect and mutate accounts directly.
    """
    from audiocraft.main import app

    app.dependency_overrides[get_account_store] = lambda: store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def signed_up(test_client):
    """
    Returns an async helper: `await signed_up(email, password)` → (token, body).
    """

    async def _signup(email: str = "a@x.com", password: str = "pw1"):
        response = await test_client.post(
            "/api/auth/signup", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        body = response.json()
        return body["token"], body

    return _signup
