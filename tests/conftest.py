import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# Ensure project root is on sys.path so `core.*`, `services.*` imports work
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


# Explicitly enable pytest-asyncio plugin for async tests/fixtures
pytest_plugins = ("pytest_asyncio",)


from config.settings import Settings
from core.db import MemoryStore
from main import create_app
from services.record_service import RecordService


@pytest.fixture()
def store():
    """Fresh in-memory document store per test."""
    return MemoryStore()


@pytest.fixture()
def service(store):
    return RecordService(store)


@pytest.fixture()
def app(store):
    return create_app(Settings(MONGO_URI="memory"), store=store)


@pytest_asyncio.fixture()
async def client(app):
    """Async test client calling the app in-process (no real HTTP server)."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture()
def user_payload():
    return {"name": "Ann", "email": "a@x.com", "phone": "555", "address": "1 Rd"}


@pytest.fixture()
def pet_payload():
    return {
        "petName": "Rex",
        "species": "Dog",
        "breed": "Lab",
        "age": 7,
        "ownerName": "Ann",
        "ownerPhone": "555",
    }
