# tests/conftest.py
import pytest
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

from logistics.core.db import get_db
from logistics.main import app
from fakes import FakeDatabase

@pytest.fixture(scope="session")
def anyio_backend():
    # keep AnyIO on asyncio for the whole test session
    return "asyncio"

@pytest.fixture
def db():
    return FakeDatabase("logistics")

@pytest.fixture
async def test_client(db):
    app.dependency_overrides[get_db] = lambda: db
    try:
        async with LifespanManager(app):
            transport = ASGITransport(app=app, raise_app_exceptions=True)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
    finally:
        app.dependency_overrides.pop(get_db, None)
