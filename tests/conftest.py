"""Shared fixtures: HTTP clients and an authenticated user."""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from app.config import settings
from app.database import database, ensure_indexes
from app.main import app


@pytest_asyncio.fixture
async def app_client():
    """
    HTTP client backed by a throwaway ``<db>_test`` database.

    Skips when MongoDB can't be reached. The database is dropped afterwards.
    """
    mongo = AsyncIOMotorClient(settings.mongodb_url, serverSelectionTimeoutMS=1000)
    try:
        await mongo.admin.command("ping")
    except PyMongoError:
        mongo.close()
        pytest.skip("MongoDB is not available")

    db_name = f"{settings.mongodb_db_name}_test"
    await mongo.drop_database(db_name)
    await ensure_indexes(mongo[db_name])

    # The lifespan doesn't run under ASGITransport, so wire the db in directly
    previous_db = database.db
    database.db = mongo[db_name]

    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client
    finally:
        database.db = previous_db
        await mongo.drop_database(db_name)
        mongo.close()


@pytest_asyncio.fixture
async def api_client():
    """HTTP client for routes that don't touch the database."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def auth_headers(app_client):
    """Bearer headers for a freshly registered user."""
    credentials = {"email": "logger@example.com", "password": "password123"}
    await app_client.post("/auth/register", json={**credentials, "full_name": "Time Logger"})

    response = await app_client.post("/auth/login", json=credentials)
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
