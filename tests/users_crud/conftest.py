"""
pytest configuration and fixtures for the users CRUD suite
"""

import pytest
import pytest_asyncio
import httpx

from infrastructure import FakePool, FakeUsersTable

from users_api.app import app
from users_api.api.dependencies import get_users_service
from users_api.services.users_service import UsersService


@pytest.fixture
def users_table():
    """Empty users table shared by the pool and the assertions"""
    return FakeUsersTable()


@pytest.fixture
def users_service(users_table):
    return UsersService(FakePool(users_table))


@pytest_asyncio.fixture
async def client(users_service):
    """HTTP client bound to the app with the storage accessor overridden"""
    app.dependency_overrides[get_users_service] = lambda: users_service
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
    app.dependency_overrides.clear()
