"""Service test fixtures — FastAPI test client over the seeded test database.

Invariants:
    - get_db dependency overridden to use the test session factory
    - db_manager patched so the readiness probe hits the test engine
    - The employees resource is registered for the duration of each test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from filterscope.adapters.sqlalchemy_adapter import SQLAlchemyAdapter
from filterscope.infrastructure.database import get_db, DatabaseSessionManager
from filterscope.services.resource_registry import resource_registry
import filterscope.infrastructure.database as db_module
from filterscope.main import app
from tests.sample_resources import build_employee_resource


@pytest.fixture
def employee_resource():
    resource = build_employee_resource(SQLAlchemyAdapter())
    resource_registry.register(resource)
    yield resource
    resource_registry.unregister(resource.name)


@pytest.fixture
async def client(test_engine, test_session_factory, employee_resource):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
