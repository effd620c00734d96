"""
Pytest configuration and fixtures for the Stride test suite
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from components.core.database import DatabaseManager
from components.core.repository import StrideRepository
from restapi.router import create_app


@pytest.fixture
def db_url(tmp_path):
    """URL of a fresh SQLite store in a temporary directory"""
    return f"sqlite+aiosqlite:///{tmp_path / 'stride_test.db'}"


@pytest.fixture
def client(db_url):
    """Test client with the app running against a temporary store"""
    app = create_app(DatabaseManager(url=db_url))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def run_db(db_url):
    """
    Run an async scenario against a fresh store.

    The scenario receives a StrideRepository and its return value is passed
    back to the test.
    """
    def run(scenario):
        async def main():
            manager = DatabaseManager(url=db_url)
            await manager.create_schema()
            try:
                async with manager.get_db() as session:
                    repository = StrideRepository(session, session_factory=manager.get_db)
                    return await scenario(repository)
            finally:
                await manager.dispose()

        return asyncio.run(main())

    return run


@pytest.fixture
def templates(client):
    """Create one template per kind of flow and return them by name"""
    created = {}
    for name, category in [
        ("Salary", "Income"),
        ("Freelance", "Receivables"),
        ("Rent", "Fixed Expenses"),
        ("Groceries", "Variable Expenses"),
    ]:
        response = client.post("/templates/", json={"name": name, "category": category})
        assert response.status_code == 201
        created[name] = response.json()
    return created
