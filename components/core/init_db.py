"""Database initialization and dependency injection."""

from typing import AsyncGenerator, Optional

import fastapi
from fastapi.requests import HTTPConnection
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.database import DatabaseManager
from components.core.notifier import ChangeNotifier
# Import all models to ensure they're registered
import components.core.models
import components.template.models
import components.planner.models

# Create a single instance of DatabaseManager
db_manager = DatabaseManager()


async def get_db(connection: HTTPConnection) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for getting database sessions."""
    async with connection.app.state.db_manager.get_db() as session:
        yield session


def get_notifier(connection: HTTPConnection) -> ChangeNotifier:
    """FastAPI dependency for the application's change notifier."""
    return connection.app.state.notifier


def init_db(app: fastapi.FastAPI, manager: Optional[DatabaseManager] = None) -> None:
    """Attach the database and its change notifier to the app."""
    app.state.db_manager = manager or db_manager
    app.state.notifier = ChangeNotifier()
