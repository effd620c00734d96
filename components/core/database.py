"""Core classes and mixins for DB connections"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional, cast
from typing import Callable, AsyncContextManager

from sqlalchemy import event, select
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from components.core import config

logger = logging.getLogger(__name__)

Base = declarative_base()
SessionMaker = Callable[[], AsyncContextManager[AsyncSession]]

# Bump whenever a table definition changes; a mismatch rebuilds the store.
SCHEMA_VERSION = 1


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite leaves foreign keys, and so ON DELETE CASCADE, off per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    def __init__(self, engine: Optional[AsyncEngine] = None, url: Optional[str] = None) -> None:
        """Initialize DatabaseManager with optional engine for testing."""
        self.url = url or config.get_settings().async_db_url
        self.engine = engine or self._create_engine()
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_foreign_keys)

    def _create_engine(self) -> AsyncEngine:
        """Create async engine for the local store."""
        options: dict[str, Any] = {"echo": False}
        if not self.url.startswith("sqlite"):
            options.update(pool_pre_ping=True, pool_size=5, max_overflow=10)
        return create_async_engine(self.url, **options)

    def get_session(self) -> SessionMaker:
        """Returns SessionMaker for database sessions."""
        if not self.engine:
            raise ValueError("Database engine wasn't initialized")

        return cast(
            SessionMaker,
            sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autocommit=False,
                autoflush=False,
            ),
        )

    @asynccontextmanager
    async def get_db(self) -> AsyncContextManager[AsyncSession]:
        """Get database session context manager."""
        async_session = self.get_session()
        async with async_session() as session:
            try:
                yield session
            finally:
                await session.close()

    async def create_schema(self) -> None:
        """
        Create all tables and stamp the schema version.

        A store stamped with a different version is dropped and rebuilt,
        losing its data.
        """
        # Register every table on Base.metadata before creating
        import components.template.models  # noqa: F401
        import components.planner.models  # noqa: F401
        from components.core.models import SchemaVersion

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            result = await conn.execute(select(SchemaVersion.version))
            stored = result.scalar_one_or_none()

            if stored is not None and stored != SCHEMA_VERSION:
                logger.warning(
                    "Schema version %s does not match %s, rebuilding store",
                    stored, SCHEMA_VERSION,
                )
                await conn.run_sync(Base.metadata.drop_all)
                await conn.run_sync(Base.metadata.create_all)
                stored = None

            if stored is None:
                await conn.execute(
                    SchemaVersion.__table__.insert().values(id=1, version=SCHEMA_VERSION)
                )
                logger.info("Initialized store at schema version %s", SCHEMA_VERSION)

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
