"""Shared endpoint dependencies."""

from typing import Callable, Type, TypeVar

from fastapi import Depends
from fastapi.requests import HTTPConnection
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.factory import ServiceFactory
from components.core.init_db import get_db, get_notifier
from components.core.notifier import ChangeNotifier
from components.core.repository import StrideRepository

T = TypeVar("T")


async def get_repository(
    connection: HTTPConnection,
    db: AsyncSession = Depends(get_db),
    notifier: ChangeNotifier = Depends(get_notifier),
) -> StrideRepository:
    """Repository bound to the request's session."""
    return StrideRepository(db, notifier, connection.app.state.db_manager.get_db)


def provide(service_cls: Type[T]) -> Callable[..., T]:
    """Dependency that builds service_cls through the service factory."""

    def dependency(repository: StrideRepository = Depends(get_repository)) -> T:
        return ServiceFactory(repository).create(service_cls)

    return dependency
