"""Table change notifications and change-driven read streams."""

import asyncio
import logging
from contextlib import contextmanager
from typing import AsyncContextManager, AsyncIterator, Awaitable, Callable, Iterable, Iterator, Set, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Pending change notifications for one observer."""

    def __init__(self, tables: Iterable[str]) -> None:
        self.tables: Set[str] = set(tables)
        self._queue: asyncio.Queue = asyncio.Queue()

    def push(self, tables: Set[str]) -> None:
        if self.tables & tables:
            self._queue.put_nowait(tables)

    async def wait(self) -> None:
        """Wait for the next change, collapsing any that piled up meanwhile."""
        await self._queue.get()
        while not self._queue.empty():
            self._queue.get_nowait()


class ChangeNotifier:
    """Tells observers which tables changed after a commit."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    @contextmanager
    def subscribe(self, *tables: str) -> Iterator[Subscription]:
        subscription = Subscription(tables)
        self._subscriptions.append(subscription)
        try:
            yield subscription
        finally:
            self._subscriptions.remove(subscription)

    def notify(self, *tables: str) -> None:
        changed = set(tables)
        logger.debug("Tables changed: %s", ", ".join(sorted(changed)))
        for subscription in list(self._subscriptions):
            subscription.push(changed)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)


async def observe(
    notifier: ChangeNotifier,
    session_factory: Callable[[], AsyncContextManager[AsyncSession]],
    tables: Iterable[str],
    query: Callable[[AsyncSession], Awaitable[T]],
) -> AsyncIterator[T]:
    """
    Yield the query result now and again after every change to `tables`.

    Each evaluation runs in its own short-lived session. The subscription is
    registered before the first evaluation so no change is missed, and is
    released when the consumer stops iterating.
    """
    with notifier.subscribe(*tables) as subscription:
        while True:
            async with session_factory() as session:
                result = await query(session)
            yield result
            await subscription.wait()
