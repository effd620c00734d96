"""Single entry point to the template and planner entry stores."""

from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from components.core.notifier import ChangeNotifier, observe
from components.planner import schemas as planner_schemas
from components.planner.models import PlannerEntry
from components.planner.repository import EntryRepository
from components.template.models import ItemTemplate
from components.template.repository import TemplateRepository

TEMPLATES = ItemTemplate.__tablename__
ENTRIES = PlannerEntry.__tablename__

SessionFactory = Callable[[], AsyncContextManager[AsyncSession]]


class StrideRepository:
    """
    Pass-through over both stores.

    Plain reads and mutations run on the given session. The observe_*
    methods yield a fresh result every time the tables they read change, and
    need a session factory because each evaluation opens its own session.
    """

    def __init__(
        self,
        session: AsyncSession,
        notifier: Optional[ChangeNotifier] = None,
        session_factory: Optional[SessionFactory] = None,
    ):
        self.session = session
        self.notifier = notifier or ChangeNotifier()
        self.session_factory = session_factory
        self.templates = TemplateRepository(session, self.notifier)
        self.entries = EntryRepository(session, self.notifier)

    # Item templates

    async def get_all_templates(self) -> List[ItemTemplate]:
        return await self.templates.get_all()

    async def get_template(self, template_id: int) -> Optional[ItemTemplate]:
        return await self.templates.get_by_id(template_id)

    async def get_existing_template_ids(self, template_ids: List[int]) -> set[int]:
        return await self.templates.get_existing_ids(template_ids)

    async def insert_template(self, name: str, category: str) -> ItemTemplate:
        return await self.templates.create(name, category)

    async def delete_template(self, template_id: int) -> bool:
        return await self.templates.delete(template_id)

    # Planner entries

    async def get_all_entries(self) -> List[PlannerEntry]:
        return await self.entries.get_all()

    async def get_entries_for_month(self, month: str) -> List[PlannerEntry]:
        return await self.entries.get_for_month(month)

    async def get_entry(self, month: str, template_id: int) -> Optional[PlannerEntry]:
        return await self.entries.get_slot(month, template_id)

    async def get_planner_months(self) -> List[str]:
        return await self.entries.get_months()

    async def upsert_entry(
        self,
        month: str,
        template_id: int,
        amount: Optional[int] = None,
        is_done: Optional[bool] = None,
    ) -> PlannerEntry:
        return await self.entries.upsert(month, template_id, amount=amount, is_done=is_done)

    async def insert_entries(self, entries: Sequence[planner_schemas.EntryCreate]) -> List[PlannerEntry]:
        if not entries:
            return []
        return await self.entries.insert_all(entries)

    async def delete_entries_for_month(self, month: str) -> int:
        return await self.entries.delete_for_month(month)

    async def replace_planner_for_month(
        self, month: str, entries: Sequence[planner_schemas.EntryCreate]
    ) -> List[PlannerEntry]:
        return await self.entries.replace_month(month, entries)

    # Change-notifying reads

    def observe_templates(self) -> AsyncIterator[List[ItemTemplate]]:
        return self._observe((TEMPLATES,), lambda repo: repo.get_all_templates())

    def observe_entries(self) -> AsyncIterator[List[PlannerEntry]]:
        return self._observe((ENTRIES,), lambda repo: repo.get_all_entries())

    def observe_entries_for_month(self, month: str) -> AsyncIterator[List[PlannerEntry]]:
        return self._observe((ENTRIES,), lambda repo: repo.get_entries_for_month(month))

    def observe_planner_months(self) -> AsyncIterator[List[str]]:
        return self._observe((ENTRIES,), lambda repo: repo.get_planner_months())

    def observe_query(self, tables: Sequence[str], query) -> AsyncIterator:
        """Re-run query(repository) whenever any of tables changes."""
        return self._observe(tuple(tables), query)

    def _observe(self, tables, query) -> AsyncIterator:
        if self.session_factory is None:
            raise ValueError("Observing the store requires a session factory")

        async def run(session: AsyncSession):
            return await query(StrideRepository(session, self.notifier))

        return observe(self.notifier, self.session_factory, tables, run)
