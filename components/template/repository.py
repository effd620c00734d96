"""Repository for item template operations."""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.notifier import ChangeNotifier
from components.planner.models import PlannerEntry
from components.template.models import ItemTemplate

logger = logging.getLogger(__name__)


class TemplateRepository:
    """Repository for item template operations."""

    def __init__(self, session: AsyncSession, notifier: Optional[ChangeNotifier] = None):
        """Initialize repository with database session."""
        self.session = session
        self.notifier = notifier

    async def get_all(self) -> List[ItemTemplate]:
        """Get all templates ordered by category, then name."""
        result = await self.session.execute(
            select(ItemTemplate).order_by(ItemTemplate.category, ItemTemplate.name)
        )
        return list(result.scalars().all())

    async def get_by_id(self, template_id: int) -> Optional[ItemTemplate]:
        """Get template by ID."""
        result = await self.session.execute(
            select(ItemTemplate).where(ItemTemplate.id == template_id)
        )
        return result.scalar_one_or_none()

    async def get_existing_ids(self, template_ids: List[int]) -> set[int]:
        """Return the subset of template_ids that exist."""
        if not template_ids:
            return set()
        result = await self.session.execute(
            select(ItemTemplate.id).where(ItemTemplate.id.in_(template_ids))
        )
        return set(result.scalars().all())

    async def create(self, name: str, category: str) -> ItemTemplate:
        """Create a new template."""
        db_template = ItemTemplate(name=name, category=category)
        self.session.add(db_template)
        await self.session.commit()
        await self.session.refresh(db_template)
        logger.info("Added template %s (%s) id=%s", name, category, db_template.id)
        self._notify(ItemTemplate.__tablename__)
        return db_template

    async def delete(self, template_id: int) -> bool:
        """Delete template by ID. Its planner entries go with it through ON DELETE CASCADE."""
        db_template = await self.get_by_id(template_id)
        if not db_template:
            return False

        await self.session.delete(db_template)
        await self.session.commit()
        logger.info("Deleted template id=%s", template_id)
        self._notify(ItemTemplate.__tablename__, PlannerEntry.__tablename__)
        return True

    def _notify(self, *tables: str) -> None:
        if self.notifier is not None:
            self.notifier.notify(*tables)
