"""Repository for planner entry operations."""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.notifier import ChangeNotifier
from components.planner.models import PlannerEntry
from components.planner import schemas

logger = logging.getLogger(__name__)

SLOT_COLUMNS = ["planner_month", "template_id"]


class EntryRepository:
    """Repository for planner entry operations."""

    def __init__(self, session: AsyncSession, notifier: Optional[ChangeNotifier] = None):
        """Initialize repository with database session."""
        self.session = session
        self.notifier = notifier

    async def get_all(self) -> List[PlannerEntry]:
        """Get every saved entry."""
        result = await self.session.execute(select(PlannerEntry).order_by(PlannerEntry.id))
        return list(result.scalars().all())

    async def get_for_month(self, month: str) -> List[PlannerEntry]:
        """Get the entries of one month."""
        result = await self.session.execute(
            select(PlannerEntry)
            .where(PlannerEntry.planner_month == month)
            .order_by(PlannerEntry.id)
        )
        return list(result.scalars().all())

    async def get_slot(self, month: str, template_id: int) -> Optional[PlannerEntry]:
        """Get the entry of a template in a month."""
        result = await self.session.execute(
            select(PlannerEntry).where(
                PlannerEntry.planner_month == month,
                PlannerEntry.template_id == template_id,
            )
        )
        return result.scalars().first()

    async def get_months(self) -> List[str]:
        """Get the distinct months that have entries, most recent first."""
        result = await self.session.execute(
            select(PlannerEntry.planner_month)
            .distinct()
            .order_by(PlannerEntry.planner_month.desc())
        )
        return list(result.scalars().all())

    async def upsert(
        self,
        month: str,
        template_id: int,
        amount: Optional[int] = None,
        is_done: Optional[bool] = None,
    ) -> PlannerEntry:
        """
        Insert or update the entry of a template in a month.

        Fields passed as None keep their stored value, or the defaults
        (amount 0, not done) when the entry is new. The write is a single
        INSERT ... ON CONFLICT statement, so concurrent writers to the same
        slot never collide: the last one wins.
        """
        stmt = sqlite_insert(PlannerEntry.__table__).values(
            planner_month=month,
            template_id=template_id,
            amount=amount if amount is not None else 0,
            is_done=is_done if is_done is not None else False,
        )
        updates = {}
        if amount is not None:
            updates["amount"] = stmt.excluded.amount
        if is_done is not None:
            updates["is_done"] = stmt.excluded.is_done
        if updates:
            stmt = stmt.on_conflict_do_update(index_elements=SLOT_COLUMNS, set_=updates)
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=SLOT_COLUMNS)
        await self.session.execute(stmt)

        result = await self.session.execute(
            select(PlannerEntry)
            .where(
                PlannerEntry.planner_month == month,
                PlannerEntry.template_id == template_id,
            )
            .execution_options(populate_existing=True)
        )
        db_entry = result.scalar_one()
        await self.session.commit()
        logger.info(
            "Saved entry %s/%s amount=%s done=%s",
            month, template_id, db_entry.amount, db_entry.is_done,
        )
        self._notify()
        return db_entry

    async def insert_all(self, entries: Sequence[schemas.EntryCreate]) -> List[PlannerEntry]:
        """
        Bulk insert new entries.

        Entries for a (month, template) slot that is already taken, either in
        the store or earlier in the batch, are ignored.
        """
        added = await self._insert_ignoring_taken(entries)
        await self.session.commit()
        if not added:
            return []
        logger.info("Inserted %s planner entries", len(added))
        self._notify()
        return added

    async def delete_for_month(self, month: str) -> int:
        """Delete every entry of a month."""
        result = await self.session.execute(
            delete(PlannerEntry).where(PlannerEntry.planner_month == month)
        )
        await self.session.commit()
        logger.info("Deleted %s entries for %s", result.rowcount, month)
        self._notify()
        return result.rowcount

    async def replace_month(self, month: str, entries: Sequence[schemas.EntryCreate]) -> List[PlannerEntry]:
        """Swap a month's entries for new ones in a single transaction."""
        await self.session.execute(
            delete(PlannerEntry).where(PlannerEntry.planner_month == month)
        )
        added = await self._insert_ignoring_taken(
            [entry for entry in entries if entry.planner_month == month]
        )
        await self.session.commit()
        logger.info("Replaced planner %s with %s entries", month, len(added))
        self._notify()
        return added

    async def _insert_ignoring_taken(self, entries: Sequence[schemas.EntryCreate]) -> List[PlannerEntry]:
        # First occurrence of a slot within the batch wins
        rows = []
        seen = set()
        for entry in entries:
            slot = (entry.planner_month, entry.template_id)
            if slot in seen:
                continue
            seen.add(slot)
            rows.append(entry.model_dump())
        if not rows:
            return []

        result = await self.session.execute(
            sqlite_insert(PlannerEntry.__table__)
            .values(rows)
            .on_conflict_do_nothing(index_elements=SLOT_COLUMNS)
            .returning(PlannerEntry.__table__.c.id)
        )
        ids = list(result.scalars().all())
        if not ids:
            return []

        result = await self.session.execute(
            select(PlannerEntry)
            .where(PlannerEntry.id.in_(ids))
            .order_by(PlannerEntry.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    def _notify(self) -> None:
        if self.notifier is not None:
            self.notifier.notify(PlannerEntry.__tablename__)
