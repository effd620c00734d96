"""Planner use cases on top of the store."""

import logging
from typing import AsyncIterator, List, Optional, Sequence

from components.core.dates import format_month_string
from components.core.repository import ENTRIES, TEMPLATES, StrideRepository
from components.planner.models import PlannerEntry
from components.planner.reconciliation import entries_to_save, reconcile, resolve_mode
from components.planner.schemas import PlannerRow, PlannerState

logger = logging.getLogger(__name__)


class UnknownTemplatesError(ValueError):
    """Raised when planner rows reference templates that do not exist."""

    def __init__(self, template_ids: Sequence[int]):
        self.template_ids = sorted(template_ids)
        super().__init__(f"Unknown template ids: {self.template_ids}")


class PlannerService:
    """Builds, saves and edits the planner of a month."""

    def __init__(self, repository: StrideRepository):
        self.repository = repository

    async def get_state(self, month: str, editing: bool = False) -> PlannerState:
        return await self._state(self.repository, month, editing)

    def observe_state(self, month: str, editing: bool = False) -> AsyncIterator[PlannerState]:
        """Stream the month's planner, recomputed when templates or entries change."""
        return self.repository.observe_query(
            (TEMPLATES, ENTRIES),
            lambda repo: self._state(repo, month, editing),
        )

    @staticmethod
    async def _state(repository: StrideRepository, month: str, editing: bool) -> PlannerState:
        templates = await repository.get_all_templates()
        entries = await repository.get_entries_for_month(month)
        state = reconcile(templates, entries, resolve_mode(bool(entries), editing))
        state.month = month
        state.month_label = format_month_string(month)
        return state

    async def save_planner(self, month: str, rows: Sequence[PlannerRow]) -> List[PlannerEntry]:
        """
        Save a new or edited planner.

        Rows with a zero amount are dropped. The remaining rows replace
        whatever the month held before.
        """
        requested = {row.template_id for row in rows}
        existing = await self.repository.get_existing_template_ids(list(requested))
        missing = requested - existing
        if missing:
            raise UnknownTemplatesError(missing)

        entries = entries_to_save(month, rows)
        saved = await self.repository.replace_planner_for_month(month, entries)
        logger.info("Saved planner %s: %s of %s rows kept", month, len(saved), len(rows))
        return saved

    async def update_entry(
        self,
        month: str,
        template_id: int,
        amount: Optional[int] = None,
        is_done: Optional[bool] = None,
    ) -> Optional[PlannerEntry]:
        """Upsert one slot of the month. Returns None for an unknown template."""
        if await self.repository.get_template(template_id) is None:
            return None
        return await self.repository.upsert_entry(month, template_id, amount=amount, is_done=is_done)

    async def toggle_done(self, month: str, template_id: int) -> Optional[PlannerEntry]:
        """Flip the completion flag of a saved entry. Returns None when there is no entry."""
        entry = await self.repository.get_entry(month, template_id)
        if entry is None:
            return None
        return await self.repository.upsert_entry(month, template_id, is_done=not entry.is_done)

    async def delete_planner(self, month: str) -> int:
        return await self.repository.delete_entries_for_month(month)
