"""Dashboard aggregation over saved planners."""

from typing import AsyncIterator, List

from components.core.dates import format_month_string
from components.core.repository import ENTRIES, TEMPLATES, StrideRepository
from components.dashboard.schemas import DashboardCard
from components.template.schemas import is_inflow


class DashboardService:
    """Lists every month that has a planner, most recent first."""

    def __init__(self, repository: StrideRepository):
        self.repository = repository

    async def get_cards(self) -> List[DashboardCard]:
        return await self._cards(self.repository)

    def observe_cards(self) -> AsyncIterator[List[DashboardCard]]:
        return self.repository.observe_query((TEMPLATES, ENTRIES), self._cards)

    @staticmethod
    async def _cards(repository: StrideRepository) -> List[DashboardCard]:
        months = await repository.get_planner_months()
        if not months:
            return []

        entries = await repository.get_all_entries()
        categories = {
            template.id: template.category
            for template in await repository.get_all_templates()
        }

        net_by_month = {month: 0 for month in months}
        for entry in entries:
            # Entries of a deleted template count as outflow
            category = categories.get(entry.template_id)
            sign = 1 if category is not None and is_inflow(category) else -1
            net_by_month[entry.planner_month] = net_by_month.get(entry.planner_month, 0) + sign * entry.amount

        return [
            DashboardCard(
                month=month,
                month_label=format_month_string(month),
                net_balance=net_by_month[month],
            )
            for month in months
        ]
