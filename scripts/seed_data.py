"""Script to seed demo templates and a planner into the database."""

import asyncio
import logging
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.config import get_settings
from components.core.dates import current_month
from components.core.init_db import db_manager
from components.core.logger import configure_logging
from components.core.repository import StrideRepository
from components.planner.models import PlannerEntry
from components.planner.schemas import EntryCreate
from components.template.models import ItemTemplate

logger = logging.getLogger(__name__)

DEMO_TEMPLATES = [
    ("Salary", "Income", 500000),
    ("Freelance", "Receivables", 75000),
    ("Rent", "Fixed Expenses", 180000),
    ("Groceries", "Variable Expenses", 60000),
    ("Car EMI", "Loans & EMI", 95000),
    ("Visa", "Credit Cards", 40000),
    ("Loan from Sam", "Personal Debt", 0),
]


async def seed_data(session: AsyncSession, month: Optional[str] = None) -> int:
    """Replace the store contents with demo data. Returns the number of entries saved."""
    month = month or current_month()

    # Clear existing data
    await session.execute(delete(PlannerEntry))
    await session.execute(delete(ItemTemplate))
    await session.commit()

    repo = StrideRepository(session)
    entries = []
    for name, category, amount in DEMO_TEMPLATES:
        template = await repo.insert_template(name, category)
        if amount > 0:
            entries.append(EntryCreate(planner_month=month, template_id=template.id, amount=amount))

    saved = await repo.insert_entries(entries)
    logger.info("Seeded %s templates and %s entries for %s", len(DEMO_TEMPLATES), len(saved), month)
    return len(saved)


async def main():
    configure_logging(get_settings())
    await db_manager.create_schema()
    async with db_manager.get_db() as session:
        await seed_data(session)
    await db_manager.dispose()


if __name__ == "__main__":
    asyncio.run(main())
