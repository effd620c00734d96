"""Item template use cases."""

from typing import List

from components.core.repository import StrideRepository
from components.template.models import ItemTemplate
from components.template.schemas import CATEGORIES, CategoryGroup, Template, is_inflow


class TemplateService:
    """Manages the user's recurring cash-flow items."""

    def __init__(self, repository: StrideRepository):
        self.repository = repository

    async def list_templates(self) -> List[ItemTemplate]:
        return await self.repository.get_all_templates()

    async def list_by_category(self) -> List[CategoryGroup]:
        """Every category in display order with its templates, empty ones included."""
        templates = await self.repository.get_all_templates()
        return [
            CategoryGroup(
                category=category,
                is_inflow=is_inflow(category),
                templates=[
                    Template.model_validate(template)
                    for template in templates
                    if template.category == category
                ],
            )
            for category in CATEGORIES
        ]

    async def add_template(self, name: str, category: str) -> ItemTemplate:
        name = name.strip()
        if not name:
            raise ValueError("Name must not be blank")
        return await self.repository.insert_template(name, category)

    async def delete_template(self, template_id: int) -> bool:
        return await self.repository.delete_template(template_id)
