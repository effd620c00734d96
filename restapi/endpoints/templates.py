"""Item template endpoints for the API."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from components.template import schemas
from components.template.service import TemplateService
from restapi.endpoints.dependencies import provide

router = APIRouter(
    prefix="/templates",
    tags=["templates"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.Template])
async def read_templates(service: TemplateService = Depends(provide(TemplateService))):
    """Get all templates ordered by category, then name."""
    return await service.list_templates()


@router.get("/by-category", response_model=List[schemas.CategoryGroup])
async def read_templates_by_category(service: TemplateService = Depends(provide(TemplateService))):
    """Get every category in display order with its templates."""
    return await service.list_by_category()


@router.get("/categories", response_model=List[schemas.CategoryInfo])
async def read_categories():
    """Get the fixed categories and whether each one is an inflow."""
    return [
        schemas.CategoryInfo(name=category, is_inflow=schemas.is_inflow(category))
        for category in schemas.CATEGORIES
    ]


@router.post("/", response_model=schemas.Template, status_code=status.HTTP_201_CREATED)
async def create_template(
    template: schemas.TemplateCreate,
    service: TemplateService = Depends(provide(TemplateService)),
):
    """Add a recurring cash-flow item."""
    return await service.add_template(template.name, template.category.value)


@router.delete("/{template_id}")
async def delete_template(
    template_id: int,
    service: TemplateService = Depends(provide(TemplateService)),
):
    """Delete a template and every planner entry made from it."""
    if not await service.delete_template(template_id):
        raise HTTPException(status_code=404, detail="Template not found")
    return {"message": "Template deleted successfully"}
