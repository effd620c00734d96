"""Pydantic schemas for item template data validation."""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    """Fixed set of template categories, in display order."""
    INCOME = "Income"
    RECEIVABLES = "Receivables"
    FIXED_EXPENSES = "Fixed Expenses"
    VARIABLE_EXPENSES = "Variable Expenses"
    LOANS_AND_EMI = "Loans & EMI"
    CREDIT_CARDS = "Credit Cards"
    PERSONAL_DEBT = "Personal Debt"


CATEGORIES: List[str] = [category.value for category in Category]
INFLOW_CATEGORIES = frozenset({Category.INCOME.value, Category.RECEIVABLES.value})


def is_inflow(category: str) -> bool:
    """Income and Receivables bring money in, everything else is an outflow."""
    return category in INFLOW_CATEGORIES


class TemplateBase(BaseModel):
    """Base template schema."""
    name: str = Field(..., max_length=100)
    category: Category

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name must not be blank")
        return value


class TemplateCreate(TemplateBase):
    """Schema for template creation."""
    pass


class Template(BaseModel):
    """Schema for template response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str


class CategoryInfo(BaseModel):
    """Schema for a category and its cash-flow direction."""
    name: str
    is_inflow: bool


class CategoryGroup(BaseModel):
    """Schema for the templates of one category."""
    category: str
    is_inflow: bool
    templates: List[Template]
