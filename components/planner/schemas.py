"""Pydantic schemas for planner data validation."""

from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from components.core.dates import MONTH_PATTERN

Month = Annotated[str, Field(pattern=MONTH_PATTERN, examples=["2025-11"])]


class PlannerMode(str, Enum):
    """How a month's planner is presented."""
    CREATE = "create"  # nothing saved for the month yet
    EDIT = "edit"      # saved, all templates shown for editing
    VIEW = "view"      # saved, only existing entries shown


class EntryBase(BaseModel):
    """Base planner entry schema."""
    planner_month: Month
    template_id: int
    amount: int = Field(0, ge=0)
    is_done: bool = False


class EntryCreate(EntryBase):
    """Schema for planner entry creation."""
    pass


class Entry(EntryBase):
    """Schema for planner entry response."""
    model_config = ConfigDict(from_attributes=True)

    id: int


class EntryUpdate(BaseModel):
    """Schema for a single entry edit. Omitted fields keep their value."""
    amount: Optional[int] = Field(None, ge=0)
    is_done: Optional[bool] = None


class PlannerRow(BaseModel):
    """Schema for one row of a planner being saved."""
    template_id: int
    amount: int = Field(0, ge=0)
    is_done: bool = False


class PlannerSave(BaseModel):
    """Schema for saving a whole month's planner."""
    items: List[PlannerRow]


class PlannerItem(BaseModel):
    """Schema for a displayed planner row."""
    entry_id: int  # 0 while not persisted
    template_id: int
    name: str
    category: str
    amount: int
    is_done: bool


class PlannerState(BaseModel):
    """Schema for a month's planner with totals."""
    month: str = ""
    month_label: str = ""
    mode: PlannerMode = PlannerMode.CREATE
    is_loading: bool = True
    items: List[PlannerItem] = []
    total_inflows: int = 0
    total_outflows: int = 0
    net_balance: int = 0


class PlannerDeleted(BaseModel):
    """Schema for planner deletion response."""
    month: str
    deleted: int
