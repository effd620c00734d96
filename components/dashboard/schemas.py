"""Pydantic schemas for the dashboard."""

from pydantic import BaseModel


class DashboardCard(BaseModel):
    """Schema for one saved month on the dashboard."""
    month: str
    month_label: str
    net_balance: int
