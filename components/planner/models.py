"""Planner entry model for the database."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from components.core.database import Base


class PlannerEntry(Base):
    """Planned amount and completion of one template in one month."""
    __tablename__ = "planner_entries"
    __table_args__ = (
        UniqueConstraint("planner_month", "template_id", name="uix_planner_month_template"),
    )

    id = Column(Integer, primary_key=True, index=True)
    planner_month = Column(String(7), nullable=False, index=True)  # "YYYY-MM"
    template_id = Column(
        Integer, ForeignKey("item_templates.id", ondelete="CASCADE"), nullable=False
    )
    amount = Column(Integer, nullable=False, default=0)  # minor currency units
    is_done = Column(Boolean, nullable=False, default=False)

    # Relationship with ItemTemplate
    template = relationship("ItemTemplate", back_populates="entries")
