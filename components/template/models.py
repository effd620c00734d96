"""Item template model for the database."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from components.core.database import Base


class ItemTemplate(Base):
    """A recurring cash-flow line item the user plans against every month."""
    __tablename__ = "item_templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    category = Column(String(50), nullable=False, index=True)

    # Relationship with planner entries
    entries = relationship("PlannerEntry", back_populates="template", passive_deletes=True)
