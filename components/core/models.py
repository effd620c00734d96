"""Internal bookkeeping tables."""

from sqlalchemy import Column, Integer

from components.core.database import Base


class SchemaVersion(Base):
    """Single-row record of the schema version the store was built with."""
    __tablename__ = "schema_version"

    id = Column(Integer, primary_key=True)
    version = Column(Integer, nullable=False)
