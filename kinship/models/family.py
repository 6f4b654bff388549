"""ORM model for family records."""

from sqlalchemy import JSON, Column, Integer, String, Text

from kinship.models.base import Base


class Family(Base):
    """A family record; historical_names is a JSON list of former names."""

    __tablename__ = "families"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    notes = Column(Text, nullable=False, default="")
    historical_names = Column(JSON, nullable=False, default=list)
