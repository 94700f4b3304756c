"""Base model classes for the scoring database."""

from sqlalchemy import Column, DateTime, Integer, func
from sqlalchemy.orm import declarative_base


class Base:
    """Base class for all database models."""

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


# Create the declarative base
Base = declarative_base(cls=Base)
