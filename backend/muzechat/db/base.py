"""
Declarative base and shared model columns.
"""
from datetime import datetime
from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class BaseModel(Base):
    """Abstract base with an integer id and creation timestamp."""
    __abstract__ = True
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # Set in Python so ordering keeps sub-second precision on every backend
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
