"""
Template Model - a named, saved post record.

The post itself is stored as a serialized JSON text blob; the canonical
shape lives in pawpost.schemas.posts and is validated on the way in and out.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime

from pawpost.db.base import Base


class Template(Base):
    __tablename__ = "templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    data = Column(Text, nullable=False)

    # Both set explicitly by the store so a fresh row has created_at == updated_at
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
