from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Integer, Text, Uuid
from sqlalchemy.sql import func

from models.base import Base


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    subject = Column(Text, nullable=False)
    # Insertion order; rows created in one transaction share created_at.
    position = Column(Integer, nullable=False, default=0, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
