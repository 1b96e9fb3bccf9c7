from __future__ import annotations

import uuid

from sqlalchemy import Column, Integer, Text, Uuid

from models.base import Base


class GradeSection(Base):
    __tablename__ = "grade_sections"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    grade = Column(Integer, nullable=False, unique=True)
    # JSON-encoded ordered list of section numbers, e.g. "[1, 2, 3]".
    sections = Column(Text, nullable=False)
