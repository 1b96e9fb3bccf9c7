from __future__ import annotations

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.sql import func

from models.base import Base


# School week and daily periods, in display order.
DAYS: tuple[str, ...] = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday")
PERIODS: tuple[int, ...] = (1, 2, 3, 4, 5, 6, 7)


class ScheduleSlot(Base):
    __tablename__ = "schedule_slots"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # No foreign key: deleting a teacher leaves its slots dangling.
    teacher_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    grade = Column(Integer, nullable=False)
    section = Column(Integer, nullable=False)
    day = Column(Text, nullable=False)
    period = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint(
            "day in (" + ", ".join(f"'{d}'" for d in DAYS) + ")",
            name="ck_schedule_slots_day",
        ),
        CheckConstraint(
            f"period >= {PERIODS[0]} and period <= {PERIODS[-1]}",
            name="ck_schedule_slots_period",
        ),
        UniqueConstraint("grade", "section", "day", "period", name="uq_schedule_slots_class_cell"),
    )
