from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from pydantic.aliases import AliasChoices

from models.schedule_slot import DAYS, PERIODS


def normalize_day(value: str) -> str:
    day = str(value).strip().capitalize()
    if day not in DAYS:
        raise ValueError(f"day must be one of {', '.join(DAYS)}")
    return day


def normalize_period(value: int) -> int:
    if int(value) not in PERIODS:
        raise ValueError(f"period must be between {PERIODS[0]} and {PERIODS[-1]}")
    return int(value)


class ScheduleSlotBase(BaseModel):
    teacher_id: uuid.UUID = Field(validation_alias=AliasChoices("teacher_id", "teacherId"))
    grade: int = Field(ge=1)
    section: int = Field(ge=1)
    day: str
    period: int

    @field_validator("day")
    @classmethod
    def _normalize_day(cls, v: str) -> str:
        return normalize_day(v)

    @field_validator("period")
    @classmethod
    def _normalize_period(cls, v: int) -> int:
        return normalize_period(v)


class ScheduleSlotCreate(ScheduleSlotBase):
    pass


class ScheduleSlotUpdate(BaseModel):
    teacher_id: uuid.UUID | None = Field(default=None, validation_alias=AliasChoices("teacher_id", "teacherId"))
    grade: int | None = Field(default=None, ge=1)
    section: int | None = Field(default=None, ge=1)
    day: str | None = None
    period: int | None = None

    @field_validator("day")
    @classmethod
    def _normalize_day(cls, v: str | None) -> str | None:
        return None if v is None else normalize_day(v)

    @field_validator("period")
    @classmethod
    def _normalize_period(cls, v: int | None) -> int | None:
        return None if v is None else normalize_period(v)


class ScheduleSlotOut(BaseModel):
    id: uuid.UUID
    teacher_id: uuid.UUID
    grade: int
    section: int
    day: str
    period: int
    created_at: datetime

    class Config:
        from_attributes = True
