from __future__ import annotations

import uuid
from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic.aliases import AliasChoices

from schemas.schedule_slot import ScheduleSlotOut, normalize_day, normalize_period


class CellChangeIn(BaseModel):
    day: str
    period: int
    # Empty string or null clears the cell.
    teacher_id: uuid.UUID | None = Field(default=None, validation_alias=AliasChoices("teacher_id", "teacherId"))

    @field_validator("day")
    @classmethod
    def _normalize_day(cls, v: str) -> str:
        return normalize_day(v)

    @field_validator("period")
    @classmethod
    def _normalize_period(cls, v: int) -> int:
        return normalize_period(v)

    @field_validator("teacher_id", mode="before")
    @classmethod
    def _blank_teacher_is_clear(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v


class ClassScheduleUpdate(BaseModel):
    slots: list[CellChangeIn] = Field(default_factory=list)
    is_partial: bool = Field(default=True, validation_alias=AliasChoices("is_partial", "isPartial"))


class ConflictOut(BaseModel):
    day: str
    period: int
    descriptions: list[str]


class ConflictReportOut(BaseModel):
    grade: int
    section: int
    has_conflicts: bool
    conflicts: list[ConflictOut]


class ClassScheduleSaveOut(BaseModel):
    status: Literal["SAVED", "NO_CHANGES"]
    grade: int
    section: int
    slots: list[ScheduleSlotOut]
