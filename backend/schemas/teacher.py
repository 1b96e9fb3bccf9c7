from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class TeacherBase(BaseModel):
    name: str = Field(min_length=1)
    subject: str = Field(min_length=1)

    # Runs before min_length, so whitespace-only values are rejected.
    @field_validator("name", "subject", mode="before")
    @classmethod
    def _strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class TeacherCreate(TeacherBase):
    pass


class TeacherUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    subject: str | None = Field(default=None, min_length=1)

    @field_validator("name", "subject", mode="before")
    @classmethod
    def _strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class TeacherOut(TeacherBase):
    id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True
