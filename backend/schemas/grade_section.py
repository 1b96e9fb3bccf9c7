from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class GradeSectionsOut(BaseModel):
    grade: int
    sections: list[int]


class GradeSectionsPut(BaseModel):
    sections: list[int] = Field(min_length=1)

    @field_validator("sections")
    @classmethod
    def _validate_sections(cls, v: list[int]) -> list[int]:
        if any(int(s) < 1 for s in v):
            raise ValueError("section numbers must be >= 1")
        if len(set(v)) != len(v):
            raise ValueError("section numbers must be unique")
        return [int(s) for s in v]
