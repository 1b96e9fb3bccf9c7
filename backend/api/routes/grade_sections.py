from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from core.database import get_db
from schemas.grade_section import GradeSectionsOut, GradeSectionsPut
from services import storage


router = APIRouter()


@router.get("/", response_model=dict[int, list[int]])
def list_grade_sections(db: Session = Depends(get_db)) -> dict[int, list[int]]:
    return storage.get_all_grade_sections(db)


@router.get("/{grade}", response_model=GradeSectionsOut)
def get_grade_sections(grade: int = Path(ge=1), db: Session = Depends(get_db)) -> GradeSectionsOut:
    return GradeSectionsOut(grade=grade, sections=storage.get_grade_sections(db, grade))


@router.put("/{grade}", response_model=GradeSectionsOut)
def put_grade_sections(
    payload: GradeSectionsPut,
    grade: int = Path(ge=1),
    db: Session = Depends(get_db),
) -> GradeSectionsOut:
    sections = storage.set_grade_sections(db, grade, payload.sections)
    return GradeSectionsOut(grade=grade, sections=sections)
