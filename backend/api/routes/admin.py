from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.database import get_db
from services import storage
from services.seeder import initialize_default_data


router = APIRouter()


logger = logging.getLogger(__name__)


@router.post("/seed")
def seed_default_data(db: Session = Depends(get_db)) -> dict:
    report = initialize_default_data(db)
    return {
        "ok": True,
        "teachers_created": report.teachers_created,
        "grade_sections_created": report.grade_sections_created,
    }


@router.post("/clear")
def clear_all_data(db: Session = Depends(get_db)) -> dict:
    storage.clear_all_data(db)
    logger.warning("Cleared all teachers and schedule slots")
    return {"ok": True}
