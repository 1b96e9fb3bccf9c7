from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from core.database import get_db
from schemas.schedule_slot import ScheduleSlotOut
from schemas.teacher import TeacherCreate, TeacherOut, TeacherUpdate
from services import storage


router = APIRouter()


logger = logging.getLogger(__name__)


@router.get("/", response_model=list[TeacherOut])
def list_teachers(db: Session = Depends(get_db)) -> list[TeacherOut]:
    return storage.list_teachers(db)


@router.post("/", response_model=TeacherOut, status_code=201)
def create_teacher(payload: TeacherCreate, db: Session = Depends(get_db)) -> TeacherOut:
    teacher = storage.create_teacher(db, name=payload.name, subject=payload.subject)
    logger.info("Created teacher %s (%s)", teacher.id, teacher.name)
    return teacher


@router.get("/{teacher_id}", response_model=TeacherOut)
def get_teacher(teacher_id: uuid.UUID, db: Session = Depends(get_db)) -> TeacherOut:
    teacher = storage.get_teacher(db, teacher_id)
    if teacher is None:
        raise HTTPException(status_code=404, detail="TEACHER_NOT_FOUND")
    return teacher


@router.patch("/{teacher_id}", response_model=TeacherOut)
def update_teacher(teacher_id: uuid.UUID, payload: TeacherUpdate, db: Session = Depends(get_db)) -> TeacherOut:
    updates = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    teacher = storage.update_teacher(db, teacher_id, updates)
    if teacher is None:
        raise HTTPException(status_code=404, detail="TEACHER_NOT_FOUND")
    return teacher


@router.delete("/{teacher_id}")
def delete_teacher(teacher_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    # Slots that reference the teacher are left in place.
    if not storage.delete_teacher(db, teacher_id):
        raise HTTPException(status_code=404, detail="TEACHER_NOT_FOUND")
    return {"ok": True}


@router.get("/{teacher_id}/schedule-slots", response_model=list[ScheduleSlotOut])
def list_teacher_schedule_slots(teacher_id: uuid.UUID, db: Session = Depends(get_db)) -> list[ScheduleSlotOut]:
    return storage.list_teacher_schedule_slots(db, teacher_id)


@router.delete("/{teacher_id}/schedule-slots")
def delete_teacher_schedule_slots(teacher_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    deleted = storage.delete_teacher_schedule_slots(db, teacher_id)
    return {"ok": True, "deleted": deleted}
