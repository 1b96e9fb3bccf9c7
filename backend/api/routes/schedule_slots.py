from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from schemas.schedule_slot import ScheduleSlotCreate, ScheduleSlotOut, ScheduleSlotUpdate
from services import storage


router = APIRouter()


@router.get("/", response_model=list[ScheduleSlotOut])
def list_schedule_slots(
    teacher_id: uuid.UUID | None = Query(default=None, alias="teacherId"),
    grade: int | None = Query(default=None, ge=1),
    section: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
) -> list[ScheduleSlotOut]:
    if (grade is None) != (section is None):
        raise HTTPException(status_code=400, detail="GRADE_AND_SECTION_REQUIRED_TOGETHER")

    if teacher_id is not None:
        rows = storage.list_teacher_schedule_slots(db, teacher_id)
    elif grade is not None:
        rows = storage.list_class_schedule_slots(db, grade=grade, section=section)
    else:
        return storage.list_schedule_slots(db)

    if teacher_id is not None and grade is not None:
        rows = [r for r in rows if r.grade == grade and r.section == section]
    return rows


@router.get("/{slot_id}", response_model=ScheduleSlotOut)
def get_schedule_slot(slot_id: uuid.UUID, db: Session = Depends(get_db)) -> ScheduleSlotOut:
    slot = storage.get_schedule_slot(db, slot_id)
    if slot is None:
        raise HTTPException(status_code=404, detail="SCHEDULE_SLOT_NOT_FOUND")
    return slot


@router.post("/", response_model=ScheduleSlotOut, status_code=201)
def create_schedule_slot(payload: ScheduleSlotCreate, db: Session = Depends(get_db)) -> ScheduleSlotOut:
    try:
        return storage.create_schedule_slot(db, **payload.model_dump())
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="SLOT_ALREADY_OCCUPIED")


@router.patch("/{slot_id}", response_model=ScheduleSlotOut)
def update_schedule_slot(
    slot_id: uuid.UUID,
    payload: ScheduleSlotUpdate,
    db: Session = Depends(get_db),
) -> ScheduleSlotOut:
    updates = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    try:
        slot = storage.update_schedule_slot(db, slot_id, updates)
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="SLOT_ALREADY_OCCUPIED")
    if slot is None:
        raise HTTPException(status_code=404, detail="SCHEDULE_SLOT_NOT_FOUND")
    return slot


@router.delete("/{slot_id}")
def delete_schedule_slot(slot_id: uuid.UUID, db: Session = Depends(get_db)) -> dict:
    if not storage.delete_schedule_slot(db, slot_id):
        raise HTTPException(status_code=404, detail="SCHEDULE_SLOT_NOT_FOUND")
    return {"ok": True}


@router.delete("/")
def delete_all_schedule_slots(db: Session = Depends(get_db)) -> dict:
    deleted = storage.delete_all_schedule_slots(db)
    return {"ok": True, "deleted": deleted}
