from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from schemas.class_schedule import (
    ClassScheduleSaveOut,
    ClassScheduleUpdate,
    ConflictOut,
    ConflictReportOut,
)
from schemas.schedule_slot import ScheduleSlotOut
from services import class_schedule
from services.conflicts import CellChange, Conflict


router = APIRouter()


def _to_changes(payload: ClassScheduleUpdate) -> list[CellChange]:
    return [CellChange(day=c.day, period=int(c.period), teacher_id=c.teacher_id) for c in payload.slots]


def _conflicts_out(conflicts: list[Conflict]) -> list[ConflictOut]:
    return [ConflictOut(day=c.day, period=c.period, descriptions=list(c.descriptions)) for c in conflicts]


@router.get("/{grade}/{section}", response_model=list[ScheduleSlotOut])
def get_class_schedule(
    grade: int = Path(ge=1),
    section: int = Path(ge=1),
    db: Session = Depends(get_db),
) -> list[ScheduleSlotOut]:
    return class_schedule.load_class_schedule(db, grade=grade, section=section)


@router.post("/{grade}/{section}/conflicts", response_model=ConflictReportOut)
def preview_class_schedule_conflicts(
    payload: ClassScheduleUpdate,
    grade: int = Path(ge=1),
    section: int = Path(ge=1),
    db: Session = Depends(get_db),
) -> ConflictReportOut:
    draft = class_schedule.build_draft(db, grade=grade, section=section, changes=_to_changes(payload))
    conflicts = class_schedule.find_conflicts(db, draft)
    return ConflictReportOut(
        grade=grade,
        section=section,
        has_conflicts=bool(conflicts),
        conflicts=_conflicts_out(conflicts),
    )


@router.patch("/{grade}/{section}", response_model=ClassScheduleSaveOut)
def save_class_schedule(
    payload: ClassScheduleUpdate,
    grade: int = Path(ge=1),
    section: int = Path(ge=1),
    db: Session = Depends(get_db),
) -> ClassScheduleSaveOut:
    if not payload.is_partial:
        raise HTTPException(status_code=400, detail="PARTIAL_UPDATE_REQUIRED")

    try:
        result = class_schedule.save_class_schedule(
            db,
            grade=grade,
            section=section,
            changed_cells=_to_changes(payload),
        )
    except class_schedule.ScheduleConflictError as exc:
        raise HTTPException(
            status_code=409,
            detail={
                "code": "SCHEDULE_CONFLICT",
                "conflicts": [c.model_dump() for c in _conflicts_out(exc.conflicts)],
            },
        )
    except IntegrityError:
        # Another save filled one of the cells between the read and the commit.
        db.rollback()
        raise HTTPException(status_code=409, detail="SLOT_ALREADY_OCCUPIED")

    return ClassScheduleSaveOut(
        status=result.status,
        grade=grade,
        section=section,
        slots=[ScheduleSlotOut.model_validate(s) for s in result.slots],
    )
