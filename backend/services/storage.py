from __future__ import annotations

import json
import uuid
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from models.grade_section import GradeSection
from models.schedule_slot import ScheduleSlot
from models.teacher import Teacher


# Returned for a single grade with no stored record.
FALLBACK_SECTIONS: list[int] = [1, 2, 3, 4, 5, 6, 7]

DEFAULT_GRADE_SECTIONS: dict[int, list[int]] = {
    10: [1, 2, 3, 4, 5, 6, 7, 8],
    11: [1, 2, 3, 4, 5, 6, 7, 8],
    12: [1, 2, 3, 4, 5, 6, 7],
}


def encode_sections(sections: list[int]) -> str:
    return json.dumps([int(s) for s in sections])


def decode_sections(raw: str) -> list[int]:
    return [int(s) for s in json.loads(raw)]


# Teachers


def get_teacher(db: Session, teacher_id: uuid.UUID) -> Teacher | None:
    return db.get(Teacher, teacher_id)


def list_teachers(db: Session) -> list[Teacher]:
    q = select(Teacher).order_by(Teacher.position.asc(), Teacher.created_at.asc())
    return list(db.execute(q).scalars().all())


def create_teacher(db: Session, *, name: str, subject: str, commit: bool = True) -> Teacher:
    position = db.execute(select(func.coalesce(func.max(Teacher.position), 0))).scalar_one() + 1
    teacher = Teacher(id=uuid.uuid4(), name=name, subject=subject, position=position)
    db.add(teacher)
    if commit:
        db.commit()
        db.refresh(teacher)
    else:
        # Later calls in the same transaction must see this position.
        db.flush()
    return teacher


def update_teacher(db: Session, teacher_id: uuid.UUID, updates: dict[str, Any]) -> Teacher | None:
    teacher = db.get(Teacher, teacher_id)
    if teacher is None:
        return None
    for k, v in updates.items():
        setattr(teacher, k, v)
    db.commit()
    db.refresh(teacher)
    return teacher


def delete_teacher(db: Session, teacher_id: uuid.UUID) -> bool:
    teacher = db.get(Teacher, teacher_id)
    if teacher is None:
        return False
    db.delete(teacher)
    db.commit()
    return True


# Schedule slots


def get_schedule_slot(db: Session, slot_id: uuid.UUID) -> ScheduleSlot | None:
    return db.get(ScheduleSlot, slot_id)


def list_schedule_slots(db: Session) -> list[ScheduleSlot]:
    q = select(ScheduleSlot).order_by(
        ScheduleSlot.grade.asc(),
        ScheduleSlot.section.asc(),
        ScheduleSlot.created_at.asc(),
    )
    return list(db.execute(q).scalars().all())


def list_teacher_schedule_slots(db: Session, teacher_id: uuid.UUID) -> list[ScheduleSlot]:
    q = select(ScheduleSlot).where(ScheduleSlot.teacher_id == teacher_id)
    return list(db.execute(q).scalars().all())


def list_class_schedule_slots(db: Session, *, grade: int, section: int) -> list[ScheduleSlot]:
    q = (
        select(ScheduleSlot)
        .where(ScheduleSlot.grade == int(grade))
        .where(ScheduleSlot.section == int(section))
    )
    return list(db.execute(q).scalars().all())


def create_schedule_slot(
    db: Session,
    *,
    teacher_id: uuid.UUID,
    grade: int,
    section: int,
    day: str,
    period: int,
    commit: bool = True,
) -> ScheduleSlot:
    slot = ScheduleSlot(
        id=uuid.uuid4(),
        teacher_id=teacher_id,
        grade=int(grade),
        section=int(section),
        day=day,
        period=int(period),
    )
    db.add(slot)
    if commit:
        db.commit()
        db.refresh(slot)
    return slot


def update_schedule_slot(db: Session, slot_id: uuid.UUID, updates: dict[str, Any]) -> ScheduleSlot | None:
    slot = db.get(ScheduleSlot, slot_id)
    if slot is None:
        return None
    for k, v in updates.items():
        setattr(slot, k, v)
    db.commit()
    db.refresh(slot)
    return slot


def delete_schedule_slot(db: Session, slot_id: uuid.UUID) -> bool:
    slot = db.get(ScheduleSlot, slot_id)
    if slot is None:
        return False
    db.delete(slot)
    db.commit()
    return True


def delete_teacher_schedule_slots(db: Session, teacher_id: uuid.UUID) -> int:
    result = db.execute(delete(ScheduleSlot).where(ScheduleSlot.teacher_id == teacher_id))
    db.commit()
    return int(result.rowcount or 0)


def delete_all_schedule_slots(db: Session) -> int:
    result = db.execute(delete(ScheduleSlot))
    db.commit()
    return int(result.rowcount or 0)


# Grade sections


def get_grade_sections(db: Session, grade: int) -> list[int]:
    row = db.execute(select(GradeSection).where(GradeSection.grade == int(grade))).scalar_one_or_none()
    if row is None:
        return list(FALLBACK_SECTIONS)
    return decode_sections(row.sections)


def set_grade_sections(db: Session, grade: int, sections: list[int]) -> list[int]:
    row = db.execute(select(GradeSection).where(GradeSection.grade == int(grade))).scalar_one_or_none()
    if row is None:
        row = GradeSection(id=uuid.uuid4(), grade=int(grade), sections=encode_sections(sections))
        db.add(row)
    else:
        row.sections = encode_sections(sections)
    db.commit()
    return decode_sections(row.sections)


def get_all_grade_sections(db: Session) -> dict[int, list[int]]:
    rows = db.execute(select(GradeSection).order_by(GradeSection.grade.asc())).scalars().all()
    out = {int(r.grade): decode_sections(r.sections) for r in rows}
    if not out:
        return {grade: list(sections) for grade, sections in DEFAULT_GRADE_SECTIONS.items()}
    return out


def count_grade_section_rows(db: Session) -> int:
    return len(db.execute(select(GradeSection.id)).all())


def clear_all_data(db: Session) -> None:
    """Delete every schedule slot and teacher. Grade-section configuration is kept."""
    db.execute(delete(ScheduleSlot))
    db.execute(delete(Teacher))
    db.commit()
