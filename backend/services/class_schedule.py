from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Literal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.schedule_slot import ScheduleSlot
from services import storage
from services.conflicts import CellChange, CellKey, Conflict, ScheduleDraft


logger = logging.getLogger(__name__)


class ScheduleConflictError(Exception):
    """Raised when a class schedule save would double-book a teacher. Nothing is persisted."""

    def __init__(self, grade: int, section: int, conflicts: list[Conflict]):
        self.grade = grade
        self.section = section
        self.conflicts = conflicts
        super().__init__(f"{len(conflicts)} conflict(s) in class {grade}/{section}")


@dataclass(frozen=True)
class SaveResult:
    status: Literal["SAVED", "NO_CHANGES"]
    slots: list[ScheduleSlot]


def _sorted_slots(slots: Iterable[ScheduleSlot]) -> list[ScheduleSlot]:
    return sorted(slots, key=lambda s: CellKey(s.day, int(s.period)).sort_key())


def load_class_schedule(db: Session, *, grade: int, section: int) -> list[ScheduleSlot]:
    return _sorted_slots(storage.list_class_schedule_slots(db, grade=grade, section=section))


def build_draft(db: Session, *, grade: int, section: int, changes: Iterable[CellChange]) -> ScheduleDraft:
    draft = ScheduleDraft(
        grade=int(grade),
        section=int(section),
        base_slots=storage.list_class_schedule_slots(db, grade=grade, section=section),
    )
    draft.stage_all(changes)
    return draft


def find_conflicts(db: Session, draft: ScheduleDraft) -> list[Conflict]:
    return draft.conflicts(storage.list_schedule_slots(db), storage.list_teachers(db))


def apply_partial_update(
    db: Session,
    *,
    grade: int,
    section: int,
    changed_cells: Iterable[CellChange],
) -> list[ScheduleSlot]:
    """Merge the changed cells into the persisted schedule of one class.

    Only rows of (grade, section) are read or written. No conflict check is done here.
    Returns the slots persisted for the class afterwards, in calendar order.
    """
    grade, section = int(grade), int(section)
    existing = {
        CellKey(s.day, int(s.period)): s
        for s in storage.list_class_schedule_slots(db, grade=grade, section=section)
    }

    # Last edit wins when a cell appears more than once.
    latest = {c.key: c.teacher_id for c in changed_cells}

    created = updated = removed = 0
    try:
        for key, teacher_id in latest.items():
            slot = existing.get(key)
            if teacher_id is None:
                if slot is not None:
                    db.delete(slot)
                    existing.pop(key)
                    removed += 1
                continue

            if slot is None:
                existing[key] = storage.create_schedule_slot(
                    db,
                    teacher_id=teacher_id,
                    grade=grade,
                    section=section,
                    day=key.day,
                    period=key.period,
                    commit=False,
                )
                created += 1
            elif slot.teacher_id != teacher_id:
                slot.teacher_id = teacher_id
                updated += 1
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Partial update failed for class %s/%s", grade, section)
        raise

    logger.info(
        "Applied partial update to class %s/%s (created=%d updated=%d removed=%d)",
        grade,
        section,
        created,
        updated,
        removed,
    )
    return load_class_schedule(db, grade=grade, section=section)


def save_class_schedule(
    db: Session,
    *,
    grade: int,
    section: int,
    changed_cells: Iterable[CellChange],
) -> SaveResult:
    """Conflict-gated save of a sparse set of cell edits for one class."""
    changes = list(changed_cells)
    if not changes:
        return SaveResult(
            status="NO_CHANGES",
            slots=load_class_schedule(db, grade=grade, section=section),
        )

    draft = build_draft(db, grade=grade, section=section, changes=changes)
    conflicts = find_conflicts(db, draft)
    if conflicts:
        logger.warning("Rejected save for class %s/%s: %d conflict(s)", grade, section, len(conflicts))
        raise ScheduleConflictError(int(grade), int(section), conflicts)

    slots = apply_partial_update(db, grade=grade, section=section, changed_cells=draft.changed_cells())
    return SaveResult(status="SAVED", slots=slots)
