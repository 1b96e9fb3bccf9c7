"""Teacher double-booking detection for one class (grade/section) weekly grid.

A class schedule is edited as a sparse overlay of staged cells on top of the
persisted slots. The effective value of a cell is the staged value when the
cell was touched, otherwise the persisted one. Conflict detection runs over the
effective schedule and the full slot set of every other class.

Everything here is pure: no session, no I/O.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Iterable, Mapping, NamedTuple, Protocol

from models.schedule_slot import DAYS, PERIODS


_DAY_INDEX = {d: i for i, d in enumerate(DAYS)}


class SlotLike(Protocol):
    teacher_id: uuid.UUID
    grade: int
    section: int
    day: str
    period: int


class TeacherLike(Protocol):
    id: uuid.UUID
    name: str


class CellKey(NamedTuple):
    day: str
    period: int

    def sort_key(self) -> tuple[int, int]:
        return (_DAY_INDEX.get(self.day, len(DAYS)), int(self.period))


def iter_cells() -> Iterable[CellKey]:
    for day in DAYS:
        for period in PERIODS:
            yield CellKey(day, period)


@dataclass(frozen=True)
class CellChange:
    day: str
    period: int
    teacher_id: uuid.UUID | None

    @property
    def key(self) -> CellKey:
        return CellKey(self.day, int(self.period))


@dataclass(frozen=True)
class Conflict:
    day: str
    period: int
    descriptions: list[str]


def _as_uuid(value) -> uuid.UUID | None:
    if value is None or value == "":
        return None
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def effective_assignments(
    base_slots: Iterable[SlotLike],
    overlay: Mapping[CellKey, uuid.UUID | None],
) -> dict[CellKey, uuid.UUID]:
    """Merge staged cells over the persisted slots of a single class.

    Overlay entries without a teacher remove the cell.
    """
    merged: dict[CellKey, uuid.UUID] = {}
    for s in base_slots:
        merged[CellKey(str(s.day), int(s.period))] = s.teacher_id
    for key, teacher_id in overlay.items():
        tid = _as_uuid(teacher_id)
        if tid is None:
            merged.pop(key, None)
        else:
            merged[key] = tid
    return merged


def describe_collision(teacher_name: str, grade: int, section: int) -> str:
    return f"{teacher_name} (conflicts with class {grade}/{section})"


def detect_conflicts(
    grade: int,
    section: int,
    assignments: Mapping[CellKey, uuid.UUID | None],
    existing_slots: Iterable[SlotLike],
    teachers: Iterable[TeacherLike],
) -> list[Conflict]:
    """Find teachers of the target class who are also booked in another class at the same cell.

    Cells are scanned in day-then-period order. A teacher id that does not resolve to a known
    teacher is skipped.
    """
    by_id = {t.id: t for t in teachers}
    slots = list(existing_slots)
    grade, section = int(grade), int(section)

    conflicts: list[Conflict] = []
    for cell in iter_cells():
        teacher_id = _as_uuid(assignments.get(cell))
        if teacher_id is None:
            continue
        teacher = by_id.get(teacher_id)
        if teacher is None:
            continue

        descriptions = [
            describe_collision(teacher.name, s.grade, s.section)
            for s in slots
            if s.teacher_id == teacher_id
            and s.day == cell.day
            and int(s.period) == cell.period
            and (int(s.grade) != grade or int(s.section) != section)
        ]
        if descriptions:
            conflicts.append(Conflict(day=cell.day, period=cell.period, descriptions=descriptions))

    return conflicts


@dataclass
class ScheduleDraft:
    """Staged, unsaved edits to one class schedule.

    The draft survives a failed save so the edits can be retried; call discard() after a
    successful one.
    """

    grade: int
    section: int
    base_slots: list = field(default_factory=list)
    _staged: dict[CellKey, uuid.UUID | None] = field(default_factory=dict, init=False, repr=False)

    def stage(self, day: str, period: int, teacher_id: uuid.UUID | str | None) -> None:
        self._staged[CellKey(day, int(period))] = _as_uuid(teacher_id)

    def stage_all(self, changes: Iterable[CellChange]) -> None:
        for c in changes:
            self.stage(c.day, c.period, c.teacher_id)

    def teacher_for(self, day: str, period: int) -> uuid.UUID | None:
        key = CellKey(day, int(period))
        if key in self._staged:
            return self._staged[key]
        for s in self.base_slots:
            if s.day == day and int(s.period) == int(period):
                return s.teacher_id
        return None

    @property
    def has_changes(self) -> bool:
        return bool(self._staged)

    def changed_cells(self) -> list[CellChange]:
        keys = sorted(self._staged, key=CellKey.sort_key)
        return [CellChange(day=k.day, period=k.period, teacher_id=self._staged[k]) for k in keys]

    def effective(self) -> dict[CellKey, uuid.UUID]:
        return effective_assignments(self.base_slots, self._staged)

    def conflicts(self, all_slots: Iterable[SlotLike], teachers: Iterable[TeacherLike]) -> list[Conflict]:
        return detect_conflicts(self.grade, self.section, self.effective(), all_slots, teachers)

    def discard(self) -> None:
        self._staged.clear()
