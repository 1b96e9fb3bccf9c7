from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.orm import Session

from models.grade_section import GradeSection
from services import storage


logger = logging.getLogger(__name__)


# (name, subject)
DEFAULT_TEACHERS: list[tuple[str, str]] = [
    ("Ahmed Al-Harbi", "Mathematics"),
    ("Khalid Al-Otaibi", "Mathematics"),
    ("Fahad Al-Qahtani", "Physics"),
    ("Saad Al-Dosari", "Chemistry"),
    ("Omar Al-Zahrani", "Biology"),
    ("Yousef Al-Shehri", "Arabic Language"),
    ("Ibrahim Al-Ghamdi", "Arabic Language"),
    ("Abdullah Al-Mutairi", "English Language"),
    ("Nasser Al-Anazi", "English Language"),
    ("Majed Al-Shammari", "Islamic Studies"),
    ("Turki Al-Subaie", "History"),
    ("Bandar Al-Juhani", "Geography"),
    ("Sultan Al-Malki", "Computer Science"),
    ("Faisal Al-Rashidi", "Physical Education"),
]


@dataclass(frozen=True)
class SeedReport:
    teachers_created: int
    grade_sections_created: int


def initialize_default_data(db: Session) -> SeedReport:
    """Insert the default roster and grade-section configs into an empty store.

    Each half is skipped when its table already has rows, so this is safe on every startup.
    """

    teachers_created = 0
    if not storage.list_teachers(db):
        for name, subject in DEFAULT_TEACHERS:
            storage.create_teacher(db, name=name, subject=subject, commit=False)
            teachers_created += 1

    grade_sections_created = 0
    if storage.count_grade_section_rows(db) == 0:
        for grade, sections in storage.DEFAULT_GRADE_SECTIONS.items():
            db.add(GradeSection(id=uuid.uuid4(), grade=grade, sections=storage.encode_sections(sections)))
            grade_sections_created += 1

    if teachers_created or grade_sections_created:
        db.commit()
        logger.info(
            "Seeded default data (teachers=%d, grade_sections=%d)",
            teachers_created,
            grade_sections_created,
        )

    return SeedReport(teachers_created=teachers_created, grade_sections_created=grade_sections_created)
