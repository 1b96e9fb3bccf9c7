from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

import models  # noqa: F401  (registers every table on Base.metadata)
from core.database import ENGINE
from models.base import Base
from services.seeder import SeedReport, initialize_default_data


logger = logging.getLogger(__name__)


def bootstrap_database(engine: Engine | None = None) -> SeedReport:
    """Create missing tables and seed default data.

    Safe to run on every startup: create_all skips existing tables and the seeder only
    fills empty ones.
    """

    engine = engine or ENGINE
    Base.metadata.create_all(bind=engine)

    session_factory = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    with session_factory() as db:
        report = initialize_default_data(db)

    logger.info(
        "Database bootstrap complete (teachers_created=%d, grade_sections_created=%d)",
        report.teachers_created,
        report.grade_sections_created,
    )
    return report
