import os

# Must be set before the app modules build their settings and engine.
os.environ["DATABASE_URL"] = "sqlite+pysqlite://"
os.environ["BOOTSTRAP_ON_STARTUP"] = "false"

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from core.database import get_db
from main import app
from models.base import Base
from models.schedule_slot import ScheduleSlot
from models.teacher import Teacher


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def make_teacher(db_session):
    def _make(name: str, subject: str = "Mathematics") -> Teacher:
        teacher = Teacher(id=uuid.uuid4(), name=name, subject=subject)
        db_session.add(teacher)
        db_session.commit()
        return teacher

    return _make


@pytest.fixture()
def make_slot(db_session):
    def _make(teacher: Teacher | uuid.UUID, grade: int, section: int, day: str, period: int) -> ScheduleSlot:
        teacher_id = teacher.id if isinstance(teacher, Teacher) else teacher
        slot = ScheduleSlot(
            id=uuid.uuid4(),
            teacher_id=teacher_id,
            grade=grade,
            section=section,
            day=day,
            period=period,
        )
        db_session.add(slot)
        db_session.commit()
        return slot

    return _make
