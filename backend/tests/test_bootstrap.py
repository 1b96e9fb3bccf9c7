from sqlalchemy import create_engine, inspect
from sqlalchemy.pool import StaticPool

from core.bootstrap import bootstrap_database
from services.seeder import DEFAULT_TEACHERS


def test_bootstrap_creates_tables_and_seeds_once():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    first = bootstrap_database(engine)
    second = bootstrap_database(engine)

    assert set(inspect(engine).get_table_names()) >= {"teachers", "schedule_slots", "grade_sections"}
    assert first.teachers_created == len(DEFAULT_TEACHERS)
    assert first.grade_sections_created == 3
    assert (second.teachers_created, second.grade_sections_created) == (0, 0)
    engine.dispose()
